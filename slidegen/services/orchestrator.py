"""
slidegen/services/orchestrator.py — End-to-End Pipeline Orchestrator

Coordinates the full flow:
  Prompt → ChatSession history → SlideWriterAgent (generate + parse) → Render → .pptx
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from slidegen.renderer.pptx_renderer import check_style_table, render
from slidegen.services.generation import GenerationError, SlideTextGenerator, sanitize_prompt
from slidegen.slidetext.models import ChatMessage, Role, SlideDeck, StyleTable
from slidegen.slidetext.parser import NoContentError, SlideTextParser
from agents.slide_writer import SlideWriterAgent, WriteResult

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for the generation pipeline."""

    # Agent
    model: str = "claude-sonnet-4-6"
    api_key: Optional[str] = None  # falls back to ANTHROPIC_API_KEY
    max_tokens: int = 4000
    temperature: float = 0.7

    # Transport retries (5xx / network)
    max_retries: int = 3
    retry_delay_s: float = 1.0
    backoff_factor: float = 2.0

    # Prompt handling
    sanitize_prompts: bool = True

    # Rendering
    output_dir: str = "./output"
    render_pptx: bool = True

    # Parsing
    style_table: Optional[StyleTable] = None


@dataclass
class PipelineResult:
    """Result from the full generation pipeline."""

    text: str
    deck: Optional[SlideDeck]
    output_path: Optional[Path] = None
    slide_count: int = 0
    errors: list[str] = field(default_factory=list)


class ChatSession:
    """
    Ordered conversation with the slide writer.

    A failed turn, or one whose reply yields no slides, leaves the history
    exactly as it was before the call.
    """

    def __init__(self, agent: SlideWriterAgent, sanitize: bool = True):
        self.agent = agent
        self.sanitize = sanitize
        self.messages: list[ChatMessage] = []

    def send(self, prompt: str) -> WriteResult:
        """Append a user turn, generate, and record the assistant reply."""
        content = sanitize_prompt(prompt) if self.sanitize else prompt.strip()
        if not content:
            raise ValueError("Prompt is empty")

        self.messages.append(ChatMessage(role=Role.USER, content=content))
        try:
            result = self.agent.write(self.messages)
        except Exception:
            self.messages.pop()
            raise

        if result.deck is None:
            self.messages.pop()
            return result

        self.messages.append(ChatMessage(role=Role.ASSISTANT, content=result.text))
        return result

    def last_reply(self) -> Optional[str]:
        for message in reversed(self.messages):
            if message.role == Role.ASSISTANT:
                return message.content
        return None

    def latest_deck(self) -> SlideDeck:
        """Parse the most recent assistant reply."""
        reply = self.last_reply()
        if reply is None:
            raise NoContentError("No assistant reply to build slides from yet")
        return self.agent.parser.parse(reply)

    def reset(self) -> None:
        self.messages.clear()


class Orchestrator:
    """
    End-to-end pipeline for slide generation.

    Usage:
        orch = Orchestrator(PipelineConfig(api_key="..."))
        result = orch.generate("Digital marketing trends for 2025")
        # result.output_path → path to generated .pptx

    A custom `style_table` is checked against the renderer palette up front;
    unknown colour tokens raise ValueError here rather than at render time.
    """

    def __init__(self, config: PipelineConfig, agent: Optional[SlideWriterAgent] = None):
        self.config = config
        if config.style_table is not None and config.render_pptx:
            check_style_table(config.style_table)
        self.parser = SlideTextParser(config.style_table)
        if agent is None:
            generator = SlideTextGenerator(
                model=config.model,
                api_key=config.api_key,
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                max_retries=config.max_retries,
                delay_s=config.retry_delay_s,
                backoff_factor=config.backoff_factor,
            )
            agent = SlideWriterAgent(generator=generator, parser=self.parser)
        self.agent = agent
        self.session = ChatSession(agent, sanitize=config.sanitize_prompts)

    def generate(self, prompt: str) -> PipelineResult:
        """Run one chat turn and, if it parsed, render the deck. Never raises."""
        try:
            written = self.session.send(prompt)
        except (GenerationError, ValueError) as e:
            logger.warning("Generation failed: %s", e)
            return PipelineResult(text="", deck=None, errors=[str(e)])

        result = PipelineResult(
            text=written.text,
            deck=written.deck,
            slide_count=len(written.deck.slides) if written.deck else 0,
            errors=list(written.parse_errors),
        )
        if written.deck is None:
            logger.warning("No slides after %d attempts", written.attempts)
            return result

        logger.info("Generated %d slides on attempt %d", result.slide_count, written.attempts)
        if self.config.render_pptx:
            result.output_path = self._render(written.deck, result)
        return result

    def parse_text(self, text: str) -> PipelineResult:
        """Parse (and render) a reply that was generated elsewhere. Never raises."""
        try:
            deck = self.parser.parse(text)
        except NoContentError as e:
            logger.warning("Parse failed: %s", e)
            return PipelineResult(text=text, deck=None, errors=[str(e)])

        result = PipelineResult(text=text, deck=deck, slide_count=len(deck.slides))
        if self.config.render_pptx:
            result.output_path = self._render(deck, result)
        return result

    def _render(self, deck: SlideDeck, result: PipelineResult) -> Optional[Path]:
        try:
            return render(deck, Path(self.config.output_dir))
        except (OSError, ValueError) as e:
            logger.warning("Rendering failed: %s", e)
            result.errors.append(f"Render error: {e}")
            return None
