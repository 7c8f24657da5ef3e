"""
agents/slide_writer.py — Chat → Slide Text Agent

Takes the conversation so far, asks the generator for slide text and
parses it into a SlideDeck. This is the primary user-facing agent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from slidegen.services.generation import SlideTextGenerator
from slidegen.slidetext.models import ChatMessage, Role, SlideDeck
from slidegen.slidetext.parser import NoContentError, SlideTextParser


@dataclass
class WriteResult:
    """Output from the slide writer agent."""

    text: str
    deck: Optional[SlideDeck]  # parsed result (None if every attempt was empty)
    attempts: int
    parse_errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.deck is not None


class SlideWriterAgent:
    """
    Turns a chat history into parsed slides.

    Replies that parse into nothing are retried with the parse error fed
    back as a follow-up user turn. Generation errors are not retried here;
    the generator has its own retry policy and the caller classifies them.
    """

    MAX_RETRIES = 2

    def __init__(
        self,
        generator: Optional[SlideTextGenerator] = None,
        parser: Optional[SlideTextParser] = None,
        model: str = "claude-sonnet-4-6",
        api_key: Optional[str] = None,
    ):
        self.generator = generator or SlideTextGenerator(model=model, api_key=api_key)
        self.parser = parser or SlideTextParser()

    def write(self, messages: list[ChatMessage]) -> WriteResult:
        """
        Generate and parse slides for the conversation.

        Flow:
        1. Call the generator with the history
        2. Strip code fences, parse
        3. On NoContentError, retry with error feedback (max 2 times)
        """
        text = ""
        parse_errors: list[str] = []
        attempt = 0

        for attempt in range(1, 2 + self.MAX_RETRIES):
            if attempt == 1:
                turn = list(messages)
            else:
                turn = list(messages) + [
                    ChatMessage(role=Role.ASSISTANT, content=text or "(empty reply)"),
                    ChatMessage(role=Role.USER, content=self._retry_prompt(parse_errors)),
                ]

            text = _strip_fences(self.generator.generate(turn))

            try:
                deck = self.parser.parse(text)
            except NoContentError as e:
                parse_errors.append(f"Parse error on attempt {attempt}: {e}")
                continue

            return WriteResult(text=text, deck=deck, attempts=attempt, parse_errors=parse_errors)

        return WriteResult(text=text, deck=None, attempts=attempt, parse_errors=parse_errors)

    def _retry_prompt(self, errors: list[str]) -> str:
        return (
            "Your previous reply could not be turned into slides:\n"
            + "\n".join(f"- {e}" for e in errors)
            + "\n\nPlease answer again using the Title:/Style:/• slide format."
        )


# ── Helpers ────────────────────────────────────────────────────────


def _strip_fences(text: str) -> str:
    """Remove markdown code fences if present."""
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        # Remove first line (```text or ```)
        lines = lines[1:]
        # Remove last line if it's ```
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)
    return text
