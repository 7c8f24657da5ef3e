"""
slidegen/services/generation.py — Slide text generation over the Anthropic API

Sends the role-tagged chat history plus a fixed system instruction that
describes the slide text format (Title:/Style:/Data:/• markers) and
returns the model's raw reply. Transient failures (5xx, network) are
retried with exponential backoff; everything else is classified into a
GenerationError subclass carrying a user-facing message.

The SDK client is built with max_retries=0 and retries happen here, so a
429 surfaces at once instead of being retried by the SDK.
"""

from __future__ import annotations

import logging
import os
import re
import time
from typing import Optional

import anthropic

from slidegen.slidetext.models import ChatMessage, Role

logger = logging.getLogger(__name__)


# ── Errors ─────────────────────────────────────────────────────────


class GenerationError(Exception):
    """Base class for failures of the upstream text-generation call."""

    user_message = "Failed to generate presentation"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.user_message)


class MissingAPIKeyError(GenerationError):
    user_message = "Anthropic API key not configured"


class RateLimitedError(GenerationError):
    user_message = "Rate limit exceeded. Please wait a moment and try again."


class ServiceUnavailableError(GenerationError):
    user_message = "AI service is temporarily unavailable. Please try again later."


class MalformedResponseError(GenerationError):
    user_message = "Invalid response format from API"


class TransportError(GenerationError):
    user_message = "Failed to reach the AI service"


# ── Prompt Hygiene ─────────────────────────────────────────────────

_SANITIZE_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"^Title:", re.IGNORECASE | re.MULTILINE), "Section:"),
    (re.compile(r"^Style:", re.IGNORECASE | re.MULTILINE), "Type:"),
    (re.compile(r"^Data:", re.IGNORECASE | re.MULTILINE), "Info:"),
    (re.compile(r"^[•\-*][ \t]*", re.MULTILINE), ""),
)


def sanitize_prompt(prompt: str) -> str:
    """Rewrite line-leading format markers in user text so they cannot
    be mistaken for slide markers, and drop leading bullets."""
    for pattern, replacement in _SANITIZE_RULES:
        prompt = pattern.sub(replacement, prompt)
    return prompt.strip()


# ── Generator ──────────────────────────────────────────────────────


class SlideTextGenerator:
    """
    Generates slide text from a conversation using Claude.

    The Anthropic client's own retries are disabled; this class retries
    5xx and connection failures itself so the schedule is explicit.
    """

    _SYSTEM_PROMPT = """\
You are a presentation expert specializing in creating modern, engaging presentations. \
Format your responses as a structured presentation with the following rules:

1. Slide Structure:
- Each slide separated by two newlines
- Start with 'Title: [Slide Title]'
- Use '• ' for bullet points
- Include 'Style: [style]' after title to specify slide style (title, section, content, quote, data)
- For data slides, include 'Data: [type]' (chart, comparison, statistics)

2. Content Guidelines:
- Keep 4-6 bullet points per slide for readability
- Use clear, concise language
- Include engaging hooks and transitions
- Balance text with visual suggestions
- Group related content into sections

Example format:

Title: Transforming Ideas Into Reality
Style: title
• Your journey starts here
• Innovation meets execution
• Building the future together

Title: Market Overview
Style: data
Data: chart
• Market size: $50B by 2025
• 45% YoY growth rate
• Key segments: Enterprise (60%), SMB (30%), Consumer (10%)
• Emerging trends in AI and automation

Title: Strategic Approach
Style: content
• Implement data-driven decision making
• Foster cross-functional collaboration
• Leverage cutting-edge technologies
• Maintain agile methodology"""

    def __init__(
        self,
        model: str = "claude-sonnet-4-6",
        api_key: Optional[str] = None,
        max_tokens: int = 4000,
        temperature: float = 0.7,
        max_retries: int = 3,
        delay_s: float = 1.0,
        backoff_factor: float = 2.0,
    ):
        api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise MissingAPIKeyError()
        self.client = anthropic.Anthropic(api_key=api_key, max_retries=0)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_retries = max(1, max_retries)
        self.delay_s = delay_s
        self.backoff_factor = backoff_factor

    @property
    def system_prompt(self) -> str:
        return self._SYSTEM_PROMPT

    def generate(self, messages: list[ChatMessage]) -> str:
        """
        Send the conversation and return the generated slide text.

        Raises:
            GenerationError: one of its subclasses, classified from the API failure.
        """
        if not messages:
            raise ValueError("At least one message is required")

        payload = [
            {"role": "user" if m.role == Role.USER else "assistant", "content": m.content}
            for m in messages
        ]

        last_error: Optional[GenerationError] = None
        for attempt in range(self.max_retries):
            try:
                response = self.client.messages.create(
                    model=self.model,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                    system=self._SYSTEM_PROMPT,
                    messages=payload,
                )
                return self._extract_text(response)
            except anthropic.RateLimitError as e:
                raise RateLimitedError() from e
            except anthropic.InternalServerError as e:
                logger.warning(
                    "Generation attempt %d/%d failed with status %s",
                    attempt + 1,
                    self.max_retries,
                    e.status_code,
                )
                last_error = ServiceUnavailableError()
                last_error.__cause__ = e
            except anthropic.APIConnectionError as e:
                logger.warning(
                    "Generation attempt %d/%d could not connect: %s",
                    attempt + 1,
                    self.max_retries,
                    e,
                )
                last_error = TransportError(f"{TransportError.user_message}: {e}")
                last_error.__cause__ = e
            except anthropic.APIStatusError as e:
                raise TransportError(f"API error ({e.status_code}): {e.message}") from e

            # Don't wait after the last attempt
            if attempt < self.max_retries - 1:
                time.sleep(self.delay_s * self.backoff_factor**attempt)

        raise last_error or ServiceUnavailableError()

    @staticmethod
    def _extract_text(response) -> str:
        content = getattr(response, "content", None)
        if not content:
            raise MalformedResponseError()
        text = getattr(content[0], "text", None)
        if not isinstance(text, str) or not text.strip():
            raise MalformedResponseError()
        return text
