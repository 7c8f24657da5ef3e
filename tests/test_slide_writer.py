"""
tests/test_slide_writer.py — Tests for the chat → slides agent

Uses a mocked generator to test parse, fence stripping and retry logic.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from agents.slide_writer import SlideWriterAgent, WriteResult, _strip_fences
from slidegen.services.generation import RateLimitedError
from slidegen.slidetext.models import ChatMessage, Role, SlideStyle

# ── Helpers ─────────────────────────────────────────────────────────

SAMPLE_REPLY = Path(__file__).parent.parent / "docs" / "examples" / "sample_reply.txt"

MESSAGES = [ChatMessage(role=Role.USER, content="Make a deck about marketing")]


def _make_agent(*replies) -> SlideWriterAgent:
    """Create agent with a mocked generator returning `replies` in order."""
    generator = MagicMock()
    generator.generate.side_effect = list(replies)
    return SlideWriterAgent(generator=generator)


# ── strip_fences helper ─────────────────────────────────────────────


class TestStripFences:
    def test_no_fences(self):
        assert _strip_fences("hello world") == "hello world"

    def test_basic_fences(self):
        assert _strip_fences("```\nsome text\n```") == "some text"

    def test_language_fences(self):
        assert _strip_fences("```text\nTitle: A\n• x\n```") == "Title: A\n• x"

    def test_no_closing_fence(self):
        assert _strip_fences("```\nopen ended") == "open ended"


# ── write() ─────────────────────────────────────────────────────────


class TestWrite:
    def test_parses_reply(self):
        agent = _make_agent(SAMPLE_REPLY.read_text(encoding="utf-8"))
        result = agent.write(MESSAGES)
        assert isinstance(result, WriteResult)
        assert result.ok
        assert result.attempts == 1
        assert len(result.deck.slides) == 5
        assert result.deck.slides[0].style == SlideStyle.TITLE

    def test_fenced_reply(self):
        agent = _make_agent("```\nTitle: A\n• x\n```")
        result = agent.write(MESSAGES)
        assert result.text == "Title: A\n• x"
        assert result.deck.slides[0].title == "A"

    def test_retries_empty_reply_with_feedback(self):
        agent = _make_agent("```\n```", "Title: A\n• x")
        result = agent.write(MESSAGES)
        assert result.ok
        assert result.attempts == 2
        assert len(result.parse_errors) == 1

        retry_turn = agent.generator.generate.call_args_list[1].args[0]
        assert retry_turn[0] == MESSAGES[0]
        assert retry_turn[-1].role == Role.USER
        assert "could not be turned into slides" in retry_turn[-1].content

    def test_gives_up_after_retries(self):
        agent = _make_agent("```\n```", "```\n```", "```\n```")
        result = agent.write(MESSAGES)
        assert not result.ok
        assert result.deck is None
        assert result.attempts == 3
        assert len(result.parse_errors) == 3

    def test_generation_errors_propagate(self):
        agent = _make_agent(RateLimitedError())
        with pytest.raises(RateLimitedError):
            agent.write(MESSAGES)

    def test_does_not_mutate_history(self):
        agent = _make_agent("```\n```", "Title: A\n• x")
        history = list(MESSAGES)
        agent.write(history)
        assert history == MESSAGES
