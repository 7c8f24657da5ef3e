"""
slidegen/slidetext/content.py — Content line extraction

Three tiers, tried in order; the first that yields at least one line wins:

  1. bullets      explicit •, -, *, N. or a) markers
  2. prose        sentence-split the remaining lines
  3. placeholder  a single generic line

Metadata lines (title, Style:, Data:) are excluded by index before any tier runs.
"""

from __future__ import annotations

import re
from collections.abc import Collection

from .markers import has_list_marker, strip_list_marker
from .models import ContentTier, TierResult

PLACEHOLDER = "Key points to be discussed"

RE_SENTENCE_END = re.compile(r"[.!?](?=\s|$)")
_MARKER_WORDS = ("title:", "style:", "data:")


def _body_lines(lines: list[str], metadata_indices: Collection[int]) -> list[str]:
    return [line for i, line in enumerate(lines) if i not in metadata_indices and line.strip()]


def bullet_tier(body: list[str]) -> TierResult:
    items = [strip_list_marker(line) for line in body if has_list_marker(line)]
    return TierResult(tier=ContentTier.BULLETS, lines=tuple(i for i in items if i))


def paragraph_to_bullets(paragraph: str) -> list[str]:
    """Split prose into sentences and tidy each one into a bullet."""
    bullets = []
    for sentence in RE_SENTENCE_END.split(paragraph):
        sentence = strip_list_marker(sentence)
        if sentence:
            bullets.append(sentence[0].upper() + sentence[1:])
    return bullets


def prose_tier(body: list[str]) -> TierResult:
    prose = [line.strip() for line in body if not any(w in line.lower() for w in _MARKER_WORDS)]
    return TierResult(tier=ContentTier.PROSE, lines=tuple(paragraph_to_bullets(" ".join(prose))))


def placeholder_tier() -> TierResult:
    return TierResult(tier=ContentTier.PLACEHOLDER, lines=(PLACEHOLDER,))


def extract_content_tiered(lines: list[str], metadata_indices: Collection[int]) -> TierResult:
    """Run the tiers and return the winning result."""
    body = _body_lines(lines, metadata_indices)
    for tier in (bullet_tier, prose_tier):
        result = tier(body)
        if result.matched:
            return result
    return placeholder_tier()


def extract_content(lines: list[str], metadata_indices: Collection[int]) -> list[str]:
    """Ordered, non-empty content lines for a block. Never returns an empty list."""
    return list(extract_content_tiered(lines, metadata_indices).lines)
