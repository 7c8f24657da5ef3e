"""
slidegen/slidetext/segmenter.py — Split normalized text into slide blocks.
"""

from __future__ import annotations

import re

from .normalizer import BULLET

RE_BLOCK_SPLIT = re.compile(r"\n[ \t]*\n")
RE_ORDINAL_MARKER = re.compile(r"^(?:section|slide)\s*\d*:?", re.IGNORECASE)


def split_lines(block: str) -> list[str]:
    """Split a block into lines, dropping blank ones. Lines keep their text as-is."""
    return [line for line in block.split("\n") if line.strip()]


def is_slide_like(block: str) -> bool:
    """A block looks like a slide if its first line carries a title/ordinal
    marker or if it contains a bullet anywhere."""
    lines = split_lines(block)
    if not lines:
        return False
    first = lines[0].strip()
    if "title:" in first.lower():
        return True
    if RE_ORDINAL_MARKER.match(first):
        return True
    return BULLET in block


def segment(normalized: str) -> list[str]:
    """Return the slide-like blocks of `normalized`, in document order.

    An empty list means no block qualified and the caller should fall
    back to treating the whole document as one slide.
    """
    blocks = [b.strip() for b in RE_BLOCK_SPLIT.split(normalized)]
    return [b for b in blocks if b and is_slide_like(b)]
