"""
slidegen/slidetext/parser.py — Slide text parser

Turns the free-form reply of a text-generation model into an ordered
SlideDeck. Intentionally lenient: missing markers, bullets or titles fall
back to defaults. The only failure is a document with no text at all.

    normalize → segment → (style, content) per block → SlideRecord
"""

from __future__ import annotations

import logging
from typing import Optional

from .content import extract_content
from .markers import strip_fallback_title_markers, strip_title_markers
from .models import SlideDeck, SlideRecord, SlideStyle, StyleTable
from .normalizer import normalize
from .segmenter import segment, split_lines
from .style import extract_data_subtype, extract_style, find_data_line

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Overview"


class NoContentError(ValueError):
    """Raised when generated text holds nothing a slide can be built from."""

    def __init__(self, message: str = "No valid content found in the response"):
        super().__init__(message)


class SlideTextParser:
    """Parses generated slide text → SlideDeck.

    The style table is owned by the parser; pass one in to override the
    color tokens stamped on each record.
    """

    def __init__(self, style_table: Optional[StyleTable] = None):
        self.style_table = style_table or StyleTable.default()

    def parse(self, text: str) -> SlideDeck:
        """Parse raw generated text. Raises NoContentError if there is nothing to parse."""
        normalized = normalize(text)
        blocks = segment(normalized)

        if not blocks:
            logger.debug("No slide-like blocks; treating whole document as one slide")
            return SlideDeck(slides=(self._parse_fallback(normalized),))

        slides = tuple(self._parse_block(block, i) for i, block in enumerate(blocks))
        logger.debug("Parsed %d slides", len(slides))
        return SlideDeck(slides=slides)

    def parse_file(self, path: str) -> SlideDeck:
        """Parse a saved model reply."""
        with open(path, "r", encoding="utf-8") as f:
            return self.parse(f.read())

    # ── Single Block ───────────────────────────────────────────────

    def _parse_block(self, block: str, index: int) -> SlideRecord:
        lines = split_lines(block)
        title = strip_title_markers(lines[0]) or f"Slide {index + 1}"

        match = extract_style(lines)
        metadata = {0}
        if match.explicit:
            metadata.add(match.line_index)

        data_subtype = None
        if match.style == SlideStyle.DATA:
            data_subtype = extract_data_subtype(lines, match.line_index)
            found = find_data_line(lines, match.line_index)
            if found is not None:
                metadata.add(found[0])

        return SlideRecord.build(
            title=title,
            content=extract_content(lines, metadata),
            style=match.style,
            data_subtype=data_subtype,
            table=self.style_table,
        )

    # ── Whole-Document Fallback ────────────────────────────────────

    def _parse_fallback(self, normalized: str) -> SlideRecord:
        lines = split_lines(normalized)
        if not lines:
            raise NoContentError()

        title = strip_fallback_title_markers(lines[0]) or FALLBACK_TITLE
        return SlideRecord.build(
            title=title,
            content=extract_content(lines, {0}),
            style=SlideStyle.CONTENT,
            table=self.style_table,
        )


def parse_slides(text: str, style_table: Optional[StyleTable] = None) -> SlideDeck:
    """Parse generated text into a SlideDeck with a one-off parser."""
    return SlideTextParser(style_table).parse(text)
