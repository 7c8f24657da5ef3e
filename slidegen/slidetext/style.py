"""
slidegen/slidetext/style.py — Style and data-subtype resolution

Explicit `Style:` / `Data:` markers win. Without them the style is inferred
from keyword families in the first line, and the data subtype from keywords
anywhere in the block. Keyword order is the match priority.
"""

from __future__ import annotations

import re
from typing import Optional

from .models import DataSubtype, SlideStyle, StyleMatch

STYLE_SCAN_LINES = 3
DATA_SCAN_LINES = 2

RE_STYLE = re.compile(r"style:\s*(\w+)", re.IGNORECASE)
RE_DATA = re.compile(r"data:\s*(\w+)", re.IGNORECASE)

# (keywords in first line, style), checked top to bottom
STYLE_KEYWORDS: tuple[tuple[tuple[str, ...], SlideStyle], ...] = (
    (("introduction", "overview", "agenda"), SlideStyle.TITLE),
    (("summary", "conclusion", "key points"), SlideStyle.SECTION),
    (("statistics", "metrics", "numbers"), SlideStyle.DATA),
    (("quote", "saying"), SlideStyle.QUOTE),
)

# (substrings anywhere in the block, subtype), checked top to bottom
SUBTYPE_KEYWORDS: tuple[tuple[tuple[str, ...], DataSubtype], ...] = (
    (("chart", "graph"), DataSubtype.CHART),
    (("compar", "versus", "vs"), DataSubtype.COMPARISON),
    (("statistic", "metric", "%"), DataSubtype.STATISTICS),
)

_STYLE_VALUES = {s.value for s in SlideStyle}
_SUBTYPE_VALUES = {d.value for d in DataSubtype}


def extract_style(lines: list[str]) -> StyleMatch:
    """Resolve a block's style. `line_index` is -1 unless a `Style:` line was used."""
    explicit = _explicit_style(lines)
    if explicit is not None:
        return explicit

    if not lines:
        return StyleMatch()

    first = lines[0].lower()
    for keywords, style in STYLE_KEYWORDS:
        if any(k in first for k in keywords):
            return StyleMatch(style=style)

    if any('"' in line for line in lines):
        return StyleMatch(style=SlideStyle.QUOTE)

    return StyleMatch()


def _explicit_style(lines: list[str]) -> Optional[StyleMatch]:
    for i, line in enumerate(lines[:STYLE_SCAN_LINES]):
        m = RE_STYLE.search(line)
        if m and m.group(1).lower() in _STYLE_VALUES:
            return StyleMatch(style=SlideStyle(m.group(1).lower()), line_index=i)
    return None


def find_data_line(lines: list[str], style_line_index: int) -> Optional[tuple[int, DataSubtype]]:
    """Locate an explicit `Data:` marker in the lines right after the style line."""
    start = style_line_index + 1 if style_line_index > -1 else 0
    for i in range(start, min(len(lines), start + DATA_SCAN_LINES)):
        m = RE_DATA.search(lines[i])
        if m and m.group(1).lower() in _SUBTYPE_VALUES:
            return i, DataSubtype(m.group(1).lower())
    return None


def infer_data_subtype(lines: list[str]) -> Optional[DataSubtype]:
    text = " ".join(lines).lower()
    for keywords, subtype in SUBTYPE_KEYWORDS:
        if any(k in text for k in keywords):
            return subtype
    return None


def extract_data_subtype(lines: list[str], style_line_index: int) -> DataSubtype:
    """Resolve the subtype of a data slide; defaults to statistics."""
    found = find_data_line(lines, style_line_index)
    if found is not None:
        return found[1]
    return infer_data_subtype(lines) or DataSubtype.STATISTICS
