"""
slidegen/slidetext/markers.py — Marker-stripping rules

Each rule table is an ordered tuple of (pattern, replacement) pairs.
`apply_rules` runs every rule of a table left to right, once each;
`apply_first_rule` stops at the first rule that matches. Precedence is the
order in the table.
"""

from __future__ import annotations

import re

Rule = tuple[re.Pattern, str]

# Roman ordinal ahead of a title line ("IV. Title: Growth")
ORDINAL_RULES: tuple[Rule, ...] = (
    (re.compile(r"^[IVX]+\.\s*"), ""),
)

# One leading title marker: Title:, then Section:, then Slide N:
TITLE_RULES: tuple[Rule, ...] = (
    (re.compile(r"^title:\s*", re.IGNORECASE), ""),
    (re.compile(r"^section:\s*", re.IGNORECASE), ""),
    (re.compile(r"^slide\b\s*\d*\s*:?\s*", re.IGNORECASE), ""),
)

# First line of the whole-document fallback block
FALLBACK_TITLE_RULES: tuple[Rule, ...] = (
    (re.compile(r"^(?:title:|section:|slide\b:?)", re.IGNORECASE), ""),
)

# Leading list markers on a content line: bullet glyph, N., -, *, a) / A)
LIST_MARKER_RULES: tuple[Rule, ...] = (
    (re.compile(r"^•\s*"), ""),
    (re.compile(r"^[-*]\s+"), ""),
    (re.compile(r"^\d+\.\s+"), ""),
    (re.compile(r"^[a-zA-Z]\)\s+"), ""),
)

RE_LIST_MARKER = re.compile(r"^(?:•|[-*]\s|\d+\.\s|[a-zA-Z]\)\s)")


def apply_rules(text: str, rules: tuple[Rule, ...]) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text, count=1)
    return text.strip()


def apply_first_rule(text: str, rules: tuple[Rule, ...]) -> str:
    for pattern, replacement in rules:
        if pattern.match(text):
            return pattern.sub(replacement, text, count=1).strip()
    return text.strip()


def strip_title_markers(line: str) -> str:
    """Drop a leading roman ordinal, then at most one Title:/Section:/Slide N: marker."""
    return apply_first_rule(apply_rules(line.strip(), ORDINAL_RULES), TITLE_RULES)


def strip_fallback_title_markers(line: str) -> str:
    return apply_rules(line.strip(), FALLBACK_TITLE_RULES)


def has_list_marker(line: str) -> bool:
    """True if the line starts with an explicit bullet / numbered / lettered marker."""
    return bool(RE_LIST_MARKER.match(line.strip()))


def strip_list_marker(line: str) -> str:
    return apply_rules(line.strip(), LIST_MARKER_RULES)
