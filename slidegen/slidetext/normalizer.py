"""
slidegen/slidetext/normalizer.py — Canonicalize punctuation in generated text.
"""

from __future__ import annotations

import re

BULLET = "•"

# Applied in order. Every rule is total, so normalize() never fails.
_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("‘", "'"),
    ("’", "'"),
    ("“", '"'),
    ("”", '"'),
    # bullet-like glyphs collapse onto the canonical bullet
    ("‣", BULLET),
    ("⁃", BULLET),
    ("∙", BULLET),
    ("▪", BULLET),
    ("●", BULLET),
    ("◦", BULLET),
    ("–", "-"),
    ("—", "-"),
)

RE_CRLF = re.compile(r"\r+\n")


def normalize(raw: str) -> str:
    """Replace curly quotes, bullet variants, dashes and CRLF, then trim."""
    text = raw
    for old, new in _REPLACEMENTS:
        text = text.replace(old, new)
    text = RE_CRLF.sub("\n", text)
    return text.strip()
