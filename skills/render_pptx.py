"""
skills/render_pptx.py — Render a SlideDeck to .pptx.

Wraps slidegen.renderer.pptx_renderer.render.
"""

from pathlib import Path
from typing import Optional

from slidegen.renderer.pptx_renderer import render as _render
from slidegen.slidetext.models import SlideDeck


def render(
    deck: SlideDeck,
    output_dir: str,
    filename: Optional[str] = None,
) -> Path:
    """Render parsed slides to a .pptx file.

    Args:
        deck: Parsed SlideDeck.
        output_dir: Directory to write the output file.
        filename: Optional file stem; defaults to the first slide's title.

    Returns:
        Path to the generated .pptx file.
    """
    return _render(deck=deck, output_dir=Path(output_dir), filename=filename)
