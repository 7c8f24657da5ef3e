"""
slidegen/renderer/pptx_renderer.py -- PPTX Rendering Engine

Converts a SlideDeck into a .pptx file using python-pptx.
Deterministic: same input always produces the same output.

Each SlideStyle maps to one fixed layout:
  title    centered title, subtitle points below
  section  banner title over an accent bar
  content  title rule + numbered points
  quote    large quote mark, italic title, supporting points
  data     accent header band + two columns of points

Fill and text colors come from the record's background/text tokens.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.util import Inches, Pt

from slidegen.slidetext.models import SlideDeck, SlideRecord, SlideStyle, StyleTable

logger = logging.getLogger(__name__)

# ── Geometry Constants (inches, 16:9) ─────────────────────────────

SLIDE_WIDTH_IN = 13.333
SLIDE_HEIGHT_IN = 7.5
SLIDE_WIDTH = Inches(SLIDE_WIDTH_IN)
SLIDE_HEIGHT = Inches(SLIDE_HEIGHT_IN)

# Font sizes (points)
FONT_TITLE_HERO = 60
FONT_SECTION = 44
FONT_HEADING = 36
FONT_DATA_HEADING = 32
FONT_QUOTE = 32
FONT_QUOTE_MARK = 120
FONT_SUBTITLE = 24
FONT_BODY_MIN = 18
FONT_BODY_MAX = 24
FONT_DATA = 20

ACCENT = "3B82F6"  # blue-500
QUOTE_FONT = "Georgia"

DEFAULT_FILENAME = "SlideGen-Presentation"

# ── Color Tokens ──────────────────────────────────────────────────

# Palette entries referenced by the default style table
PALETTE = {
    "white": "FFFFFF",
    "black": "000000",
    "blue-500": "3B82F6",
    "blue-600": "2563EB",
    "blue-700": "1D4ED8",
    "slate-50": "F8FAFC",
    "slate-100": "F1F5F9",
    "slate-200": "E2E8F0",
    "slate-700": "334155",
    "slate-800": "1E293B",
    "slate-900": "0F172A",
}

RE_HEX = re.compile(r"^#?([0-9a-fA-F]{6})$")
RE_TOKEN_PREFIX = re.compile(r"^(?:from|via|to|text|bg)-")


def resolve_color(token: str) -> RGBColor:
    """Resolve a color token to an RGBColor.

    Accepts a palette name ("slate-800"), a utility token ("text-white",
    "from-blue-600 to-blue-700" → first stop) or a hex string.
    """
    first = token.split()[0] if token.strip() else ""
    hex_match = RE_HEX.match(first)
    if hex_match:
        return RGBColor.from_string(hex_match.group(1).upper())
    name = RE_TOKEN_PREFIX.sub("", first)
    if name not in PALETTE:
        raise ValueError(f"Unknown color token: {token!r}")
    return RGBColor.from_string(PALETTE[name])


def check_style_table(table: StyleTable) -> None:
    """Raise ValueError if any background or text token of `table` cannot be rendered."""
    for style in SlideStyle:
        colors = table.lookup(style)
        resolve_color(colors.background)
        resolve_color(colors.text)


def _background_color(node: SlideRecord) -> RGBColor:
    return resolve_color(node.background_token)


def _text_color(node: SlideRecord) -> RGBColor:
    return resolve_color(node.text_color_token)


def _x(pct: float) -> float:
    return SLIDE_WIDTH_IN * pct / 100


def _y(pct: float) -> float:
    return SLIDE_HEIGHT_IN * pct / 100


# ── Background ────────────────────────────────────────────────────


def _apply_background(slide, node: SlideRecord):
    """Fill the slide background with the first stop of its gradient token."""
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = _background_color(node)


# ── Text Helpers ──────────────────────────────────────────────────


def _add_textbox(
    slide,
    left: float,
    top: float,
    width: float,
    height: float,
    text: str,
    font_size: int = FONT_BODY_MAX,
    bold: bool = False,
    italic: bool = False,
    color: Optional[RGBColor] = None,
    alignment: PP_ALIGN = PP_ALIGN.LEFT,
    anchor: MSO_ANCHOR = MSO_ANCHOR.MIDDLE,
    font_name: Optional[str] = None,
) -> object:
    """Add a textbox to a slide and return the shape."""
    txBox = slide.shapes.add_textbox(
        Inches(left),
        Inches(top),
        Inches(width),
        Inches(height),
    )
    tf = txBox.text_frame
    tf.word_wrap = True
    tf.vertical_anchor = anchor

    p = tf.paragraphs[0]
    p.text = text
    p.font.size = Pt(font_size)
    p.font.bold = bold
    p.font.italic = italic
    p.alignment = alignment
    if color:
        p.font.color.rgb = color
    if font_name:
        p.font.name = font_name
    return txBox


def _add_bar(slide, left: float, top: float, width: float, height: float, color: str):
    shape = slide.shapes.add_shape(
        MSO_SHAPE.RECTANGLE,
        Inches(left),
        Inches(top),
        Inches(width),
        Inches(height),
    )
    shape.fill.solid()
    shape.fill.fore_color.rgb = resolve_color(color)
    shape.line.fill.background()
    return shape


def _body_font_size(point: str) -> int:
    """Shrink long points, within FONT_BODY_MIN..FONT_BODY_MAX."""
    return max(FONT_BODY_MIN, min(FONT_BODY_MAX, 600 // max(len(point), 1)))


# ── Per-Style Renderers ───────────────────────────────────────────


def _render_title(slide, node: SlideRecord):
    """Large centered title with subtitle points below."""
    color = _text_color(node)
    _add_textbox(
        slide, _x(10), _y(35), _x(80), _y(30), node.title,
        font_size=FONT_TITLE_HERO, bold=True, color=color, alignment=PP_ALIGN.CENTER,
    )
    for i, point in enumerate(node.content):
        _add_textbox(
            slide, _x(20), _y(65 + i * 8), _x(60), _y(8), point,
            font_size=FONT_SUBTITLE, color=color, alignment=PP_ALIGN.CENTER,
        )


def _render_section(slide, node: SlideRecord):
    """Section banner: title above an accent bar, points below."""
    color = _text_color(node)
    _add_bar(slide, _x(10), _y(48), _x(80), _y(4), ACCENT)
    _add_textbox(
        slide, _x(10), _y(30), _x(80), _y(15), node.title,
        font_size=FONT_SECTION, bold=True, color=color,
        alignment=PP_ALIGN.CENTER, anchor=MSO_ANCHOR.BOTTOM,
    )
    for i, point in enumerate(node.content):
        _add_textbox(
            slide, _x(20), _y(55 + i * 8), _x(60), _y(8), point,
            font_size=FONT_SUBTITLE, color=color, alignment=PP_ALIGN.CENTER,
        )


def _render_content(slide, node: SlideRecord):
    """Title with an underline rule and numbered points."""
    color = _text_color(node)
    _add_bar(slide, _x(10), _y(20), _x(80), _y(0.3), ACCENT)
    _add_textbox(
        slide, _x(10), _y(5), _x(80), _y(15), node.title,
        font_size=FONT_HEADING, bold=True, color=color,
    )
    for i, point in enumerate(node.content):
        _add_textbox(
            slide, _x(12), _y(25 + i * 12), _x(76), _y(10), f"{i + 1}. {point}",
            font_size=_body_font_size(point), color=color,
        )


def _render_quote(slide, node: SlideRecord):
    """Quote pull-out: big quote mark, italic serif title, supporting points."""
    color = _text_color(node)
    _add_textbox(
        slide, _x(10), _y(20), _x(15), _y(20), '"',
        font_size=FONT_QUOTE_MARK, bold=True, color=resolve_color(ACCENT),
        anchor=MSO_ANCHOR.TOP,
    )
    _add_textbox(
        slide, _x(15), _y(30), _x(70), _y(40), node.title,
        font_size=FONT_QUOTE, italic=True, color=color,
        alignment=PP_ALIGN.CENTER, font_name=QUOTE_FONT,
    )
    for i, point in enumerate(node.content):
        _add_textbox(
            slide, _x(20), _y(70 + i * 8), _x(60), _y(8), point,
            font_size=FONT_DATA, color=color, alignment=PP_ALIGN.CENTER,
        )


def _render_data(slide, node: SlideRecord):
    """Accent header band, then the points split over two columns."""
    color = _text_color(node)
    _add_bar(slide, 0, 0, SLIDE_WIDTH_IN, _y(20), ACCENT)
    _add_textbox(
        slide, _x(10), _y(5), _x(80), _y(10), node.title,
        font_size=FONT_DATA_HEADING, bold=True, color=resolve_color("white"),
    )

    split = math.ceil(len(node.content) / 2)
    columns = (node.content[:split], node.content[split:])
    for left, points in zip((10, 55), columns):
        for i, point in enumerate(points):
            _add_textbox(
                slide, _x(left), _y(25 + i * 15), _x(35), _y(12), f"• {point}",
                font_size=FONT_DATA, color=color,
            )


# ── Dispatch Table ────────────────────────────────────────────────

_RENDERERS = {
    SlideStyle.TITLE: _render_title,
    SlideStyle.SECTION: _render_section,
    SlideStyle.CONTENT: _render_content,
    SlideStyle.QUOTE: _render_quote,
    SlideStyle.DATA: _render_data,
}


# ── Public API ────────────────────────────────────────────────────


def safe_filename(title: str) -> str:
    """Reduce a title to characters safe for a file name."""
    safe = "".join(c if c.isalnum() or c in " -_" else "_" for c in title).strip()[:80]
    return safe or DEFAULT_FILENAME


def build_presentation(deck: SlideDeck):
    """Build an in-memory python-pptx Presentation for the deck."""
    prs = Presentation()
    prs.slide_width = SLIDE_WIDTH
    prs.slide_height = SLIDE_HEIGHT

    props = prs.core_properties
    props.author = "SlideGen AI"
    props.subject = "AI Generated Presentation"
    props.title = deck.title
    props.revision = 1

    blank_layout = prs.slide_layouts[6]  # blank layout

    for node in deck.slides:
        slide = prs.slides.add_slide(blank_layout)
        _apply_background(slide, node)
        renderer_fn = _RENDERERS.get(node.style, _render_content)
        renderer_fn(slide, node)

    return prs


def render(
    deck: SlideDeck,
    output_dir: Path,
    filename: Optional[str] = None,
) -> Path:
    """Render a SlideDeck to a .pptx file.

    Args:
        deck: Parsed slides, in order.
        output_dir: Directory to write the output file.
        filename: File stem; defaults to the sanitized title of the first slide.

    Returns:
        Path to the generated .pptx file.
    """
    if not deck.slides:
        raise ValueError("Cannot render a deck with no slides")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    prs = build_presentation(deck)
    output_path = output_dir / f"{safe_filename(filename or deck.title)}.pptx"
    prs.save(str(output_path))

    logger.info("Rendered %d slides to %s", len(deck.slides), output_path)
    return output_path
