"""
tests/test_renderer.py — Tests for the PPTX renderer

Covers:
  - render() public API: file creation, slide count, filename sanitization
  - Per-style renderers: each style produces its layout's shapes
  - Color token resolution and background fills
  - Dispatch table completeness
"""

from pathlib import Path

import pytest
from pptx import Presentation as PptxPresentation
from pptx.dml.color import RGBColor

from slidegen.renderer.pptx_renderer import (
    SLIDE_HEIGHT,
    SLIDE_WIDTH,
    _RENDERERS,
    _apply_background,
    _body_font_size,
    _render_content,
    _render_data,
    _render_quote,
    _render_section,
    _render_title,
    build_presentation,
    check_style_table,
    render,
    resolve_color,
    safe_filename,
)
from slidegen.slidetext.models import (
    DataSubtype,
    SlideDeck,
    SlideRecord,
    SlideStyle,
    StyleColors,
    StyleTable,
)
from slidegen.slidetext.parser import SlideTextParser

SAMPLE_PATH = Path(__file__).parent.parent / "docs" / "examples" / "sample_reply.txt"


# ── Fixtures ─────────────────────────────────────────────────────


@pytest.fixture
def blank_slide():
    """Return a blank slide from a fresh presentation."""
    prs = PptxPresentation()
    prs.slide_width = SLIDE_WIDTH
    prs.slide_height = SLIDE_HEIGHT
    layout = prs.slide_layouts[6]
    return prs.slides.add_slide(layout)


def _slide(style: SlideStyle, content=("one", "two", "three"), title="Heading") -> SlideRecord:
    subtype = DataSubtype.STATISTICS if style == SlideStyle.DATA else None
    return SlideRecord.build(title, list(content), style, StyleTable.default(), subtype)


def _texts(slide) -> list[str]:
    return [s.text_frame.text for s in slide.shapes if s.has_text_frame and s.text_frame.text]


# ── resolve_color ────────────────────────────────────────────────


class TestResolveColor:
    def test_gradient_uses_first_stop(self):
        assert resolve_color("from-blue-600 to-blue-700") == RGBColor(0x25, 0x63, 0xEB)

    def test_text_token(self):
        assert resolve_color("text-slate-800") == RGBColor(0x1E, 0x29, 0x3B)

    def test_named_white(self):
        assert resolve_color("text-white") == RGBColor(0xFF, 0xFF, 0xFF)

    def test_hex_direct(self):
        assert resolve_color("FF8800") == RGBColor(0xFF, 0x88, 0x00)
        assert resolve_color("#3b82f6") == RGBColor(0x3B, 0x82, 0xF6)

    def test_unknown_token(self):
        with pytest.raises(ValueError):
            resolve_color("from-chartreuse-900")

    def test_every_default_token_resolves(self):
        table = StyleTable.default()
        for style in SlideStyle:
            colors = table.lookup(style)
            resolve_color(colors.background)
            resolve_color(colors.text)

    def test_check_style_table(self):
        check_style_table(StyleTable.default())
        bad = StyleTable(
            colors={s: StyleColors(background="from-red-500", text="text-white") for s in SlideStyle}
        )
        with pytest.raises(ValueError, match="from-red-500"):
            check_style_table(bad)


# ── Background ───────────────────────────────────────────────────


class TestBackground:
    def test_title_background(self, blank_slide):
        _apply_background(blank_slide, _slide(SlideStyle.TITLE))
        assert blank_slide.background.fill.fore_color.rgb == RGBColor(0x25, 0x63, 0xEB)

    def test_section_background(self, blank_slide):
        _apply_background(blank_slide, _slide(SlideStyle.SECTION))
        assert blank_slide.background.fill.fore_color.rgb == RGBColor(0x1E, 0x29, 0x3B)

    def test_content_background(self, blank_slide):
        _apply_background(blank_slide, _slide(SlideStyle.CONTENT))
        assert blank_slide.background.fill.fore_color.rgb == RGBColor(0xFF, 0xFF, 0xFF)


# ── Per-style renderers ──────────────────────────────────────────


class TestStyleRenderers:
    def test_title_layout(self, blank_slide):
        _render_title(blank_slide, _slide(SlideStyle.TITLE))
        texts = _texts(blank_slide)
        assert texts == ["Heading", "one", "two", "three"]

    def test_title_uses_text_token(self, blank_slide):
        _render_title(blank_slide, _slide(SlideStyle.TITLE))
        first = blank_slide.shapes[0].text_frame.paragraphs[0]
        assert first.font.color.rgb == RGBColor(0xFF, 0xFF, 0xFF)

    def test_section_has_accent_bar(self, blank_slide):
        _render_section(blank_slide, _slide(SlideStyle.SECTION))
        # bar + title + 3 points
        assert len(blank_slide.shapes) == 5
        assert "Heading" in _texts(blank_slide)

    def test_content_points_numbered(self, blank_slide):
        _render_content(blank_slide, _slide(SlideStyle.CONTENT))
        texts = _texts(blank_slide)
        assert "1. one" in texts
        assert "3. three" in texts

    def test_quote_layout(self, blank_slide):
        _render_quote(blank_slide, _slide(SlideStyle.QUOTE))
        texts = _texts(blank_slide)
        assert texts[0] == '"'
        assert texts[1] == "Heading"
        title_font = blank_slide.shapes[1].text_frame.paragraphs[0].font
        assert title_font.italic is True
        assert title_font.name == "Georgia"

    def test_data_splits_two_columns(self, blank_slide):
        _render_data(blank_slide, _slide(SlideStyle.DATA, content=("a", "b", "c")))
        points = [t for t in _texts(blank_slide) if t.startswith("• ")]
        assert points == ["• a", "• b", "• c"]
        left = [s for s in blank_slide.shapes if s.has_text_frame and s.text_frame.text in ("• a", "• b")]
        right = [s for s in blank_slide.shapes if s.has_text_frame and s.text_frame.text == "• c"]
        assert all(s.left < right[0].left for s in left)

    def test_data_title_is_white(self, blank_slide):
        _render_data(blank_slide, _slide(SlideStyle.DATA))
        title = next(s for s in blank_slide.shapes if s.has_text_frame and s.text_frame.text == "Heading")
        assert title.text_frame.paragraphs[0].font.color.rgb == RGBColor(0xFF, 0xFF, 0xFF)

    def test_dispatch_covers_every_style(self):
        assert set(_RENDERERS) == set(SlideStyle)


class TestBodyFontSize:
    def test_short_point_is_max(self):
        assert _body_font_size("short") == 24

    def test_long_point_is_min(self):
        assert _body_font_size("x" * 200) == 18


# ── render() ─────────────────────────────────────────────────────


class TestRender:
    def test_writes_file(self, tmp_path):
        deck = SlideTextParser().parse(SAMPLE_PATH.read_text(encoding="utf-8"))
        path = render(deck, tmp_path)
        assert path.exists()
        assert path.name == "Digital Marketing in 2025.pptx"

    def test_slide_count(self, tmp_path):
        deck = SlideTextParser().parse(SAMPLE_PATH.read_text(encoding="utf-8"))
        prs = PptxPresentation(str(render(deck, tmp_path)))
        assert len(prs.slides) == 5

    def test_custom_filename(self, tmp_path):
        deck = SlideDeck(slides=(_slide(SlideStyle.CONTENT),))
        path = render(deck, tmp_path, filename="my deck")
        assert path.name == "my deck.pptx"

    def test_creates_output_dir(self, tmp_path):
        deck = SlideDeck(slides=(_slide(SlideStyle.CONTENT),))
        path = render(deck, tmp_path / "nested" / "out")
        assert path.exists()

    def test_empty_deck_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            render(SlideDeck(), tmp_path)

    def test_core_properties(self):
        prs = build_presentation(SlideDeck(slides=(_slide(SlideStyle.TITLE),)))
        assert prs.core_properties.author == "SlideGen AI"
        assert prs.core_properties.title == "Heading"


class TestSafeFilename:
    def test_replaces_unsafe(self):
        assert safe_filename("Q3: Growth/Plan?") == "Q3_ Growth_Plan_"

    def test_truncates(self):
        assert len(safe_filename("a" * 200)) == 80

    def test_empty_falls_back(self):
        assert safe_filename("") == "SlideGen-Presentation"
