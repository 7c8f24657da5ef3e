"""
slidegen/slidetext/models.py — Pydantic data models for parsed slide text

The parser produces these, the serializer and renderer consume them.
A SlideRecord is built once per text block and never mutated afterwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ── Enums ──────────────────────────────────────────────────────────


class SlideStyle(str, Enum):
    TITLE = "title"
    SECTION = "section"
    CONTENT = "content"
    QUOTE = "quote"
    DATA = "data"


class DataSubtype(str, Enum):
    CHART = "chart"
    COMPARISON = "comparison"
    STATISTICS = "statistics"


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ContentTier(str, Enum):
    """Which content-extraction strategy produced a slide's lines."""

    BULLETS = "bullets"
    PROSE = "prose"
    PLACEHOLDER = "placeholder"


# ── Style → Color Table ────────────────────────────────────────────


class StyleColors(BaseModel):
    """Background gradient and text color tokens for one slide style."""

    model_config = ConfigDict(frozen=True)

    background: str
    text: str


_DEFAULT_COLORS = {
    SlideStyle.TITLE: ("from-blue-600 to-blue-700", "text-white"),
    SlideStyle.SECTION: ("from-slate-800 to-slate-900", "text-white"),
    SlideStyle.CONTENT: ("from-white to-slate-50", "text-slate-800"),
    SlideStyle.QUOTE: ("from-slate-100 to-slate-200", "text-slate-800"),
    SlideStyle.DATA: ("from-slate-50 to-white", "text-slate-800"),
}


class StyleTable(BaseModel):
    """Immutable style → color lookup. Must cover every SlideStyle."""

    model_config = ConfigDict(frozen=True)

    colors: dict[SlideStyle, StyleColors]

    @field_validator("colors")
    @classmethod
    def _covers_every_style(cls, v: dict[SlideStyle, StyleColors]) -> dict[SlideStyle, StyleColors]:
        missing = [s.value for s in SlideStyle if s not in v]
        if missing:
            raise ValueError(f"style table is missing styles: {', '.join(missing)}")
        return dict(v)

    @classmethod
    def default(cls) -> StyleTable:
        return cls(
            colors={
                style: StyleColors(background=bg, text=text)
                for style, (bg, text) in _DEFAULT_COLORS.items()
            }
        )

    def lookup(self, style: SlideStyle) -> StyleColors:
        return self.colors[style]


# ── Tier Results ───────────────────────────────────────────────────


class TierResult(BaseModel):
    """Outcome of one content tier. `matched` is False when the tier found nothing."""

    model_config = ConfigDict(frozen=True)

    tier: ContentTier
    lines: tuple[str, ...] = ()

    @property
    def matched(self) -> bool:
        return len(self.lines) > 0


class StyleMatch(BaseModel):
    """Resolved style plus the index of the `Style:` line (-1 if inferred)."""

    model_config = ConfigDict(frozen=True)

    style: SlideStyle = SlideStyle.CONTENT
    line_index: int = -1

    @property
    def explicit(self) -> bool:
        return self.line_index >= 0


# ── Slide ──────────────────────────────────────────────────────────


class SlideRecord(BaseModel):
    """A single slide parsed from generated text."""

    model_config = ConfigDict(frozen=True)

    title: str
    content: tuple[str, ...]
    style: SlideStyle = SlideStyle.CONTENT
    data_subtype: Optional[DataSubtype] = None
    background_token: str
    text_color_token: str

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("slide title must not be empty")
        return v

    @field_validator("content")
    @classmethod
    def _content_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        lines = tuple(line.strip() for line in v)
        if not lines or not all(lines):
            raise ValueError("slide content must hold at least one non-empty line")
        return lines

    @model_validator(mode="after")
    def _subtype_only_on_data(self) -> SlideRecord:
        if (self.style == SlideStyle.DATA) != (self.data_subtype is not None):
            raise ValueError("data_subtype must be set if and only if style is 'data'")
        return self

    @classmethod
    def build(
        cls,
        title: str,
        content: list[str] | tuple[str, ...],
        style: SlideStyle,
        table: StyleTable,
        data_subtype: Optional[DataSubtype] = None,
    ) -> SlideRecord:
        """Construct a record with its color tokens stamped from `table`."""
        colors = table.lookup(style)
        return cls(
            title=title,
            content=tuple(content),
            style=style,
            data_subtype=data_subtype,
            background_token=colors.background,
            text_color_token=colors.text,
        )


# ── Deck ───────────────────────────────────────────────────────────


class SlideDeck(BaseModel):
    """Ordered slides from one parse call."""

    model_config = ConfigDict(frozen=True)

    slides: tuple[SlideRecord, ...] = Field(default_factory=tuple)

    @property
    def title(self) -> str:
        return self.slides[0].title if self.slides else "SlideGen-Presentation"


# ── Chat ───────────────────────────────────────────────────────────


class ChatMessage(BaseModel):
    """One role-tagged turn of the conversation sent upstream."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, v):
        # Anything that is not the user speaks as the assistant.
        if isinstance(v, Role):
            return v
        return Role.USER if str(v).lower() == "user" else Role.ASSISTANT
