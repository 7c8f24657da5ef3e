"""
slidegen/extract/models.py — Pydantic models for content pulled from uploaded documents.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ExtractedImage(BaseModel):
    """An embedded image, kept as raw bytes."""

    name: str
    content_type: str
    blob: bytes = Field(repr=False)


class PageContent(BaseModel):
    """Text and images of one slide (pptx) or page (pdf). `number` is 1-based."""

    number: int
    text: str = ""
    images: list[ExtractedImage] = Field(default_factory=list)


class DocumentContent(BaseModel):
    """All pages extracted from one document, in order."""

    source: str
    kind: str  # "pptx" | "pdf"
    pages: list[PageContent] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n\n".join(p.text for p in self.pages if p.text)

    @property
    def image_count(self) -> int:
        return sum(len(p.images) for p in self.pages)
