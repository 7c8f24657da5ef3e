"""
slidegen/extract/pptx_extractor.py — Pull text and images out of an uploaded .pptx

Uses python-pptx. A slide that fails to extract is logged and skipped;
the whole call fails only when nothing at all could be read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE
from pptx.shapes.picture import Picture

from .models import DocumentContent, ExtractedImage, PageContent

logger = logging.getLogger(__name__)

Source = Union[str, Path, BinaryIO]


class PPTExtractionError(Exception):
    """Raised when a presentation cannot be read or yields no slides."""


def _iter_shapes(shapes) -> Iterator[object]:
    """Yield shapes depth-first, descending into groups."""
    for shape in shapes:
        if shape.shape_type == MSO_SHAPE_TYPE.GROUP:
            yield from _iter_shapes(shape.shapes)
        else:
            yield shape


def _shape_runs(shape) -> Iterator[str]:
    if shape.has_text_frame:
        for paragraph in shape.text_frame.paragraphs:
            for run in paragraph.runs:
                yield run.text
    if getattr(shape, "has_table", False):
        for row in shape.table.rows:
            for cell in row.cells:
                yield cell.text_frame.text


def slide_text(slide) -> str:
    """All text runs on a slide joined by single spaces."""
    runs = [r.strip() for shape in _iter_shapes(slide.shapes) for r in _shape_runs(shape)]
    return " ".join(r for r in runs if r)


def slide_images(slide) -> list[ExtractedImage]:
    images = []
    for shape in _iter_shapes(slide.shapes):
        if not isinstance(shape, Picture):
            continue
        image = shape.image
        images.append(
            ExtractedImage(name=image.filename, content_type=image.content_type, blob=image.blob)
        )
    return images


def extract_pptx(source: Source) -> DocumentContent:
    """Extract per-slide text and images from a .pptx path or binary stream."""
    name = str(source) if isinstance(source, (str, Path)) else getattr(source, "name", "<stream>")
    try:
        prs = Presentation(str(source) if isinstance(source, Path) else source)
    except Exception as e:
        raise PPTExtractionError(
            "Failed to process the PowerPoint file. Please try again."
        ) from e

    if len(prs.slides) == 0:
        raise PPTExtractionError("No slides found in the presentation.")

    pages: list[PageContent] = []
    for number, slide in enumerate(prs.slides, start=1):
        try:
            pages.append(
                PageContent(number=number, text=slide_text(slide), images=slide_images(slide))
            )
        except Exception as e:
            logger.warning("Failed to process slide %d of %s: %s", number, name, e)

    if not pages:
        raise PPTExtractionError("Failed to extract any content from the presentation.")

    logger.info("Extracted %d slides from %s", len(pages), name)
    return DocumentContent(source=name, kind="pptx", pages=pages)
