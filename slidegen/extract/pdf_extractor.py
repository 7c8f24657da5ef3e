"""
slidegen/extract/pdf_extractor.py — Pull text and images out of an uploaded PDF

Uses PyMuPDF. Images that cannot be decoded are logged and skipped.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import BinaryIO, Optional, Union

import fitz  # PyMuPDF

from .models import DocumentContent, ExtractedImage, PageContent

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes, BinaryIO]


class PDFExtractionError(Exception):
    """Raised when a PDF cannot be opened or has no pages."""


def _clean_text(s: str) -> str:
    s = (s or "").replace("\x00", " ")
    s = re.sub(r"[ \t]+", " ", s)
    s = re.sub(r"\n{3,}", "\n\n", s)
    return s.strip()


def _open(source: Source):
    if isinstance(source, (str, Path)):
        return fitz.open(str(Path(source).expanduser()))
    data = source if isinstance(source, bytes) else source.read()
    return fitz.open(stream=data, filetype="pdf")


def _page_images(doc, page, number: int) -> list[ExtractedImage]:
    images = []
    for idx, img in enumerate(page.get_images(full=True), start=1):
        xref = img[0]
        try:
            info = doc.extract_image(xref)
        except Exception as e:
            logger.warning("Skipping image %d on page %d: %s", idx, number, e)
            continue
        if not info:
            continue
        ext = info.get("ext", "png")
        images.append(
            ExtractedImage(
                name=f"page_{number}_img_{idx}.{ext}",
                content_type=f"image/{'jpeg' if ext == 'jpg' else ext}",
                blob=info["image"],
            )
        )
    return images


def extract_pdf(
    source: Source,
    max_pages: Optional[int] = None,
    include_images: bool = True,
) -> DocumentContent:
    """Extract per-page text (and optionally images) from a PDF path, bytes or stream."""
    name = str(source) if isinstance(source, (str, Path)) else getattr(source, "name", "<stream>")
    try:
        doc = _open(source)
    except Exception as e:
        raise PDFExtractionError(f"Failed to open PDF {name}: {e}") from e

    try:
        if doc.page_count == 0:
            raise PDFExtractionError("No pages found in the PDF.")

        count = doc.page_count if max_pages is None else min(max_pages, doc.page_count)
        pages: list[PageContent] = []
        for pno in range(count):
            page = doc.load_page(pno)
            number = pno + 1
            pages.append(
                PageContent(
                    number=number,
                    text=_clean_text(page.get_text("text")),
                    images=_page_images(doc, page, number) if include_images else [],
                )
            )
    finally:
        doc.close()

    logger.info("Extracted %d pages from %s", len(pages), name)
    return DocumentContent(source=name, kind="pdf", pages=pages)
