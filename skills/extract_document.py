"""
skills/extract_document.py — Extract text and images from uploaded decks and PDFs.

Wraps slidegen.extract.pptx_extractor and slidegen.extract.pdf_extractor.
"""

from pathlib import Path

from slidegen.extract.models import DocumentContent
from slidegen.extract.pdf_extractor import extract_pdf
from slidegen.extract.pptx_extractor import extract_pptx


def extract(path: str) -> DocumentContent:
    """Extract a .pptx or .pdf by file extension.

    Raises:
        ValueError: for any other extension.
    """
    suffix = Path(path).suffix.lower()
    if suffix == ".pptx":
        return extract_pptx(path)
    if suffix == ".pdf":
        return extract_pdf(path)
    raise ValueError(f"Unsupported file type: {suffix}")
