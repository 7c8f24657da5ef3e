#!/usr/bin/env python3
"""
scripts/extract_document.py — Dump the text and images of a .pptx or .pdf.

Usage:
    python scripts/extract_document.py path/to/deck.pptx
    python scripts/extract_document.py path/to/paper.pdf --images-dir ./images
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from slidegen.extract.pdf_extractor import PDFExtractionError
from slidegen.extract.pptx_extractor import PPTExtractionError
from skills.extract_document import extract


def main():
    ap = argparse.ArgumentParser(description="Extract text and images from a .pptx or .pdf.")
    ap.add_argument("path", help=".pptx or .pdf file")
    ap.add_argument("--images-dir", default=None, help="Write extracted images here")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        doc = extract(args.path)
    except (PPTExtractionError, PDFExtractionError, ValueError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    label = "Slide" if doc.kind == "pptx" else "Page"
    for page in doc.pages:
        print(f"\n── {label} {page.number} ({len(page.images)} images) ──")
        print(page.text or "(no text)")

    if args.images_dir:
        out = Path(args.images_dir)
        out.mkdir(parents=True, exist_ok=True)
        for page in doc.pages:
            for image in page.images:
                target = out / f"{page.number:03d}_{image.name}"
                target.write_bytes(image.blob)
        print(f"\nWrote {doc.image_count} images to {out}")


if __name__ == "__main__":
    main()
