"""
skills/parse_slides.py — Parse generated slide text or saved replies.

Wraps slidegen.slidetext.parser.SlideTextParser.
"""

from slidegen.slidetext.models import SlideDeck
from slidegen.slidetext.parser import SlideTextParser

_parser = SlideTextParser()


def parse_text(text: str) -> SlideDeck:
    """Parse raw model output into a SlideDeck. Raises NoContentError on empty input."""
    return _parser.parse(text)


def parse_file(path: str) -> SlideDeck:
    """Parse a saved model reply into a SlideDeck."""
    return _parser.parse_file(path)
