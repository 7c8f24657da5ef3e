"""
skills/serialize_slides.py — Write a SlideDeck back to slide text.

Wraps slidegen.slidetext.serializer.SlideTextSerializer.
"""

from slidegen.slidetext.models import SlideDeck
from slidegen.slidetext.serializer import SlideTextSerializer

_serializer = SlideTextSerializer()


def serialize(deck: SlideDeck) -> str:
    """Serialize a deck to Title:/Style:/Data:/• text."""
    return _serializer.serialize(deck)
