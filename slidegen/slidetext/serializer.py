"""
slidegen/slidetext/serializer.py — Slide text serializer

Converts a SlideDeck back to the marker format the model is asked to
produce, so a deck can be replayed as an assistant turn or saved:
  parse(serialize(deck)) ≡ deck
"""

from __future__ import annotations

from .models import SlideDeck, SlideRecord
from .normalizer import BULLET


class SlideTextSerializer:
    """Converts a SlideDeck back to Title:/Style:/Data:/• text."""

    def serialize(self, deck: SlideDeck) -> str:
        """Serialize all slides, separated by blank lines."""
        return "\n\n".join(self._slide(s) for s in deck.slides) + "\n"

    def serialize_slide(self, slide: SlideRecord) -> str:
        return self._slide(slide)

    def _slide(self, s: SlideRecord) -> str:
        lines = [f"Title: {s.title}", f"Style: {s.style.value}"]
        if s.data_subtype is not None:
            lines.append(f"Data: {s.data_subtype.value}")
        lines.extend(f"{BULLET} {line}" for line in s.content)
        return "\n".join(lines)
