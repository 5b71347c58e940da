from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from rapidfuzz import fuzz


@dataclass(frozen=True)
class FuzzyMatch:
    distance: float
    start: int
    end: int


class FuzzyMatcher(Protocol):
    def match(self, query: str, text: str) -> Optional[FuzzyMatch]:
        """Distance in [0, 1] between ``query`` and the best part of ``text`` (0 = exact)."""
        ...


class RapidFuzzMatcher:
    """Typo-tolerant substring matching on rapidfuzz partial-ratio alignment."""

    def match(self, query: str, text: str) -> Optional[FuzzyMatch]:
        if not query or not text:
            return None
        alignment = fuzz.partial_ratio_alignment(query.lower(), text.lower())
        if alignment is None or alignment.score <= 0:
            return None
        distance = min(max(1.0 - alignment.score / 100.0, 0.0), 1.0)
        start = min(alignment.dest_start, len(text))
        end = min(max(alignment.dest_end, start), len(text))
        return FuzzyMatch(distance=distance, start=start, end=end)
