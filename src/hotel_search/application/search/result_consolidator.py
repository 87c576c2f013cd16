"""
ResultConsolidator - Confidence-ratio collapsing.

When the top hit outscores the runner-up by more than ``threshold`` times,
the user almost certainly found the hotel they meant: the result becomes that
single hit and the reported total drops to 1. Otherwise the ranked list passes
through untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hotel_search.domain.entities import ScoredHotel

logger = logging.getLogger(__name__)

DEFAULT_DOMINANCE_THRESHOLD = 1.8
DEFAULT_FIELD_DOMINANCE_THRESHOLD = 1.5


@dataclass(frozen=True, slots=True)
class ConsolidatedResult:
    """Hits after consolidation, with the total to report upstream."""

    hits: tuple[ScoredHotel, ...]
    total: int
    collapsed: bool = False


class ResultConsolidator:
    """Collapses a ranked hit list to one dominant hit when the score gap is decisive."""

    def __init__(self, threshold: float = DEFAULT_DOMINANCE_THRESHOLD) -> None:
        if threshold <= 1.0:
            raise ValueError(f"dominance threshold must be greater than 1.0, got {threshold}")
        self.threshold = threshold

    def dominance_ratio(self, hits: list[ScoredHotel] | tuple[ScoredHotel, ...]) -> float | None:
        """Top score / second score, or None when it is undefined."""
        if len(hits) < 2:
            return None
        top, second = hits[0].score, hits[1].score
        if top <= 0 or second <= 0:
            return None
        return top / second

    def consolidate(self, hits: list[ScoredHotel] | tuple[ScoredHotel, ...], total: int) -> ConsolidatedResult:
        """
        Apply the dominance rule.

        Args:
            hits: Backend hits, descending by score
            total: Backend total-hit count

        Returns:
            Either the single top hit with total 1, or the input unchanged
        """
        ratio = self.dominance_ratio(hits)
        if ratio is not None and ratio > self.threshold:
            top = hits[0]
            logger.info(
                "Collapsed %d hits to %s (ratio %.2f > %.2f)",
                len(hits),
                top.hotel.code,
                ratio,
                self.threshold,
            )
            return ConsolidatedResult(hits=(top,), total=1, collapsed=True)
        return ConsolidatedResult(hits=tuple(hits), total=total)
