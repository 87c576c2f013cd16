"""
Search Response Entity

The engine never raises for a failed backend call. A failure is carried in
``SearchResponse.error`` with zero items so callers decide how to degrade.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .hotel import Hotel, SearchIntent

if TYPE_CHECKING:
    from hotel_search.shared.exceptions import HotelSearchError


@dataclass(frozen=True, slots=True)
class SearchResponse:
    """
    One page of search results.

    ``items`` keeps the final relevance/distribution order. ``total_hits`` is
    the candidate count reported for "X hotels found" messaging; it is not
    necessarily the number of servable items.
    """

    items: tuple[Hotel, ...]
    total_hits: int
    elapsed_ms: float
    page_number: int
    page_size: int

    # Diagnostics
    intent: SearchIntent | None = None
    normalized_query: str = ""
    corrected_query: str = ""
    collapsed: bool = False
    error: HotelSearchError | None = field(default=None, compare=False)

    @classmethod
    def empty(cls, page_number: int, page_size: int) -> SearchResponse:
        """Response for an empty query; the backend is never contacted."""
        return cls(items=(), total_hits=0, elapsed_ms=0.0, page_number=page_number, page_size=page_size)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0 or self.total_hits <= 0:
            return 0
        return math.ceil(self.total_hits / self.page_size)

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "items": [hotel.to_dict() for hotel in self.items],
            "total_hits": self.total_hits,
            "elapsed_ms": round(self.elapsed_ms, 3),
            "page_number": self.page_number,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "has_previous_page": self.has_previous_page,
            "has_next_page": self.has_next_page,
            "intent": self.intent.value if self.intent else None,
            "normalized_query": self.normalized_query,
            "corrected_query": self.corrected_query,
            "collapsed": self.collapsed,
            "succeeded": self.succeeded,
        }
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result
