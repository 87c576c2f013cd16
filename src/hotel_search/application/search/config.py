"""
Search engine tuning knobs.

The dominance threshold is a single tunable constant shared by every intent
of the unified search; structured field search keeps its own, looser one.
Distribution caps are configurable but default to 5 cities / 10 hotels.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from hotel_search.shared.exceptions import ConfigurationError, ErrorContext

from .geo_distributor import DEFAULT_MAX_CITIES, DEFAULT_MAX_HOTELS
from .result_consolidator import DEFAULT_DOMINANCE_THRESHOLD, DEFAULT_FIELD_DOMINANCE_THRESHOLD


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """
    Engine configuration.

    Attributes:
        dominance_threshold: top/second score ratio above which results collapse
        field_dominance_threshold: the same ratio for structured field search
        max_cities: most distinct city groups surfaced
        max_hotels: most hotels surfaced after distribution
        candidate_pool_size: backend ``size`` fetched before consolidation
        default_page_size: page size used when the caller passes none
        report_servable_total: report the post-distribution count as
            ``total_hits`` instead of the backend's pre-distribution recall
    """

    dominance_threshold: float = DEFAULT_DOMINANCE_THRESHOLD
    field_dominance_threshold: float = DEFAULT_FIELD_DOMINANCE_THRESHOLD
    max_cities: int = DEFAULT_MAX_CITIES
    max_hotels: int = DEFAULT_MAX_HOTELS
    candidate_pool_size: int = 100
    default_page_size: int = 10
    report_servable_total: bool = False

    def __post_init__(self) -> None:
        problems: list[str] = []
        for name in ("dominance_threshold", "field_dominance_threshold"):
            if getattr(self, name) <= 1.0:
                problems.append(f"{name} must be > 1.0")
        for name in ("max_cities", "max_hotels", "candidate_pool_size", "default_page_size"):
            if getattr(self, name) < 1:
                problems.append(f"{name} must be >= 1")
        if self.candidate_pool_size < self.max_hotels:
            problems.append("candidate_pool_size must be >= max_hotels")
        if problems:
            raise ConfigurationError(
                "Invalid search configuration: " + "; ".join(problems),
                context=ErrorContext(operation="search_config"),
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> SearchConfig:
        """Build from a mapping, ignoring unset (None) values."""
        if not data:
            return cls()
        known = {name for name in cls.__dataclass_fields__}
        values = {key: value for key, value in data.items() if key in known and value is not None}
        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid search configuration: {e}",
                context=ErrorContext(operation="search_config"),
            ) from e
