"""
GeographicDistributor - Caps and rebalances hits across cities.

Algorithm (non-brand intents):
    1. Group hits by city key (normalized city name). Hits without a city
       form one unpartitioned bucket, used only when no city group exists.
    2. Keep the first ``max_cities`` groups in ranked order.
    3. Quota per group = max(1, max_hotels // groups).
    4. Take the top ``quota`` hits of every group.
    5. Spend leftover capacity round-robin over the same groups, in the same
       order, until ``max_hotels`` is reached or groups run dry.
    6. Return the selection in original rank order.

Brand intents skip grouping and return the top ``max_hotels`` by score: a
brand search wants to see the brand across many cities.

Country intents use the same algorithm. The hits already belong to the matched
country, so grouping by city is the "one level up" distribution.
"""

from __future__ import annotations

from hotel_search.domain.entities import ScoredHotel, SearchIntent

from .normalizer import normalize_query

DEFAULT_MAX_CITIES = 5
DEFAULT_MAX_HOTELS = 10


class GeographicDistributor:
    """Keeps a result list small and geographically diverse."""

    def __init__(self, max_cities: int = DEFAULT_MAX_CITIES, max_hotels: int = DEFAULT_MAX_HOTELS) -> None:
        if max_cities < 1 or max_hotels < 1:
            raise ValueError(f"caps must be positive, got max_cities={max_cities}, max_hotels={max_hotels}")
        self.max_cities = max_cities
        self.max_hotels = max_hotels

    def distribute(
        self,
        hits: list[ScoredHotel] | tuple[ScoredHotel, ...],
        intent: SearchIntent,
    ) -> list[ScoredHotel]:
        """Return at most ``max_hotels`` hits from at most ``max_cities`` cities."""
        if not hits:
            return []

        if intent.is_brand_scoped:
            return sorted(hits, key=lambda hit: -hit.score)[: self.max_hotels]
        return self._by_city(hits)

    def _by_city(self, hits: list[ScoredHotel] | tuple[ScoredHotel, ...]) -> list[ScoredHotel]:
        groups: dict[str, list[int]] = {}
        unlocated: list[int] = []
        for rank, hit in enumerate(hits):
            key = normalize_query(hit.hotel.city or "")
            if key:
                groups.setdefault(key, []).append(rank)
            else:
                unlocated.append(rank)

        # dict preserves first-seen order, i.e. the rank of each city's best hit
        buckets = list(groups.values())[: self.max_cities] if groups else [unlocated]

        quota = max(1, self.max_hotels // len(buckets))
        taken = [min(quota, len(bucket)) for bucket in buckets]
        selected = [rank for bucket, n in zip(buckets, taken) for rank in bucket[:n]]
        selected = selected[: self.max_hotels]

        while len(selected) < self.max_hotels:
            progressed = False
            for i, bucket in enumerate(buckets):
                if len(selected) >= self.max_hotels:
                    break
                if taken[i] < len(bucket):
                    selected.append(bucket[taken[i]])
                    taken[i] += 1
                    progressed = True
            if not progressed:
                break

        return [hits[rank] for rank in sorted(selected)]
