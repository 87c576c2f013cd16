"""
QueryStrategyBuilder - Intent-specific weighted query plans.

Each intent gets its own clause set over the logical hotel fields. Exact
(keyword) clauses always outrank fuzzy/partial clauses on the same field.
Code and exact-name intents never broaden to city/country fields since the
user has signalled a specific hotel.

Text used per clause:
    - exact clauses: the normalized query
    - "(corrected)" exact clauses: the typo-corrected query, only when it
      differs from the normalized one
    - everything else: the corrected query (equal to the normalized query
      when no typo was mapped)

Boost tiers are relative; only their mutual ordering matters.
"""

from __future__ import annotations

import logging

from hotel_search.domain.entities import (
    Clause,
    CompoundClause,
    MatchKind,
    QueryClause,
    QueryPlan,
    SearchIntent,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Boost tiers
# =============================================================================

BOOST_HIGHEST = 10.0
BOOST_HIGH = 7.0
BOOST_MEDIUM_HIGH = 5.0
BOOST_MEDIUM = 3.0
BOOST_MEDIUM_LOW = 2.0
BOOST_LOW = 1.0
BOOST_LOWEST = 0.5

# Brand fuzzy match needs most of the query terms to overlap
BRAND_TERM_OVERLAP = "70%"


class QueryStrategyBuilder:
    """Builds a :class:`QueryPlan` for one normalized query and its intent."""

    def build(self, normalized: str, corrected: str, intent: SearchIntent) -> QueryPlan:
        """
        Build the plan for ``intent``.

        Args:
            normalized: Output of the QueryNormalizer
            corrected: Output of the TypoCorrector (may equal ``normalized``)
            intent: Output of the IntentClassifier

        Returns:
            An OR-group of boosted clauses requiring at least one match
        """
        corrected = corrected or normalized

        match intent:
            case SearchIntent.HOTEL_CODE:
                clauses = self._hotel_code(normalized, corrected)
            case SearchIntent.EXACT_HOTEL_NAME:
                clauses = self._exact_hotel_name(normalized, corrected)
            case SearchIntent.HOTEL_BRAND:
                clauses = self._hotel_brand(corrected)
            case SearchIntent.BRAND_WITH_LOCATION:
                clauses = self._brand_with_location(corrected)
            case SearchIntent.CITY_NAME:
                clauses = self._place("city", normalized, corrected, with_phrase=True)
            case SearchIntent.COUNTRY_NAME:
                clauses = self._place("country", normalized, corrected, with_phrase=False)
            case SearchIntent.GENERAL:
                clauses = self._general(normalized, corrected)

        plan = QueryPlan(intent=intent, clauses=tuple(clauses))
        logger.debug("Built %d clauses for intent=%s over %s", len(plan.clauses), intent.value, sorted(plan.fields))
        return plan

    # -------------------------------------------------------------------------
    # Per-intent clause sets
    # -------------------------------------------------------------------------

    @staticmethod
    def _hotel_code(normalized: str, corrected: str) -> list[Clause]:
        return [
            QueryClause("code", MatchKind.EXACT, normalized, BOOST_HIGHEST),
            QueryClause("code", MatchKind.FUZZY, corrected, BOOST_HIGH),
            QueryClause("code", MatchKind.PREFIX, normalized, BOOST_MEDIUM),
            QueryClause("code", MatchKind.PARTIAL, corrected, BOOST_LOW),
        ]

    @staticmethod
    def _exact_hotel_name(normalized: str, corrected: str) -> list[Clause]:
        clauses: list[Clause] = [QueryClause("name", MatchKind.EXACT, normalized, BOOST_HIGHEST)]
        if corrected != normalized:
            clauses.append(QueryClause("name", MatchKind.EXACT, corrected, BOOST_HIGH))
        clauses += [
            QueryClause("name", MatchKind.PHRASE, corrected, BOOST_MEDIUM_HIGH),
            QueryClause("name", MatchKind.FUZZY, corrected, BOOST_MEDIUM),
        ]
        return clauses

    @staticmethod
    def _hotel_brand(corrected: str) -> list[Clause]:
        return [
            QueryClause("name", MatchKind.PHRASE, corrected, BOOST_HIGH),
            QueryClause(
                "name",
                MatchKind.FUZZY,
                corrected,
                BOOST_MEDIUM_HIGH,
                minimum_should_match=BRAND_TERM_OVERLAP,
            ),
            QueryClause("name", MatchKind.EDGE_NGRAM, corrected, BOOST_MEDIUM),
        ]

    @staticmethod
    def _brand_with_location(corrected: str) -> list[Clause]:
        words = corrected.split()
        brand_part = " ".join(words[: max(1, len(words) // 2)])
        location_part = words[-1] if words else corrected

        return [
            QueryClause("name", MatchKind.PHRASE, corrected, BOOST_HIGHEST),
            CompoundClause(
                clauses=(
                    QueryClause("name", MatchKind.PHRASE, brand_part, BOOST_LOW),
                    QueryClause("city", MatchKind.FUZZY, location_part, BOOST_LOW),
                ),
                boost=BOOST_HIGH,
            ),
            QueryClause("name", MatchKind.FUZZY, corrected, BOOST_MEDIUM),
        ]

    @staticmethod
    def _place(field_name: str, normalized: str, corrected: str, *, with_phrase: bool) -> list[Clause]:
        clauses: list[Clause] = [QueryClause(field_name, MatchKind.EXACT, normalized, BOOST_HIGHEST)]
        if corrected != normalized:
            clauses.append(QueryClause(field_name, MatchKind.EXACT, corrected, BOOST_HIGHEST))
        if with_phrase:
            clauses.append(QueryClause(field_name, MatchKind.PHRASE, corrected, BOOST_HIGH))
        clauses.append(QueryClause(field_name, MatchKind.FUZZY, corrected, BOOST_MEDIUM))
        if with_phrase:
            # Cities only: keyword prefix ("jakarta" -> "jakarta selatan")
            clauses.append(QueryClause(field_name, MatchKind.PREFIX, corrected, BOOST_MEDIUM_LOW))
        clauses.append(QueryClause(field_name, MatchKind.EDGE_NGRAM, corrected, BOOST_LOW))
        return clauses

    @staticmethod
    def _general(normalized: str, corrected: str) -> list[Clause]:
        return [
            QueryClause("name", MatchKind.EXACT, normalized, BOOST_HIGHEST),
            QueryClause("name", MatchKind.PHRASE, corrected, BOOST_HIGH),
            QueryClause("name", MatchKind.FUZZY, corrected, BOOST_MEDIUM),
            QueryClause("city", MatchKind.EXACT, normalized, BOOST_MEDIUM),
            QueryClause("city", MatchKind.FUZZY, corrected, BOOST_MEDIUM_LOW),
            QueryClause("country", MatchKind.EXACT, normalized, BOOST_LOW),
            QueryClause("country", MatchKind.FUZZY, corrected, BOOST_LOWEST),
        ]
