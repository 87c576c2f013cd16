"""
IntentClassifier - Cheap heuristic intent detection for hotel queries.

Decision order (first match wins):
1. HOTEL_CODE: no whitespace; 7-10 digits, or 8-12 chars mixing letters and digits
2. EXACT_HOTEL_NAME: equals a curated hotel name
3. HOTEL_BRAND: contains a brand key or alias
4. BRAND_WITH_LOCATION: 3-4 words including a location-indicator token
5. CITY_NAME: matches / is part of / contains a known city, or ends with a
   locality suffix ("city", "island", "town", "province")
6. COUNTRY_NAME: matches / is part of / contains a known country
7. GENERAL: default

Architecture Decision:
    The classifier is a pure function of the normalized (and typo-corrected)
    string plus immutable reference data. No I/O, no state, always returns
    exactly one intent.

Example:
    >>> classifier = IntentClassifier(load_reference_data())
    >>> classifier.classify("jakarta")
    <SearchIntent.CITY_NAME: 'city_name'>
"""

from __future__ import annotations

from hotel_search.domain.entities import SearchIntent

from .reference_data import ReferenceData

# Hotel code shape
CODE_DIGITS_MIN_LENGTH = 7
CODE_DIGITS_MAX_LENGTH = 10
CODE_MIXED_MIN_LENGTH = 8
CODE_MIXED_MAX_LENGTH = 12

# Word-count window for brand + location queries
BRAND_LOCATION_MIN_WORDS = 3
BRAND_LOCATION_MAX_WORDS = 4

# A query shorter than this is not matched as a fragment of a place name
MIN_PARTIAL_PLACE_LENGTH = 3


class IntentClassifier:
    """Assigns one :class:`SearchIntent` to a normalized query."""

    def __init__(self, reference_data: ReferenceData) -> None:
        self._data = reference_data
        self._brand_terms = reference_data.brand_terms

    def classify(self, query: str, word_count: int | None = None) -> SearchIntent:
        """
        Classify a normalized query.

        Args:
            query: Normalized (and typo-corrected) query
            word_count: Pre-computed word count; derived from ``query`` if omitted

        Returns:
            The first matching intent, GENERAL if none applies
        """
        if not query:
            return SearchIntent.GENERAL

        words = query.split()
        count = word_count if word_count is not None else len(words)

        if self.is_hotel_code(query):
            return SearchIntent.HOTEL_CODE
        if query in self._data.exact_hotel_names:
            return SearchIntent.EXACT_HOTEL_NAME
        if self.matched_brand_term(query) is not None:
            return SearchIntent.HOTEL_BRAND
        if BRAND_LOCATION_MIN_WORDS <= count <= BRAND_LOCATION_MAX_WORDS and any(
            word in self._data.location_indicators for word in words
        ):
            return SearchIntent.BRAND_WITH_LOCATION
        if self._matches_place(query, self._data.cities) or self._ends_with_locality_suffix(words):
            return SearchIntent.CITY_NAME
        if self._matches_place(query, self._data.countries):
            return SearchIntent.COUNTRY_NAME
        return SearchIntent.GENERAL

    @staticmethod
    def is_hotel_code(query: str) -> bool:
        """Check the structural shape of a hotel code."""
        if not query or any(ch.isspace() for ch in query):
            return False

        length = len(query)
        if CODE_DIGITS_MIN_LENGTH <= length <= CODE_DIGITS_MAX_LENGTH and all(ch in "0123456789" for ch in query):
            return True

        has_letter = any(ch.isalpha() for ch in query)
        has_digit = any(ch in "0123456789" for ch in query)
        return CODE_MIXED_MIN_LENGTH <= length <= CODE_MIXED_MAX_LENGTH and has_letter and has_digit

    def matched_brand_term(self, query: str) -> str | None:
        """Return the longest brand key or alias contained in ``query``."""
        for term in self._brand_terms:
            if term in query:
                return term
        return None

    @staticmethod
    def _matches_place(query: str, places: frozenset[str]) -> bool:
        if query in places:
            return True

        padded_query = f" {query} "
        for place in places:
            # "kuala" -> "kuala lumpur"
            if len(query) >= MIN_PARTIAL_PLACE_LENGTH and query in place:
                return True
            # "hotels in jakarta" -> "jakarta"
            if f" {place} " in padded_query:
                return True
        return False

    def _ends_with_locality_suffix(self, words: list[str]) -> bool:
        return bool(words) and words[-1] in self._data.locality_suffixes
