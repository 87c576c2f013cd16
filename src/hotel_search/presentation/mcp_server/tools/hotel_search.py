"""
Hotel Search Tools - Free-text and field search, query diagnostics

Tools:
- search_hotels: one page of hotels for a free-text query
- search_hotels_by_fields: structured search by code, name, city, address
- analyze_hotel_query: normalized text, intent and query plan (no backend call)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from hotel_search.domain.entities import FieldSearchParameters
from hotel_search.shared.exceptions import HotelSearchError

if TYPE_CHECKING:
    from hotel_search.application.search import UnifiedSearchEngine

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def register_hotel_search_tools(mcp: FastMCP, engine: UnifiedSearchEngine) -> None:
    """Register hotel search tools."""

    @mcp.tool()
    async def search_hotels(query: str, page: int = 1, page_size: int = 10) -> str:
        """
        Search hotels by name, city, country, brand or hotel code.

        The query is normalized, common misspellings are corrected and the
        search strategy is picked from the detected intent.

        Args:
            query: Free text, e.g. "jakarta", "marriott", "12345678"
            page: 1-based page number
            page_size: Hotels per page (1-100)

        Returns:
            JSON with items, total_hits, paging info, intent and, on failure,
            an error object

        Example:
            search_hotels("jakrata")           → Jakarta hotels (typo fixed)
            search_hotels("ibis styles")       → ibis styles across cities
            search_hotels("jakarta", page=2, page_size=5)
        """
        page_size = min(page_size, MAX_PAGE_SIZE)
        try:
            response = await engine.search(query, page_number=page, page_size=page_size)
        except HotelSearchError as e:
            logger.warning(f"search_hotels rejected: {e}")
            return json.dumps({"succeeded": False, "error": e.to_dict()}, indent=2, ensure_ascii=False)
        return json.dumps(response.to_dict(), indent=2, ensure_ascii=False)

    @mcp.tool()
    async def search_hotels_by_fields(
        code: str | None = None,
        name: str | None = None,
        city: str | None = None,
        address1: str | None = None,
        page: int = 1,
        page_size: int = 10,
        use_ngram: bool = True,
    ) -> str:
        """
        Search hotels by individual fields when the user says which is which.

        Every given field is matched with typo tolerance; use_ngram also
        matches fragments ("kempin" finds "Kempinski"). Empty fields are
        ignored. Results stay in relevance order.

        Args:
            code: Hotel code or part of it
            name: Hotel name
            city: City name
            address1: First address line
            page: 1-based page number
            page_size: Hotels per page (1-100)
            use_ngram: Also match partial words

        Returns:
            JSON in the same shape as search_hotels; normalized_query echoes
            the fields as "field:value" pairs

        Example:
            search_hotels_by_fields(name="mulia", city="jakarta")
            search_hotels_by_fields(code="JKT", use_ngram=True)
        """
        params = FieldSearchParameters(code=code, name=name, city=city, address1=address1)
        page_size = min(page_size, MAX_PAGE_SIZE)
        try:
            response = await engine.search_fields(
                params, page_number=page, page_size=page_size, use_ngram=use_ngram
            )
        except HotelSearchError as e:
            logger.warning(f"search_hotels_by_fields rejected: {e}")
            return json.dumps({"succeeded": False, "error": e.to_dict()}, indent=2, ensure_ascii=False)
        return json.dumps(response.to_dict(), indent=2, ensure_ascii=False)

    @mcp.tool()
    def analyze_hotel_query(query: str) -> str:
        """
        Show how a query would be interpreted, without searching.

        Args:
            query: Free text as a user would type it

        Returns:
            JSON with normalized_query, corrected_query, intent and the
            weighted clause plan

        Example:
            analyze_hotel_query("Jakrata")  → intent "city_name", corrected "jakarta"
        """
        analysis = engine.analyze(query)
        return json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False)
