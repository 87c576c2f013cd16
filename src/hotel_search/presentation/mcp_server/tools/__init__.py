"""
Hotel Search MCP Tools

✅ Search (3):
- search_hotels: free-text hotel search
- search_hotels_by_fields: structured search by code, name, city, address
- analyze_hotel_query: intent and query plan diagnostics

✅ Ingestion (2):
- setup_hotel_indices: provision the fuzzy and n-gram indices
- index_hotels: batched ingestion into both indices

Usage:
    from .tools import register_all_tools
    register_all_tools(mcp, engine, indexer)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from .hotel_search import register_hotel_search_tools
from .indexing import hotel_from_record, register_indexing_tools

if TYPE_CHECKING:
    from hotel_search.application.indexing import HotelIndexer
    from hotel_search.application.search import UnifiedSearchEngine

logger = logging.getLogger(__name__)

TOOL_CATEGORIES = {
    "search": ["search_hotels", "search_hotels_by_fields", "analyze_hotel_query"],
    "ingestion": ["setup_hotel_indices", "index_hotels"],
}


def register_all_tools(mcp: FastMCP, engine: UnifiedSearchEngine, indexer: HotelIndexer) -> dict[str, int]:
    """
    Register every tool.

    Returns:
        Category name -> number of tools registered
    """
    register_hotel_search_tools(mcp, engine)
    register_indexing_tools(mcp, indexer)

    stats = {category: len(names) for category, names in TOOL_CATEGORIES.items()}
    logger.info("Registered tools: %s", stats)
    return stats


__all__ = [
    "register_all_tools",
    "register_hotel_search_tools",
    "register_indexing_tools",
    "hotel_from_record",
    "TOOL_CATEGORIES",
]
