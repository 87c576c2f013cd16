"""
Domain Layer - Core Business Objects

Contains:
- entities: Hotel, SearchIntent, QueryPlan, SearchResponse
"""

from .entities import (
    Hotel,
    MatchKind,
    QueryPlan,
    ScoredHotel,
    SearchIntent,
    SearchResponse,
)

__all__ = [
    "Hotel",
    "ScoredHotel",
    "SearchIntent",
    "MatchKind",
    "QueryPlan",
    "SearchResponse",
]
