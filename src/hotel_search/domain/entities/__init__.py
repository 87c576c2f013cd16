"""
Domain Entities

Core business objects for hotel search.
"""

from __future__ import annotations

from .field_search import SEARCHABLE_FIELDS, FieldSearchParameters
from .hotel import DOCUMENT_FIELDS, Hotel, ScoredHotel, SearchIntent
from .query_plan import Clause, CompoundClause, MatchKind, QueryClause, QueryPlan
from .response import SearchResponse

__all__ = [
    # Hotel entities
    "Hotel",
    "ScoredHotel",
    "SearchIntent",
    "DOCUMENT_FIELDS",
    # Query plan entities
    "MatchKind",
    "QueryClause",
    "CompoundClause",
    "Clause",
    "QueryPlan",
    # Response
    "SearchResponse",
    # Field search
    "FieldSearchParameters",
    "SEARCHABLE_FIELDS",
]
