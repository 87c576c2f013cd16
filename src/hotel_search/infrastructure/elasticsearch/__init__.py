"""
Elasticsearch search backend.

Provides:
- ElasticsearchBackend: async REST client (search, bulk, index lifecycle)
- plan_to_query / build_search_body: QueryPlan -> query DSL
- index_settings: settings and mappings for the fuzzy and n-gram indices
"""

from .client import (
    DEFAULT_INDEX,
    DEFAULT_NGRAM_INDEX,
    DEFAULT_TIMEOUT,
    DEFAULT_URL,
    BulkResult,
    ElasticsearchBackend,
)
from .dsl import build_search_body, clause_to_query, document_field, plan_to_query
from .mappings import IndexKind, index_settings

__all__ = [
    "ElasticsearchBackend",
    "BulkResult",
    "DEFAULT_URL",
    "DEFAULT_INDEX",
    "DEFAULT_NGRAM_INDEX",
    "DEFAULT_TIMEOUT",
    "plan_to_query",
    "build_search_body",
    "clause_to_query",
    "document_field",
    "index_settings",
    "IndexKind",
]
