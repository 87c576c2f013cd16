"""
Hotel Search - Unified search relevance engine for hotel records

Turns one free-text query (name, city, country, brand or hotel code) into an
intent-specific Elasticsearch query and post-processes the hits into a small,
geographically diverse result page.

Usage:
    from hotel_search import UnifiedSearchEngine, load_reference_data
    from hotel_search.infrastructure.elasticsearch import ElasticsearchBackend

    async with ElasticsearchBackend("http://localhost:9200") as backend:
        engine = UnifiedSearchEngine(backend, load_reference_data())
        response = await engine.search("jakarta", page_number=1, page_size=10)

    for hotel in response.items:
        print(f"{hotel.code}: {hotel.name} ({hotel.city})")

Features:
    - Query normalization and typo correction
    - Intent classification (code, exact name, brand, city, country, general)
    - Boosted multi-field query plans per intent
    - Dominant-hit collapsing and per-city result distribution
    - Batched ingestion into fuzzy and n-gram indices
"""

from .application.search import SearchConfig, UnifiedSearchEngine, load_reference_data
from .domain.entities import Hotel, ScoredHotel, SearchIntent, SearchResponse

__version__ = "0.1.0"

__all__ = [
    "UnifiedSearchEngine",
    "SearchConfig",
    "load_reference_data",
    "Hotel",
    "ScoredHotel",
    "SearchIntent",
    "SearchResponse",
    "__version__",
]
