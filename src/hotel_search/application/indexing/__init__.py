"""
Indexing Application Layer

Provides:
- HotelIndexer: index provisioning and batched ingestion into both indices
- IndexingReport: per-run counts and rejection reasons
"""

from .indexer import DEFAULT_BATCH_SIZE, HotelIndexer, IndexingBackend, IndexingReport

__all__ = [
    "HotelIndexer",
    "IndexingBackend",
    "IndexingReport",
    "DEFAULT_BATCH_SIZE",
]
