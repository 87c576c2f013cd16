"""
Search Application Layer

Provides:
- QueryNormalizer / TypoCorrector: canonical query text
- IntentClassifier: what the user is looking for
- QueryStrategyBuilder: intent-specific weighted query plans
- FieldQueryBuilder: weighted plans for structured field search
- ResultConsolidator / GeographicDistributor / Paginator: post-processing
- UnifiedSearchEngine: the whole pipeline behind one ``search()`` call
"""

from .config import SearchConfig
from .engine import QueryAnalysis, SearchBackend, UnifiedSearchEngine
from .field_query_builder import FieldQueryBuilder
from .geo_distributor import GeographicDistributor
from .intent_classifier import IntentClassifier
from .normalizer import QueryNormalizer, normalize_query
from .paginator import Paginator, validate_page
from .query_builder import QueryStrategyBuilder
from .reference_data import ReferenceData, load_reference_data
from .result_consolidator import ConsolidatedResult, ResultConsolidator
from .typo_corrector import TypoCorrector

__all__ = [
    # Engine
    "UnifiedSearchEngine",
    "SearchBackend",
    "QueryAnalysis",
    "SearchConfig",
    # Query understanding
    "QueryNormalizer",
    "normalize_query",
    "TypoCorrector",
    "ReferenceData",
    "load_reference_data",
    "IntentClassifier",
    "QueryStrategyBuilder",
    "FieldQueryBuilder",
    # Post-processing
    "ResultConsolidator",
    "ConsolidatedResult",
    "GeographicDistributor",
    "Paginator",
    "validate_page",
]
