"""
UnifiedSearchEngine - One free-text string in, one page of hotels out.

Pipeline:
    raw query -> QueryNormalizer -> TypoCorrector -> IntentClassifier
    -> QueryStrategyBuilder -> backend.search -> ResultConsolidator
    -> GeographicDistributor -> Paginator -> SearchResponse

    Structured field search (``search_fields``) normalizes each field and
    plans with FieldQueryBuilder. It skips typo correction and geographic
    distribution.

Concurrency:
    The engine holds no mutable state. The only suspend point of a search is
    the backend round-trip, so any number of searches may run concurrently on
    one instance.

Error Handling:
    - Empty/whitespace query: empty response, backend never contacted
    - Backend failure or per-call timeout: response with zero items and
      ``error`` set to a BackendUnavailableError; no retry
    - Invalid page parameters: InvalidParameterError (caller bug)
    - Task cancellation by the caller: logged and re-raised on purpose. It
      is not reported as BackendUnavailableError; only a timeout is
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from hotel_search.domain.entities import (
    FieldSearchParameters,
    Hotel,
    QueryPlan,
    ScoredHotel,
    SearchIntent,
    SearchResponse,
)
from hotel_search.shared.exceptions import (
    BackendError,
    BackendUnavailableError,
    ErrorContext,
)

from .config import SearchConfig
from .field_query_builder import FieldQueryBuilder
from .geo_distributor import GeographicDistributor
from .intent_classifier import IntentClassifier
from .normalizer import QueryNormalizer
from .paginator import Paginator, validate_page
from .query_builder import QueryStrategyBuilder
from .result_consolidator import ResultConsolidator
from .typo_corrector import TypoCorrector

if TYPE_CHECKING:
    from hotel_search.application.indexing import HotelIndexer

    from .reference_data import ReferenceData

logger = logging.getLogger(__name__)


class SearchBackend(Protocol):
    """What the engine needs from a search backend."""

    async def search(self, plan: QueryPlan, from_: int, size: int) -> tuple[list[ScoredHotel], int]: ...


@dataclass(frozen=True, slots=True)
class QueryAnalysis:
    """Everything the engine derives from a query before calling the backend."""

    raw_query: str
    normalized_query: str
    corrected_query: str
    word_count: int
    intent: SearchIntent
    plan: QueryPlan | None

    @property
    def typo_corrected(self) -> bool:
        return self.corrected_query != self.normalized_query

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "raw_query": self.raw_query,
            "normalized_query": self.normalized_query,
            "corrected_query": self.corrected_query,
            "typo_corrected": self.typo_corrected,
            "word_count": self.word_count,
            "intent": self.intent.value,
            "plan": self.plan.to_dict() if self.plan else None,
        }


class UnifiedSearchEngine:
    """
    Hotel search relevance engine.

    Example:
        >>> engine = UnifiedSearchEngine(backend, load_reference_data())
        >>> response = await engine.search("jakrata", page_number=1, page_size=5)
        >>> response.intent
        <SearchIntent.CITY_NAME: 'city_name'>
    """

    def __init__(
        self,
        backend: SearchBackend,
        reference_data: ReferenceData,
        config: SearchConfig | None = None,
        *,
        indexer: HotelIndexer | None = None,
    ) -> None:
        self._backend = backend
        self._indexer = indexer
        self.config = config or SearchConfig()

        self._normalizer = QueryNormalizer()
        self._corrector = TypoCorrector(reference_data)
        self._classifier = IntentClassifier(reference_data)
        self._builder = QueryStrategyBuilder()
        self._consolidator = ResultConsolidator(self.config.dominance_threshold)
        self._field_builder = FieldQueryBuilder()
        self._field_consolidator = ResultConsolidator(self.config.field_dominance_threshold)
        self._distributor = GeographicDistributor(self.config.max_cities, self.config.max_hotels)
        self._paginator = Paginator()

    @property
    def backend(self) -> SearchBackend:
        return self._backend

    @property
    def indexer(self) -> HotelIndexer | None:
        return self._indexer

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def analyze(self, raw_query: str | None) -> QueryAnalysis:
        """Run normalize -> correct -> classify -> build without touching the backend."""
        raw = raw_query or ""
        normalized = self._normalizer.normalize(raw)
        if not normalized:
            return QueryAnalysis(raw, "", "", 0, SearchIntent.GENERAL, None)

        corrected = self._corrector.correct(normalized)
        word_count = len(corrected.split())
        # Classification sees the corrected query so "jakrata" becomes a city search
        intent = self._classifier.classify(corrected, word_count)
        plan = self._builder.build(normalized, corrected, intent)
        return QueryAnalysis(raw, normalized, corrected, word_count, intent, plan)

    async def search(
        self,
        raw_query: str | None,
        page_number: int = 1,
        page_size: int | None = None,
        *,
        timeout: float | None = None,
    ) -> SearchResponse:
        """
        Search hotels.

        Args:
            raw_query: Free text (name, city, country, brand or code)
            page_number: 1-based page number
            page_size: Items per page (default: ``config.default_page_size``)
            timeout: Seconds allowed for the backend round-trip

        Returns:
            SearchResponse; never raises for an empty query or backend failure

        Raises:
            InvalidParameterError: page_number or page_size below 1
        """
        started = time.perf_counter()
        if page_size is None:
            page_size = self.config.default_page_size
        analysis = self.analyze(raw_query)
        if analysis.plan is None:
            return SearchResponse.empty(page_number, page_size)
        validate_page(page_number, page_size)

        logger.debug(
            "Search normalized=%r corrected=%r intent=%s",
            analysis.normalized_query,
            analysis.corrected_query,
            analysis.intent.value,
        )

        try:
            hits, backend_total = await self._query_backend(analysis.plan, analysis.normalized_query, timeout)
        except BackendError as e:
            return self._failed(
                analysis.intent,
                analysis.normalized_query,
                analysis.corrected_query,
                page_number,
                page_size,
                started,
                e,
            )

        consolidated = self._consolidator.consolidate(hits, backend_total)
        if consolidated.collapsed:
            distributed = list(consolidated.hits)
        else:
            distributed = self._distributor.distribute(consolidated.hits, analysis.intent)

        total_hits = len(distributed) if self.config.report_servable_total else consolidated.total
        page = self._paginator.paginate(distributed, page_number, page_size)

        return SearchResponse(
            items=tuple(hit.hotel for hit in page),
            total_hits=total_hits,
            elapsed_ms=(time.perf_counter() - started) * 1000,
            page_number=page_number,
            page_size=page_size,
            intent=analysis.intent,
            normalized_query=analysis.normalized_query,
            corrected_query=analysis.corrected_query,
            collapsed=consolidated.collapsed,
        )

    async def search_fields(
        self,
        params: FieldSearchParameters,
        page_number: int = 1,
        page_size: int | None = None,
        *,
        use_ngram: bool = True,
        timeout: float | None = None,
    ) -> SearchResponse:
        """
        Structured search by code, name, city and/or address.

        Each supplied field is normalized and matched fuzzily (plus partial
        n-gram matching when ``use_ngram``). Results keep backend score order:
        dominance collapse applies, city distribution does not.

        Args:
            params: Per-field values; blank fields are ignored
            page_number: 1-based page number
            page_size: Items per page (default: ``config.default_page_size``)
            use_ngram: Add partial n-gram clauses
            timeout: Seconds allowed for the backend round-trip

        Returns:
            SearchResponse; empty when no field has text

        Raises:
            InvalidParameterError: page_number or page_size below 1
        """
        started = time.perf_counter()
        if page_size is None:
            page_size = self.config.default_page_size
        normalized = params.normalized(self._normalizer.normalize)
        plan = self._field_builder.build(normalized, use_ngram=use_ngram)
        if plan is None:
            return SearchResponse.empty(page_number, page_size)
        validate_page(page_number, page_size)

        echo = normalized.describe()
        logger.debug("Field search %s ngram=%s", echo, use_ngram)

        try:
            hits, backend_total = await self._query_backend(plan, echo, timeout)
        except BackendError as e:
            return self._failed(plan.intent, echo, echo, page_number, page_size, started, e)

        consolidated = self._field_consolidator.consolidate(hits, backend_total)
        ranked = list(consolidated.hits)
        total_hits = len(ranked) if self.config.report_servable_total else consolidated.total
        page = self._paginator.paginate(ranked, page_number, page_size)

        return SearchResponse(
            items=tuple(hit.hotel for hit in page),
            total_hits=total_hits,
            elapsed_ms=(time.perf_counter() - started) * 1000,
            page_number=page_number,
            page_size=page_size,
            intent=plan.intent,
            normalized_query=echo,
            corrected_query=echo,
            collapsed=consolidated.collapsed,
        )

    async def _query_backend(
        self,
        plan: QueryPlan,
        query_text: str,
        timeout: float | None,
    ) -> tuple[list[ScoredHotel], int]:
        """Fetch the candidate pool; timeouts surface as BackendUnavailableError."""
        try:
            async with asyncio.timeout(timeout):
                return await self._backend.search(plan, 0, self.config.candidate_pool_size)
        except TimeoutError as e:
            logger.error("Search timed out for %r after %ss", query_text, timeout)
            raise BackendUnavailableError(
                f"Search backend did not answer within {timeout}s",
                context=ErrorContext(operation="search", input_value=query_text),
            ) from e
        except BackendError as e:
            logger.error("Search failed for %r: %s", query_text, e)
            raise
        except asyncio.CancelledError:
            logger.warning("Search cancelled for %r", query_text)
            raise

    @staticmethod
    def _failed(
        intent: SearchIntent,
        normalized_query: str,
        corrected_query: str,
        page_number: int,
        page_size: int,
        started: float,
        error: BackendError,
    ) -> SearchResponse:
        return SearchResponse(
            items=(),
            total_hits=0,
            elapsed_ms=(time.perf_counter() - started) * 1000,
            page_number=page_number,
            page_size=page_size,
            intent=intent,
            normalized_query=normalized_query,
            corrected_query=corrected_query,
            error=error,
        )

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    async def index_document(self, hotel: Hotel) -> bool:
        """Index one hotel into both indices. False if skipped or rejected."""
        return await self.index_documents([hotel])

    async def index_documents(self, hotels: list[Hotel]) -> bool:
        """Index hotels in batches. True only if every hotel was indexed."""
        if self._indexer is None:
            raise RuntimeError("UnifiedSearchEngine was created without an indexer")
        if not hotels:
            return True
        report = await self._indexer.index_hotels(hotels)
        return report.succeeded and report.skipped == 0
