"""
HotelIndexer - Batched ingestion into both hotel indices.

Records without a code or a name are skipped. The rest are split into
batches (1000 by default) and each batch is written to the fuzzy index and
the n-gram index. Batches are independent: a failed or partially rejected
batch is recorded in the report and the remaining batches still run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from hotel_search.shared.async_utils import batch_process, chunked
from hotel_search.shared.exceptions import PartialIndexFailureError

if TYPE_CHECKING:
    from hotel_search.domain.entities import Hotel
    from hotel_search.infrastructure.elasticsearch import BulkResult

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000


class IndexingBackend(Protocol):
    """What the indexer needs from a search backend."""

    @property
    def indices(self) -> tuple[str, str]: ...

    async def bulk_index(self, hotels: list[Hotel], index: str) -> BulkResult: ...

    async def index_exists(self, name: str) -> bool: ...

    async def create_index(self, name: str, body: dict[str, Any]) -> None: ...

    async def delete_index(self, name: str) -> bool: ...


@dataclass
class IndexingReport:
    """
    Outcome of one ingestion run.

    Counts are per hotel: a hotel counts as indexed only if both indices
    accepted it.
    """

    submitted: int = 0
    indexed: int = 0
    rejected: int = 0
    skipped: int = 0
    failed_batches: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.rejected == 0 and self.failed_batches == 0

    @property
    def error(self) -> PartialIndexFailureError | None:
        if self.succeeded:
            return None
        return PartialIndexFailureError(self.rejected, self.submitted, reasons=self.errors)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "submitted": self.submitted,
            "indexed": self.indexed,
            "rejected": self.rejected,
            "skipped": self.skipped,
            "failed_batches": self.failed_batches,
            "succeeded": self.succeeded,
        }
        if self.errors:
            result["errors"] = self.errors[:20]
        return result


@dataclass
class _BatchOutcome:
    size: int
    indexed: int
    errors: list[str]


class HotelIndexer:
    """Provisions the hotel indices and ingests hotels in batches."""

    def __init__(self, backend: IndexingBackend) -> None:
        self._backend = backend

    async def ensure_indices(self, recreate: bool = False) -> dict[str, str]:
        """
        Make sure both indices exist.

        The fuzzy index is only created when missing. The n-gram index is
        dropped and recreated when ``recreate`` is set.

        Returns:
            index name -> "created" | "recreated" | "exists"
        """
        from hotel_search.infrastructure.elasticsearch.mappings import index_settings

        fuzzy, ngram = self._backend.indices
        status: dict[str, str] = {}

        if await self._backend.index_exists(fuzzy):
            status[fuzzy] = "exists"
        else:
            await self._backend.create_index(fuzzy, index_settings("fuzzy"))
            status[fuzzy] = "created"

        ngram_exists = await self._backend.index_exists(ngram)
        if ngram_exists and recreate:
            await self._backend.delete_index(ngram)
            await self._backend.create_index(ngram, index_settings("ngram"))
            status[ngram] = "recreated"
        elif not ngram_exists:
            await self._backend.create_index(ngram, index_settings("ngram"))
            status[ngram] = "created"
        else:
            status[ngram] = "exists"

        logger.info("Index status: %s", status)
        return status

    async def index_hotels(
        self,
        hotels: Iterable[Hotel],
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_concurrent_batches: int = 1,
    ) -> IndexingReport:
        """
        Ingest hotels into both indices.

        Args:
            hotels: Records to ingest; records without code or name are skipped
            batch_size: Documents per ``_bulk`` request
            max_concurrent_batches: Batches in flight at once (1 = sequential)

        Returns:
            IndexingReport; never raises for a failed batch
        """
        report = IndexingReport()
        valid: list[Hotel] = []
        for hotel in hotels:
            if hotel.is_indexable:
                valid.append(hotel)
            else:
                report.skipped += 1

        if report.skipped:
            logger.warning("Skipped %d hotels without code or name", report.skipped)
        report.submitted = len(valid)
        if not valid:
            return report

        batches = list(chunked(valid, batch_size))
        outcomes = await batch_process(batches, self._write_batch, max_concurrency=max_concurrent_batches)

        for number, (batch, outcome) in enumerate(zip(batches, outcomes), start=1):
            if isinstance(outcome, Exception):
                report.failed_batches += 1
                report.rejected += len(batch)
                report.errors.append(f"batch {number}: {outcome}")
                logger.error("Batch %d of %d failed: %s", number, len(batches), outcome)
                continue
            report.indexed += outcome.indexed
            report.rejected += outcome.size - outcome.indexed
            report.errors.extend(outcome.errors)

        logger.info(
            "Indexed %d of %d hotels (%d rejected, %d skipped, %d failed batches)",
            report.indexed,
            report.submitted,
            report.rejected,
            report.skipped,
            report.failed_batches,
        )
        return report

    async def _write_batch(self, batch: list[Hotel]) -> _BatchOutcome:
        rejected_codes: set[str] = set()
        errors: list[str] = []

        for index in self._backend.indices:
            result = await self._backend.bulk_index(list(batch), index)
            if result.has_errors:
                errors.extend(f"{index}: {reason}" for reason in result.reasons)
                rejected_codes.update(result.failed_ids)

        # A hotel rejected by either index counts once
        rejected = len(rejected_codes & {hotel.code for hotel in batch})
        return _BatchOutcome(size=len(batch), indexed=len(batch) - rejected, errors=errors)

