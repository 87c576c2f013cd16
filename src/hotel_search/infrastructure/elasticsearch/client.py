"""
ElasticsearchBackend - Async REST client for the hotel indices.

Implements the search backend the engine consumes plus the index lifecycle
and bulk ingestion the indexer needs.

Error Handling:
    Every transport failure, non-2xx status (missing index included) and
    undecodable body is raised as BackendUnavailableError. Nothing is retried
    here; retry policy belongs to the caller.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx
from typing_extensions import Self

from hotel_search.domain.entities import Hotel, QueryPlan, ScoredHotel
from hotel_search.shared.exceptions import BackendUnavailableError, ErrorContext

from .dsl import build_search_body

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:9200"
DEFAULT_INDEX = "hotels"
DEFAULT_NGRAM_INDEX = "hotels_ngram"
DEFAULT_TIMEOUT = 10.0


@dataclass
class BulkResult:
    """Outcome of one ``_bulk`` request."""

    submitted: int = 0
    indexed: int = 0
    failed: int = 0
    failed_ids: list[str] = field(default_factory=list)
    reasons: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return self.failed > 0


class ElasticsearchBackend:
    """
    Elasticsearch REST client over ``httpx.AsyncClient``.

    Searches go to the n-gram index (it carries every sub-field a query plan
    may touch). Writes name their target index explicitly.

    Example:
        async with ElasticsearchBackend("http://localhost:9200") as backend:
            hits, total = await backend.search(plan, 0, 100)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        *,
        index: str = DEFAULT_INDEX,
        ngram_index: str = DEFAULT_NGRAM_INDEX,
        timeout: float = DEFAULT_TIMEOUT,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the backend.

        Args:
            base_url: Cluster URL
            index: Name of the fuzzy (whole-token) index
            ngram_index: Name of the n-gram index used for searching
            timeout: Request timeout in seconds
            api_key: Optional Elasticsearch API key
            transport: Custom httpx transport (tests use ``httpx.MockTransport``)
        """
        self.base_url = base_url.rstrip("/")
        self.index = index
        self.ngram_index = ngram_index

        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"ApiKey {api_key}"

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
            limits=httpx.Limits(
                max_connections=20,
                max_keepalive_connections=10,
                keepalive_expiry=30.0,
            ),
        )

    @property
    def indices(self) -> tuple[str, str]:
        return (self.index, self.ngram_index)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response:
        operation = f"{method} {path}"
        try:
            response = await self._client.request(method, path, json=json_body, content=content, headers=headers)
        except httpx.TimeoutException as e:
            logger.exception(f"Elasticsearch timeout on {operation}")
            raise BackendUnavailableError(
                f"Search backend timed out: {operation}",
                context=ErrorContext(operation=operation),
            ) from e
        except httpx.RequestError as e:
            logger.exception(f"Elasticsearch request failed on {operation}: {e}")
            raise BackendUnavailableError(
                f"Search backend unreachable: {e}",
                context=ErrorContext(operation=operation),
            ) from e

        if response.status_code == 404 and allow_not_found:
            return response
        if response.is_error:
            reason = _error_reason(response)
            logger.error(f"Elasticsearch HTTP {response.status_code} on {operation}: {reason}")
            raise BackendUnavailableError(
                f"Search backend returned HTTP {response.status_code}: {reason}",
                status_code=response.status_code,
                context=ErrorContext(operation=operation),
            )
        return response

    @staticmethod
    def _json(response: httpx.Response, operation: str) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise BackendUnavailableError(
                "Search backend returned an undecodable body",
                context=ErrorContext(operation=operation, input_value=response.text[:200]),
            ) from e
        if not isinstance(data, dict):
            raise BackendUnavailableError(
                "Search backend returned an unexpected body",
                context=ErrorContext(operation=operation),
            )
        return data

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def search(self, plan: QueryPlan, from_: int, size: int) -> tuple[list[ScoredHotel], int]:
        """
        Execute a query plan.

        Returns:
            (hits in backend score order, total hit count)

        Raises:
            BackendUnavailableError: Transport, HTTP or body errors
        """
        path = f"/{self.ngram_index}/_search"
        response = await self._request("POST", path, json_body=build_search_body(plan, from_, size))
        data = self._json(response, path)

        try:
            hits_block = data.get("hits") or {}
            raw_total = hits_block.get("total", 0)
            # ES 7+ returns {"value": n, "relation": "eq"}; older versions a bare int
            total = int(raw_total.get("value", 0)) if isinstance(raw_total, dict) else int(raw_total or 0)

            hits = [
                ScoredHotel(
                    hotel=Hotel.from_document(hit.get("_source") or {}),
                    score=float(hit.get("_score") or 0.0),
                )
                for hit in hits_block.get("hits") or []
            ]
        except (TypeError, ValueError, AttributeError) as e:
            logger.error(f"Malformed search response from {path}: {e}")
            raise BackendUnavailableError(
                f"Malformed search response: {e}",
                context=ErrorContext(operation=path),
            ) from e

        logger.debug("Backend returned %d of %d hits for intent=%s", len(hits), total, plan.intent.value)
        return hits, total

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------

    async def index_document(self, hotel: Hotel, index: str | None = None) -> bool:
        """Index one document with id = hotel code."""
        target = index or self.ngram_index
        await self._request("PUT", f"/{target}/_doc/{hotel.code}", json_body=hotel.to_document())
        return True

    async def bulk_index(self, hotels: list[Hotel], index: str) -> BulkResult:
        """
        Index many documents with one ``_bulk`` request.

        Raises:
            BackendUnavailableError: The request as a whole failed
        """
        result = BulkResult(submitted=len(hotels))
        if not hotels:
            return result

        lines: list[str] = []
        for hotel in hotels:
            lines.append(json.dumps({"index": {"_index": index, "_id": hotel.code}}))
            lines.append(json.dumps(hotel.to_document(), ensure_ascii=False))
        body = ("\n".join(lines) + "\n").encode("utf-8")

        response = await self._request(
            "POST",
            "/_bulk",
            content=body,
            headers={"Content-Type": "application/x-ndjson"},
        )
        data = self._json(response, "/_bulk")

        for item in data.get("items") or []:
            action = item.get("index") or item.get("create") or {}
            error = action.get("error")
            if error or int(action.get("status", 200)) >= 300:
                result.failed += 1
                result.failed_ids.append(str(action.get("_id")))
                if isinstance(error, dict):
                    result.reasons.append(f"{action.get('_id')}: {error.get('type')}: {error.get('reason')}")
                else:
                    result.reasons.append(f"{action.get('_id')}: {error or action.get('status')}")
            else:
                result.indexed += 1

        if result.has_errors:
            logger.warning(f"Bulk into {index}: {result.failed} of {result.submitted} documents rejected")
        return result

    # -------------------------------------------------------------------------
    # Index lifecycle
    # -------------------------------------------------------------------------

    async def index_exists(self, name: str) -> bool:
        response = await self._request("HEAD", f"/{name}", allow_not_found=True)
        return response.status_code != 404

    async def create_index(self, name: str, body: dict[str, Any]) -> None:
        await self._request("PUT", f"/{name}", json_body=body)
        logger.info(f"Created index {name}")

    async def delete_index(self, name: str) -> bool:
        """Delete an index. False if it did not exist."""
        response = await self._request("DELETE", f"/{name}", allow_not_found=True)
        deleted = response.status_code != 404
        if deleted:
            logger.info(f"Deleted index {name}")
        return deleted

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


def _error_reason(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        return f"{error.get('type')}: {error.get('reason')}"
    return str(error or response.reason_phrase)
