"""
Indexing Tools - Hotel ingestion and index provisioning

Tools:
- setup_hotel_indices: create the fuzzy and n-gram indices
- index_hotels: write hotel records to both indices in batches
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from hotel_search.domain.entities import DOCUMENT_FIELDS, Hotel
from hotel_search.shared.exceptions import HotelSearchError, InvalidParameterError

if TYPE_CHECKING:
    from hotel_search.application.indexing import HotelIndexer

logger = logging.getLogger(__name__)


def hotel_from_record(record: dict[str, Any]) -> Hotel:
    """
    Build a Hotel from a tool argument.

    Accepts attribute names (``code``, ``postal_code``) or index document
    names (``hotelcode``, ``postalcode``).
    """
    if not isinstance(record, dict):
        raise InvalidParameterError("hotels", record, "a list of objects")
    document: dict[str, Any] = {}
    for attr, doc_field in DOCUMENT_FIELDS.items():
        value = record.get(attr, record.get(doc_field))
        if value is not None:
            document[doc_field] = value
    return Hotel.from_document(document)


def register_indexing_tools(mcp: FastMCP, indexer: HotelIndexer) -> None:
    """Register ingestion tools."""

    @mcp.tool()
    async def setup_hotel_indices(recreate: bool = False) -> str:
        """
        Create the hotel indices when missing.

        Args:
            recreate: Drop and rebuild the n-gram index

        Returns:
            JSON mapping index name to "created", "recreated" or "exists"
        """
        try:
            status = await indexer.ensure_indices(recreate=recreate)
        except HotelSearchError as e:
            logger.error(f"setup_hotel_indices failed: {e}")
            return json.dumps({"succeeded": False, "error": e.to_dict()}, indent=2)
        return json.dumps({"succeeded": True, "indices": status}, indent=2)

    @mcp.tool()
    async def index_hotels(hotels: list[dict[str, Any]], batch_size: int = 1000) -> str:
        """
        Write hotels to both indices.

        Hotels without code or name are skipped. A rejected batch does not
        stop the remaining batches.

        Args:
            hotels: Records with code, name and optional city, address1,
                    address2, state, country, postal_code, phone, last_updated
            batch_size: Documents per bulk request

        Returns:
            JSON report: submitted, indexed, rejected, skipped, failed_batches

        Example:
            index_hotels([{"code": "JKT001", "name": "Hotel Mulia", "city": "Jakarta"}])
        """
        try:
            if batch_size < 1:
                raise InvalidParameterError("batch_size", batch_size, "an integer >= 1")
            records = [hotel_from_record(record) for record in hotels]
        except HotelSearchError as e:
            return json.dumps({"succeeded": False, "error": e.to_dict()}, indent=2, ensure_ascii=False)

        report = await indexer.index_hotels(records, batch_size=batch_size)
        result = report.to_dict()
        if report.error is not None:
            result["error"] = report.error.to_dict()
        return json.dumps(result, indent=2, ensure_ascii=False)
