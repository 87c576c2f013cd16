"""Tests for hotel search and ingestion MCP tools."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from hotel_search.application.indexing import IndexingReport
from hotel_search.presentation.mcp_server.tools import (
    hotel_from_record,
    register_all_tools,
    register_hotel_search_tools,
    register_indexing_tools,
)
from hotel_search.shared.exceptions import BackendUnavailableError, InvalidParameterError


def _capture_tools(register, *args):
    tools = {}
    mcp = MagicMock()
    mcp.tool = lambda: lambda func: (tools.__setitem__(func.__name__, func), func)[1]
    register(mcp, *args)
    return tools


@pytest.fixture
def search_tools(engine):
    return _capture_tools(register_hotel_search_tools, engine)


@pytest.fixture
def indexer():
    indexer = MagicMock()
    indexer.ensure_indices = AsyncMock(return_value={"hotels": "created", "hotels_ngram": "created"})
    indexer.index_hotels = AsyncMock(return_value=IndexingReport(submitted=1, indexed=1))
    return indexer


@pytest.fixture
def indexing_tools(indexer):
    return _capture_tools(register_indexing_tools, indexer)


# ============================================================
# search_hotels
# ============================================================


class TestSearchHotels:
    async def test_returns_page_json(self, search_tools, mock_backend, hits_factory):
        mock_backend.search.return_value = (hits_factory(["Jakarta"] * 12), 12)
        data = json.loads(await search_tools["search_hotels"]("Jakrata", page=2, page_size=5))
        assert data["succeeded"] is True
        assert data["intent"] == "city_name"
        assert data["corrected_query"] == "jakarta"
        assert data["page_number"] == 2
        assert [item["code"] for item in data["items"]] == [f"H{i:07d}" for i in range(5, 10)]

    async def test_empty_query(self, search_tools, mock_backend):
        data = json.loads(await search_tools["search_hotels"]("   "))
        assert data["total_hits"] == 0
        assert data["items"] == []
        mock_backend.search.assert_not_called()

    async def test_page_size_capped(self, search_tools, mock_backend):
        data = json.loads(await search_tools["search_hotels"]("jakarta", page_size=5000))
        assert data["page_size"] == 100

    async def test_invalid_page_is_reported(self, search_tools):
        data = json.loads(await search_tools["search_hotels"]("jakarta", page=0))
        assert data["succeeded"] is False
        assert data["error"]["type"] == "InvalidParameterError"

    async def test_backend_failure_is_reported(self, search_tools, mock_backend):
        mock_backend.search.side_effect = BackendUnavailableError("connection refused")
        data = json.loads(await search_tools["search_hotels"]("jakarta"))
        assert data["succeeded"] is False
        assert data["error"]["retryable"] is True
        assert data["items"] == []


# ============================================================
# search_hotels_by_fields
# ============================================================


class TestSearchHotelsByFields:
    async def test_returns_page_json(self, search_tools, mock_backend, hits_factory):
        mock_backend.search.return_value = (hits_factory(["Jakarta"] * 3), 3)
        data = json.loads(await search_tools["search_hotels_by_fields"](name="Mulia", city="Jakarta"))
        assert data["succeeded"] is True
        assert data["intent"] == "general"
        assert data["normalized_query"] == "name:mulia city:jakarta"
        assert [item["code"] for item in data["items"]] == ["H0000000", "H0000001", "H0000002"]

    async def test_ngram_switch(self, search_tools, mock_backend):
        await search_tools["search_hotels_by_fields"](code="JKT", use_ngram=False)
        plan = mock_backend.search.call_args.args[0]
        assert [c.match_kind.value for c in plan.clauses] == ["fuzzy"]

    async def test_no_fields(self, search_tools, mock_backend):
        data = json.loads(await search_tools["search_hotels_by_fields"]())
        assert data["items"] == []
        mock_backend.search.assert_not_called()

    async def test_invalid_page_is_reported(self, search_tools):
        data = json.loads(await search_tools["search_hotels_by_fields"](city="jakarta", page=0))
        assert data["succeeded"] is False
        assert data["error"]["type"] == "InvalidParameterError"

    async def test_backend_failure_is_reported(self, search_tools, mock_backend):
        mock_backend.search.side_effect = BackendUnavailableError("connection refused")
        data = json.loads(await search_tools["search_hotels_by_fields"](city="jakarta"))
        assert data["succeeded"] is False
        assert data["error"]["retryable"] is True


# ============================================================
# analyze_hotel_query
# ============================================================


class TestAnalyzeHotelQuery:
    def test_analysis(self, search_tools, mock_backend):
        data = json.loads(search_tools["analyze_hotel_query"]("Marriot"))
        assert data["corrected_query"] == "marriott"
        assert data["intent"] == "hotel_brand"
        assert data["plan"]["clauses"]
        mock_backend.search.assert_not_called()

    def test_hotel_code(self, search_tools):
        data = json.loads(search_tools["analyze_hotel_query"]("12345678"))
        assert data["intent"] == "hotel_code"


# ============================================================
# setup_hotel_indices / index_hotels
# ============================================================


class TestIndexingTools:
    async def test_setup(self, indexing_tools, indexer):
        data = json.loads(await indexing_tools["setup_hotel_indices"](recreate=True))
        assert data == {"succeeded": True, "indices": {"hotels": "created", "hotels_ngram": "created"}}
        indexer.ensure_indices.assert_awaited_once_with(recreate=True)

    async def test_setup_failure(self, indexing_tools, indexer):
        indexer.ensure_indices.side_effect = BackendUnavailableError("down")
        data = json.loads(await indexing_tools["setup_hotel_indices"]())
        assert data["succeeded"] is False

    async def test_index_hotels(self, indexing_tools, indexer):
        data = json.loads(
            await indexing_tools["index_hotels"](
                [{"code": "JKT001", "name": "Hotel Mulia", "city": "Jakarta"}],
                batch_size=500,
            )
        )
        assert data["succeeded"] is True
        records = indexer.index_hotels.await_args.args[0]
        assert records[0].code == "JKT001"
        assert indexer.index_hotels.await_args.kwargs["batch_size"] == 500

    async def test_index_hotels_partial_failure(self, indexing_tools, indexer):
        indexer.index_hotels.return_value = IndexingReport(submitted=2, indexed=1, rejected=1, errors=["bad"])
        data = json.loads(await indexing_tools["index_hotels"]([{"code": "A", "name": "A"}, {"code": "B", "name": "B"}]))
        assert data["succeeded"] is False
        assert data["error"]["type"] == "PartialIndexFailureError"

    async def test_index_hotels_invalid_batch_size(self, indexing_tools, indexer):
        data = json.loads(await indexing_tools["index_hotels"]([{"code": "A", "name": "A"}], batch_size=0))
        assert data["error"]["type"] == "InvalidParameterError"
        indexer.index_hotels.assert_not_awaited()

    async def test_index_hotels_invalid_record(self, indexing_tools, indexer):
        data = json.loads(await indexing_tools["index_hotels"](["not a record"]))
        assert data["succeeded"] is False
        indexer.index_hotels.assert_not_awaited()


class TestHotelFromRecord:
    def test_attribute_names(self):
        hotel = hotel_from_record({"code": "A1", "name": "Hotel A", "postal_code": "12345"})
        assert (hotel.code, hotel.postal_code) == ("A1", "12345")

    def test_document_names(self):
        hotel = hotel_from_record({"hotelcode": "A1", "hotelname": "Hotel A", "cityname": "Bandung"})
        assert (hotel.code, hotel.name, hotel.city) == ("A1", "Hotel A", "Bandung")

    def test_timestamp(self):
        assert hotel_from_record({"code": "A1", "name": "A", "last_updated": "2024-05-01"}).last_updated.year == 2024

    def test_not_a_dict(self):
        with pytest.raises(InvalidParameterError):
            hotel_from_record("A1")  # type: ignore[arg-type]


class TestRegisterAllTools:
    def test_stats(self, engine, indexer):
        tools = {}
        mcp = MagicMock()
        mcp.tool = lambda: lambda func: (tools.__setitem__(func.__name__, func), func)[1]
        stats = register_all_tools(mcp, engine, indexer)
        assert stats == {"search": 3, "ingestion": 2}
        assert set(tools) == {
            "search_hotels",
            "search_hotels_by_fields",
            "analyze_hotel_query",
            "setup_hotel_indices",
            "index_hotels",
        }
