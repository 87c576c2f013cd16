"""
Tests for MCP Server initialization and registration.
"""

from unittest.mock import patch

import pytest

from hotel_search.container import ApplicationContainer
from hotel_search.presentation.mcp_server import create_server, get_container, main
from hotel_search.presentation.mcp_server import server as srv_mod
from hotel_search.shared.exceptions import ConfigurationError

SETTINGS = {
    "elasticsearch": {
        "url": "http://es.test:9200",
        "index": "hotels",
        "ngram_index": "hotels_ngram",
        "timeout": 5.0,
        "api_key": None,
    },
    "reference_data_path": None,
    "search": {},
}


@pytest.fixture(autouse=True)
def _restore_container():
    original = srv_mod._container
    yield
    srv_mod._container = original


class TestCreateServer:
    def test_create_server_with_settings(self):
        server = create_server(SETTINGS, name="hotel-search-test")
        assert server.name == "hotel-search-test"
        container = get_container()
        assert isinstance(container, ApplicationContainer)
        assert container.config.elasticsearch.url() == "http://es.test:9200"

    async def test_tools_registered(self):
        server = create_server(SETTINGS)
        names = {tool.name for tool in await server.list_tools()}
        assert names == {
            "search_hotels",
            "search_hotels_by_fields",
            "analyze_hotel_query",
            "setup_hotel_indices",
            "index_hotels",
        }

    def test_create_server_from_environment(self, monkeypatch):
        monkeypatch.setenv("ELASTICSEARCH_URL", "http://from-env:9200")
        create_server()
        assert get_container().config.elasticsearch.url() == "http://from-env:9200"

    def test_bad_environment(self, monkeypatch):
        monkeypatch.setenv("ELASTICSEARCH_TIMEOUT", "forever")
        with pytest.raises(ConfigurationError):
            create_server()

    def test_invalid_search_settings(self):
        with pytest.raises(ConfigurationError):
            create_server({**SETTINGS, "search": {"max_hotels": 0}})


class TestMain:
    def test_main_runs_server(self, monkeypatch):
        monkeypatch.setenv("HOTEL_SEARCH_LOG_LEVEL", "debug")
        with patch.object(srv_mod, "create_server") as mock_create:
            main()
        mock_create.return_value.run.assert_called_once_with()
