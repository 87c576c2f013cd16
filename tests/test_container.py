"""Tests for DI container and application lifecycle."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from dependency_injector import providers

from hotel_search.application.indexing import HotelIndexer
from hotel_search.application.search import SearchConfig, UnifiedSearchEngine
from hotel_search.container import ApplicationContainer, settings_from_env
from hotel_search.infrastructure.elasticsearch import ElasticsearchBackend
from hotel_search.shared.exceptions import ConfigurationError


def _container(search: dict | None = None) -> ApplicationContainer:
    container = ApplicationContainer()
    container.config.from_dict(
        {
            "elasticsearch": {
                "url": "http://es.test:9200",
                "index": "hotels",
                "ngram_index": "hotels_ngram",
                "timeout": 5.0,
                "api_key": None,
            },
            "reference_data_path": None,
            "search": search or {},
        }
    )
    return container


# ============================================================================
# settings_from_env() Tests
# ============================================================================


class TestSettingsFromEnv:
    def test_defaults(self) -> None:
        settings = settings_from_env({})
        assert settings["elasticsearch"] == {
            "url": "http://localhost:9200",
            "index": "hotels",
            "ngram_index": "hotels_ngram",
            "timeout": 10.0,
            "api_key": None,
        }
        assert settings["reference_data_path"] is None

    def test_environment_overrides(self) -> None:
        settings = settings_from_env(
            {
                "ELASTICSEARCH_URL": "https://search.internal:9243",
                "HOTEL_INDEX": "h",
                "HOTEL_NGRAM_INDEX": "h_ng",
                "ELASTICSEARCH_TIMEOUT": "2.5",
                "ELASTICSEARCH_API_KEY": "abc",
                "HOTEL_SEARCH_REFERENCE_DATA": "/etc/hotels/reference.yaml",
            }
        )
        es = settings["elasticsearch"]
        assert es["url"] == "https://search.internal:9243"
        assert (es["index"], es["ngram_index"]) == ("h", "h_ng")
        assert es["timeout"] == 2.5
        assert es["api_key"] == "abc"
        assert settings["reference_data_path"] == "/etc/hotels/reference.yaml"

    def test_bad_timeout(self) -> None:
        with pytest.raises(ConfigurationError, match="ELASTICSEARCH_TIMEOUT"):
            settings_from_env({"ELASTICSEARCH_TIMEOUT": "soon"})


# ============================================================================
# DI Container Tests
# ============================================================================


class TestApplicationContainer:
    def test_wiring(self) -> None:
        container = _container()
        engine = container.engine()
        assert isinstance(engine, UnifiedSearchEngine)
        assert isinstance(container.backend(), ElasticsearchBackend)
        assert isinstance(container.indexer(), HotelIndexer)
        assert container.backend().indices == ("hotels", "hotels_ngram")

    def test_singletons(self) -> None:
        container = _container()
        assert container.engine() is container.engine()
        assert container.backend() is container.backend()
        assert container.reference_data() is container.reference_data()

    def test_engine_shares_backend_with_indexer(self) -> None:
        container = _container()
        engine = container.engine()
        assert engine.backend is container.backend()
        assert engine.indexer is container.indexer()

    def test_search_settings(self) -> None:
        container = _container({"max_cities": 3, "dominance_threshold": 2.5})
        config = container.search_config()
        assert isinstance(config, SearchConfig)
        assert (config.max_cities, config.dominance_threshold) == (3, 2.5)

    def test_invalid_search_settings(self) -> None:
        container = _container({"dominance_threshold": 0.5})
        with pytest.raises(ConfigurationError):
            container.search_config()

    async def test_override_backend(self) -> None:
        container = _container()
        mock_backend = AsyncMock()
        mock_backend.search.return_value = ([], 0)
        container.backend.override(providers.Object(mock_backend))
        try:
            response = await container.engine().search("jakarta")
            assert response.succeeded
            mock_backend.search.assert_awaited_once()
        finally:
            container.backend.reset_override()

    def test_singleton_reset(self) -> None:
        container = _container()
        first = container.search_config()
        container.search_config.reset()
        assert container.search_config() is not first


# ============================================================================
# Lifecycle Tests
# ============================================================================


class TestLifecycle:
    async def test_lifespan_yields_container_and_closes_backend(self) -> None:
        from hotel_search.presentation.mcp_server.server import _make_lifespan

        container = _container()
        backend = MagicMock()
        backend.close = AsyncMock()
        container.backend.override(providers.Object(backend))

        lifespan = _make_lifespan(container)
        async with lifespan(MagicMock()) as ctx:
            assert ctx is container
            backend.close.assert_not_awaited()
        backend.close.assert_awaited_once()


# ============================================================================
# get_container() Tests
# ============================================================================


class TestGetContainer:
    def test_get_container_before_init_raises(self) -> None:
        from hotel_search.presentation.mcp_server import server as srv_mod

        original = srv_mod._container
        try:
            srv_mod._container = None
            with pytest.raises(RuntimeError, match="Container not initialized"):
                srv_mod.get_container()
        finally:
            srv_mod._container = original

    def test_get_container_returns_container(self) -> None:
        from hotel_search.presentation.mcp_server import server as srv_mod

        container = _container()
        original = srv_mod._container
        try:
            srv_mod._container = container
            assert srv_mod.get_container() is container
        finally:
            srv_mod._container = original
