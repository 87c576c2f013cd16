"""
Application DI Container (dependency-injector).

Centralizes service creation and lifecycle management.

Usage::

    from hotel_search.container import ApplicationContainer, settings_from_env

    container = ApplicationContainer()
    container.config.from_dict(settings_from_env())

    engine = container.engine()
    response = await engine.search("jakarta")

    # In tests - override any provider:
    container.backend.override(providers.Object(mock_backend))
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from dependency_injector import containers, providers

from hotel_search.shared.exceptions import ConfigurationError, ErrorContext

logger = logging.getLogger(__name__)


def settings_from_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """
    Read backend and engine settings from environment variables.

    Raises:
        ConfigurationError: A numeric variable is not a number
    """
    from hotel_search.infrastructure.elasticsearch import (
        DEFAULT_INDEX,
        DEFAULT_NGRAM_INDEX,
        DEFAULT_TIMEOUT,
        DEFAULT_URL,
    )

    env = os.environ if environ is None else environ
    raw_timeout = env.get("ELASTICSEARCH_TIMEOUT", "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError as e:
        raise ConfigurationError(
            f"ELASTICSEARCH_TIMEOUT must be a number of seconds, got {raw_timeout!r}",
            context=ErrorContext(operation="settings_from_env", input_value=raw_timeout),
        ) from e

    return {
        "elasticsearch": {
            "url": env.get("ELASTICSEARCH_URL") or DEFAULT_URL,
            "index": env.get("HOTEL_INDEX") or DEFAULT_INDEX,
            "ngram_index": env.get("HOTEL_NGRAM_INDEX") or DEFAULT_NGRAM_INDEX,
            "timeout": timeout,
            "api_key": env.get("ELASTICSEARCH_API_KEY") or None,
        },
        "reference_data_path": env.get("HOTEL_SEARCH_REFERENCE_DATA") or None,
        "search": {},
    }


def _create_reference_data(path: str | None) -> object:
    """Lazy factory for ReferenceData (avoids top-level import)."""
    from hotel_search.application.search import load_reference_data

    return load_reference_data(path)


def _create_search_config(values: Mapping[str, Any] | None) -> object:
    """Lazy factory for SearchConfig."""
    from hotel_search.application.search import SearchConfig

    return SearchConfig.from_dict(values)


def _create_backend(
    url: str,
    index: str,
    ngram_index: str,
    timeout: float | None,
    api_key: str | None,
) -> object:
    """Lazy factory for ElasticsearchBackend."""
    from hotel_search.infrastructure.elasticsearch import DEFAULT_TIMEOUT, ElasticsearchBackend

    logger.info("Search backend: %s (indices %s, %s)", url, index, ngram_index)
    return ElasticsearchBackend(
        url,
        index=index,
        ngram_index=ngram_index,
        timeout=timeout or DEFAULT_TIMEOUT,
        api_key=api_key or None,
    )


def _create_indexer(backend: Any) -> object:
    """Lazy factory for HotelIndexer."""
    from hotel_search.application.indexing import HotelIndexer

    return HotelIndexer(backend)


def _create_engine(backend: Any, reference_data: Any, search_config: Any, indexer: Any) -> object:
    """Lazy factory for UnifiedSearchEngine."""
    from hotel_search.application.search import UnifiedSearchEngine

    return UnifiedSearchEngine(backend, reference_data, search_config, indexer=indexer)


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for the Hotel Search application.

    Manages creation and lifecycle of all core services:
    - ``reference_data``: curated cities/countries/brands/typos (read-only)
    - ``backend``: Elasticsearch REST client
    - ``indexer``: index provisioning and batched ingestion
    - ``engine``: the unified search relevance engine
    """

    config = providers.Configuration()

    reference_data = providers.Singleton(
        _create_reference_data,
        path=config.reference_data_path,
    )

    search_config = providers.Singleton(
        _create_search_config,
        values=config.search,
    )

    backend = providers.Singleton(
        _create_backend,
        url=config.elasticsearch.url,
        index=config.elasticsearch.index,
        ngram_index=config.elasticsearch.ngram_index,
        timeout=config.elasticsearch.timeout,
        api_key=config.elasticsearch.api_key,
    )

    indexer = providers.Singleton(
        _create_indexer,
        backend=backend,
    )

    engine = providers.Singleton(
        _create_engine,
        backend=backend,
        reference_data=reference_data,
        search_config=search_config,
        indexer=indexer,
    )


__all__ = ["ApplicationContainer", "settings_from_env"]
