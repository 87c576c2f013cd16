"""
Hotel Search MCP Server

A standalone Model Context Protocol server for free-text hotel search over
Elasticsearch.

Features:
- Intent-aware hotel search with typo correction and result distribution
- Query diagnostics without touching the backend
- Index provisioning and batched ingestion

Architecture:
- instructions.py: SERVER_INSTRUCTIONS for AI agents
- tools/: Tool implementations by category
- container: DI container (dependency-injector) for service lifecycle
"""

from __future__ import annotations

import logging
import os
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import TYPE_CHECKING, Any, cast

from mcp.server.fastmcp import FastMCP

from hotel_search.container import ApplicationContainer, settings_from_env

from .instructions import SERVER_INSTRUCTIONS
from .tools import register_all_tools

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from hotel_search.application.indexing import HotelIndexer
    from hotel_search.application.search import UnifiedSearchEngine
    from hotel_search.infrastructure.elasticsearch import ElasticsearchBackend

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "HOTEL_SEARCH_LOG_LEVEL"

# ── Module-level DI container ──────────────────────────────────────────────
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """Get the application DI container.

    Raises:
        RuntimeError: If ``create_server()`` has not been called yet.
    """
    if _container is None:
        msg = "Container not initialized. Call create_server() first."
        raise RuntimeError(msg)
    return _container


def _make_lifespan(
    container: ApplicationContainer,
) -> Callable[[FastMCP[Any]], AbstractAsyncContextManager[ApplicationContainer]]:
    """Create a FastMCP lifespan handler bound to *container*."""

    @asynccontextmanager
    async def _lifespan(server: FastMCP[Any]) -> AsyncIterator[ApplicationContainer]:
        """Application lifecycle: startup → yield → shutdown."""
        logger.info("Lifecycle: startup, resources ready")
        try:
            yield container
        finally:
            backend = cast("ElasticsearchBackend", container.backend())
            await backend.close()
            logger.info("Lifecycle: shutdown, search backend client closed")

    return _lifespan


def create_server(
    settings: dict[str, Any] | None = None,
    name: str = "hotel-search",
) -> FastMCP:
    """
    Create and configure the Hotel Search MCP server.

    Uses :class:`~hotel_search.container.ApplicationContainer` for
    dependency injection and lifecycle management.

    Args:
        settings: Container configuration. Default: read from the environment.
        name: Server name.

    Returns:
        Configured FastMCP server instance.
    """
    global _container
    logger.info("Initializing Hotel Search MCP Server...")

    # ── DI container ────────────────────────────────────────────────────
    _container = ApplicationContainer()
    _container.config.from_dict(settings if settings is not None else settings_from_env())

    engine = cast("UnifiedSearchEngine", _container.engine())
    indexer = cast("HotelIndexer", _container.indexer())

    # ── Create MCP server with lifespan ─────────────────────────────────
    mcp = FastMCP(
        name,
        instructions=SERVER_INSTRUCTIONS,
        lifespan=_make_lifespan(_container),
    )

    stats = register_all_tools(mcp, engine, indexer)
    logger.info("Tool registration complete: %s", stats)
    logger.info("Hotel Search MCP Server initialized successfully")

    return mcp


def main():
    """Run the MCP server."""

    # Configure logging (stderr; stdout carries the stdio transport)
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    server = create_server()

    # Run stdio MCP server (blocks)
    server.run()


if __name__ == "__main__":
    main()
