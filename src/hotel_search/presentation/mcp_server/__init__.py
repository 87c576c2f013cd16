"""
Hotel Search MCP Server

Exposes the unified search relevance engine and the hotel indexer as MCP tools.
"""

from .server import create_server, get_container, main

__all__ = ["create_server", "get_container", "main"]
