"""
Presentation Layer - External Interfaces

Contains:
- mcp_server: MCP server exposing hotel search and ingestion as tools
"""
