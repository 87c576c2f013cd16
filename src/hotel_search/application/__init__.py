"""
Application Layer - Use Cases

Contains:
- search: the unified search relevance engine
- indexing: batched hotel ingestion and index lifecycle
"""
