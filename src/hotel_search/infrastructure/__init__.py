"""
Infrastructure Layer - External Systems

Contains:
- elasticsearch: the search backend (query DSL, index mappings, REST client)
"""
