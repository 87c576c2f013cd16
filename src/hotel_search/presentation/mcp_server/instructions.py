"""
MCP Server Instructions - Usage guide for AI agents.

Kept out of server.py so it can be maintained and looked up on its own.
"""

from __future__ import annotations

SERVER_INSTRUCTIONS = """
Hotel Search MCP Server - free-text hotel lookup

═══════════════════════════════════════════════════════════════════════════════
🎯 Searching
═══════════════════════════════════════════════════════════════════════════════

search_hotels(query, page=1, page_size=10) is the single search entry point.
Pass the user's words as typed; the engine normalizes them, fixes common
misspellings and works out what kind of search it is:

| Query example              | Detected intent      | Result shape                      |
|----------------------------|----------------------|-----------------------------------|
| "12345678", "jkt00123"     | hotel_code           | usually one hotel                 |
| "hotel mulia senayan"      | exact_hotel_name     | usually one hotel                 |
| "marriott", "ibis styles"  | hotel_brand          | top hotels of the brand anywhere  |
| "harris resort bali"       | brand_with_location  | brand hotels near the place       |
| "jakarta", "batam island"  | city_name            | up to 10 hotels over <= 5 cities  |
| "indonesia"                | country_name         | up to 10 hotels over <= 5 cities  |
| anything else              | general              | name first, then city, country    |

Notes:
- `collapsed: true` means one hotel scored far above the rest; only that
  hotel is returned and `total_hits` is 1.
- `total_hits` counts matching hotels in the index; at most 10 of them are
  ever listed, so `total_pages` can exceed the pages that hold items.
- A failed search has `succeeded: false` and an `error` object. Nothing is
  retried automatically; check `error.retryable` before trying again.

search_hotels_by_fields(code, name, city, address1, page=1, page_size=10,
use_ngram=True) is for when the user already split the request into fields,
e.g. name="mulia" and city="jakarta". Each given field is matched with typo
tolerance (plus partial-word matching with use_ngram). Results keep relevance
order with no per-city spreading, and collapse to one hotel when it clearly
wins.

analyze_hotel_query(query) shows the normalized/corrected text, the detected
intent and the query plan without calling the search backend.

═══════════════════════════════════════════════════════════════════════════════
📥 Ingestion
═══════════════════════════════════════════════════════════════════════════════

1. setup_hotel_indices(recreate=False) creates the two hotel indices if they
   are missing (recreate=True rebuilds the n-gram index).
2. index_hotels(hotels=[{...}], batch_size=1000) writes hotels to both
   indices. Each hotel needs `code` and `name`; others are skipped. Optional
   keys: city, address1, address2, state, country, postal_code, phone,
   last_updated (ISO 8601).
"""
