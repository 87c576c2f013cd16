"""
Index settings and mappings for the two hotel indices.

- ``fuzzy``: whole-token text fields with ``.keyword`` (exact/prefix) and
  ``.edge`` (prefix n-gram) sub-fields, for edit-distance matching
- ``ngram``: the same plus an ``.ngram`` (infix 1-3 gram) sub-field, for
  partial matching

Keyword sub-fields use a normalizer that turns punctuation into spaces,
collapses whitespace, lowercases and ASCII-folds, so exact and prefix terms
compare the same canonical form the query normalizer produces.
"""

from __future__ import annotations

import copy
from typing import Any, Literal

IndexKind = Literal["fuzzy", "ngram"]

EDGE_NGRAM_MIN = 2
EDGE_NGRAM_MAX = 15
NGRAM_MIN = 1
NGRAM_MAX = 3

# Document fields indexed as searchable text
TEXT_FIELDS = ("hotelcode", "hotelname", "cityname", "address1", "address2", "state", "country")

# Anything but letters, digits and whitespace; mirrors QueryNormalizer
PUNCTUATION_PATTERN = r"[^\p{L}\p{N}\s]|_"

_ANALYSIS: dict[str, Any] = {
    "char_filter": {
        "punctuation_to_space": {
            "type": "pattern_replace",
            "pattern": PUNCTUATION_PATTERN,
            "replacement": " ",
        },
        "collapse_whitespace": {
            "type": "pattern_replace",
            "pattern": r"\s+",
            "replacement": " ",
        },
    },
    "normalizer": {
        "lowercase_ascii": {
            "type": "custom",
            "char_filter": ["punctuation_to_space", "collapse_whitespace"],
            "filter": ["lowercase", "asciifolding", "trim"],
        }
    },
    "tokenizer": {
        "edge_ngram_tokenizer": {
            "type": "edge_ngram",
            "min_gram": EDGE_NGRAM_MIN,
            "max_gram": EDGE_NGRAM_MAX,
            "token_chars": ["letter", "digit"],
        },
        "ngram_tokenizer": {
            "type": "ngram",
            "min_gram": NGRAM_MIN,
            "max_gram": NGRAM_MAX,
            "token_chars": ["letter", "digit"],
        },
    },
    "analyzer": {
        "edge_ngram_analyzer": {
            "type": "custom",
            "tokenizer": "edge_ngram_tokenizer",
            "filter": ["lowercase", "asciifolding"],
        },
        "ngram_analyzer": {
            "type": "custom",
            "tokenizer": "ngram_tokenizer",
            "filter": ["lowercase", "asciifolding"],
        },
        "folding_search_analyzer": {
            "type": "custom",
            "tokenizer": "standard",
            "filter": ["lowercase", "asciifolding"],
        },
    },
}


def _text_field(with_ngram: bool) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "keyword": {"type": "keyword", "normalizer": "lowercase_ascii", "ignore_above": 256},
        "edge": {
            "type": "text",
            "analyzer": "edge_ngram_analyzer",
            "search_analyzer": "folding_search_analyzer",
        },
    }
    if with_ngram:
        fields["ngram"] = {
            "type": "text",
            "analyzer": "ngram_analyzer",
            "search_analyzer": "ngram_analyzer",
        }
    return {"type": "text", "analyzer": "folding_search_analyzer", "fields": fields}


def index_settings(kind: IndexKind) -> dict[str, Any]:
    """
    Body for ``PUT /<index>``.

    Raises:
        ValueError: Unknown index kind
    """
    if kind not in ("fuzzy", "ngram"):
        raise ValueError(f"unknown index kind: {kind!r}")

    # 1-3 grams exceed the default max_ngram_diff of 1
    index_block: dict[str, Any] = {"number_of_shards": 1}
    if kind == "ngram":
        index_block["max_ngram_diff"] = NGRAM_MAX - NGRAM_MIN

    properties: dict[str, Any] = {name: _text_field(kind == "ngram") for name in TEXT_FIELDS}
    properties["postalcode"] = {"type": "keyword"}
    properties["phonenumber"] = {"type": "keyword"}
    properties["lastupdated"] = {"type": "date"}

    return {
        "settings": {"index": index_block, "analysis": copy.deepcopy(_ANALYSIS)},
        "mappings": {"properties": properties},
    }
