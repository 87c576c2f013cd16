"""
QueryPlan -> Elasticsearch query DSL.

Match kinds map onto the sub-fields provisioned by :mod:`.mappings`:

    exact       term          <field>.keyword
    phrase      match_phrase  <field>
    fuzzy       match         <field>          fuzziness AUTO
    prefix      prefix        <field>.keyword
    edge_ngram  match         <field>.edge
    partial     match         <field>.ngram    minimum_should_match 40% (code) / 60%

A plan becomes ``bool.should`` with ``minimum_should_match: 1``; a compound
clause becomes a nested ``bool.must`` carrying its own boost.
"""

from __future__ import annotations

from typing import Any

from hotel_search.domain.entities import (
    DOCUMENT_FIELDS,
    Clause,
    CompoundClause,
    MatchKind,
    QueryClause,
    QueryPlan,
)

# Partial (infix n-gram) matching needs this share of grams to overlap
CODE_PARTIAL_MINIMUM_SHOULD_MATCH = "40%"
TEXT_PARTIAL_MINIMUM_SHOULD_MATCH = "60%"


def document_field(logical_field: str) -> str:
    """``city`` -> ``cityname``; unknown names pass through."""
    return DOCUMENT_FIELDS.get(logical_field, logical_field)


def clause_to_query(clause: Clause) -> dict[str, Any]:
    """Translate one clause to a DSL leaf (or nested bool for compounds)."""
    if isinstance(clause, CompoundClause):
        return {
            "bool": {
                "must": [clause_to_query(inner) for inner in clause.clauses],
                "boost": clause.boost,
            }
        }
    return _leaf(clause)


def _leaf(clause: QueryClause) -> dict[str, Any]:
    name = document_field(clause.field)

    match clause.match_kind:
        case MatchKind.EXACT:
            return {"term": {f"{name}.keyword": {"value": clause.text, "boost": clause.boost}}}
        case MatchKind.PHRASE:
            return {"match_phrase": {name: {"query": clause.text, "boost": clause.boost}}}
        case MatchKind.FUZZY:
            body: dict[str, Any] = {"query": clause.text, "fuzziness": "AUTO", "boost": clause.boost}
            if clause.minimum_should_match:
                body["minimum_should_match"] = clause.minimum_should_match
            return {"match": {name: body}}
        case MatchKind.PREFIX:
            return {"prefix": {f"{name}.keyword": {"value": clause.text, "boost": clause.boost}}}
        case MatchKind.EDGE_NGRAM:
            return {"match": {f"{name}.edge": {"query": clause.text, "boost": clause.boost}}}
        case MatchKind.PARTIAL:
            default = (
                CODE_PARTIAL_MINIMUM_SHOULD_MATCH if clause.field == "code" else TEXT_PARTIAL_MINIMUM_SHOULD_MATCH
            )
            return {
                "match": {
                    f"{name}.ngram": {
                        "query": clause.text,
                        "minimum_should_match": clause.minimum_should_match or default,
                        "boost": clause.boost,
                    }
                }
            }


def plan_to_query(plan: QueryPlan) -> dict[str, Any]:
    """Translate a whole plan into a ``bool.should`` query."""
    return {
        "bool": {
            "should": [clause_to_query(clause) for clause in plan.clauses],
            "minimum_should_match": plan.minimum_should_match,
        }
    }


def build_search_body(plan: QueryPlan, from_: int, size: int) -> dict[str, Any]:
    """Full ``_search`` request body."""
    return {
        "query": plan_to_query(plan),
        "from": from_,
        "size": size,
        "track_total_hits": True,
        "track_scores": True,
    }
