"""
Query Plan Entities - Backend-Agnostic Weighted Query

A QueryPlan is a disjunction of boosted clauses over logical hotel fields
(``code``, ``name``, ``city``, ``country``). At least one clause must match.
Plans are built once per request and handed to the backend adapter, which
translates each MatchKind to its own query syntax.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .hotel import SearchIntent


class MatchKind(Enum):
    """How a clause matches its field."""

    EXACT = "exact"  # Whole value, keyword sub-field
    PHRASE = "phrase"  # Terms in order
    FUZZY = "fuzzy"  # Edit distance, auto-tuned tolerance
    PREFIX = "prefix"  # Value starts with the text
    EDGE_NGRAM = "edge_ngram"  # Prefix n-grams of each token
    PARTIAL = "partial"  # Infix n-grams


@dataclass(frozen=True, slots=True)
class QueryClause:
    """One boosted match over one field."""

    field: str
    match_kind: MatchKind
    text: str
    boost: float
    minimum_should_match: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "field": self.field,
            "match": self.match_kind.value,
            "text": self.text,
            "boost": self.boost,
        }
        if self.minimum_should_match:
            result["minimum_should_match"] = self.minimum_should_match
        return result


@dataclass(frozen=True, slots=True)
class CompoundClause:
    """All inner clauses must match; scored as one boosted unit."""

    clauses: tuple[QueryClause, ...]
    boost: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "all_of": [clause.to_dict() for clause in self.clauses],
            "boost": self.boost,
        }


Clause = QueryClause | CompoundClause


@dataclass(frozen=True, slots=True)
class QueryPlan:
    """Weighted OR-group of clauses built for one intent."""

    intent: SearchIntent
    clauses: tuple[Clause, ...]
    minimum_should_match: int = 1

    @property
    def fields(self) -> set[str]:
        """Logical fields the plan touches."""
        names: set[str] = set()
        for clause in self.clauses:
            if isinstance(clause, CompoundClause):
                names.update(inner.field for inner in clause.clauses)
            else:
                names.add(clause.field)
        return names

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "intent": self.intent.value,
            "minimum_should_match": self.minimum_should_match,
            "clauses": [clause.to_dict() for clause in self.clauses],
        }
