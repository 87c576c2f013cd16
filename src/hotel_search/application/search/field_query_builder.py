"""
FieldQueryBuilder - Weighted query plans for structured field search.

Every supplied field contributes one fuzzy clause. With n-gram matching on,
each field also gets a partial (infix n-gram) clause at a lower boost, so
"kempin" still reaches "kempinski" when edit distance alone would not.

Boosts (fuzzy / partial):
    code      2.0 / 1.5
    name      1.8 / 1.0   (1.5 fuzzy when n-gram matching is on)
    city      1.5 / 1.0
    address1  1.0 / 1.0   (1.5 fuzzy when n-gram matching is on)
"""

from __future__ import annotations

import logging

from hotel_search.domain.entities import (
    FieldSearchParameters,
    MatchKind,
    QueryClause,
    QueryPlan,
    SearchIntent,
)

logger = logging.getLogger(__name__)

FUZZY_BOOSTS = {"code": 2.0, "name": 1.8, "city": 1.5, "address1": 1.0}
NGRAM_FUZZY_BOOSTS = {"code": 2.0, "name": 1.5, "city": 1.5, "address1": 1.5}
PARTIAL_BOOSTS = {"code": 1.5, "name": 1.0, "city": 1.0, "address1": 1.0}


class FieldQueryBuilder:
    """Builds a :class:`QueryPlan` from normalized per-field values."""

    def build(self, params: FieldSearchParameters, *, use_ngram: bool = True) -> QueryPlan | None:
        """
        Build the plan.

        Args:
            params: Normalized field values
            use_ngram: Add partial n-gram clauses next to the fuzzy ones

        Returns:
            An OR-group of boosted clauses, or None when no field has text
        """
        supplied = params.supplied()
        if not supplied:
            return None

        fuzzy_boosts = NGRAM_FUZZY_BOOSTS if use_ngram else FUZZY_BOOSTS
        clauses: list[QueryClause] = []
        for field_name, value in supplied:
            clauses.append(QueryClause(field_name, MatchKind.FUZZY, value, fuzzy_boosts[field_name]))
            if use_ngram:
                # Overlap defaults (40% code, 60% text) come from the DSL layer
                clauses.append(QueryClause(field_name, MatchKind.PARTIAL, value, PARTIAL_BOOSTS[field_name]))

        plan = QueryPlan(intent=SearchIntent.GENERAL, clauses=tuple(clauses))
        logger.debug("Built %d field clauses (ngram=%s) over %s", len(plan.clauses), use_ngram, sorted(plan.fields))
        return plan
