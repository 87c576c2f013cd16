"""
TypoCorrector - Known misspellings to canonical spellings.

Replacement happens on whole words: the misspelling must be bounded by the
start/end of the query or a space. That keeps a key like ``marriot`` from
rewriting the already-correct ``marriott``.

All keys are applied in a single left-to-right pass over one alternation
pattern ordered longest key first, then alphabetically. The pass never
re-scans its own output, so corrections do not cascade and results are
reproducible.
"""

from __future__ import annotations

import re

from .reference_data import ReferenceData


class TypoCorrector:
    """Applies the reference typo map to a normalized query."""

    def __init__(self, reference_data: ReferenceData) -> None:
        self._replacements = dict(reference_data.typos)
        if self._replacements:
            alternation = "|".join(re.escape(wrong) for wrong, _ in reference_data.typos)
            self._pattern: re.Pattern[str] | None = re.compile(rf"(?<!\S)(?:{alternation})(?!\S)")
        else:
            self._pattern = None

    def correct(self, normalized_query: str) -> str:
        """Return the corrected candidate; unchanged when nothing matches."""
        if not normalized_query or self._pattern is None:
            return normalized_query
        return self._pattern.sub(lambda m: self._replacements[m.group(0)], normalized_query)
