"""
QueryNormalizer - Canonical form of free-text input.

Steps:
1. Lower-case
2. Strip diacritics (NFD, drop combining marks, recompose with NFC)
3. Replace punctuation and symbols with a single space
4. Collapse whitespace runs and trim

The result is idempotent: ``normalize(normalize(s)) == normalize(s)``.
Empty or whitespace-only input normalizes to ``""``.
"""

from __future__ import annotations

import re
import unicodedata

_PUNCTUATION = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


class QueryNormalizer:
    """Stateless normalizer shared by the classifier, reference data and engine."""

    def normalize(self, text: str | None) -> str:
        if not text:
            return ""

        lowered = text.lower()
        decomposed = unicodedata.normalize("NFD", lowered)
        stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
        recomposed = unicodedata.normalize("NFC", stripped)

        spaced = _PUNCTUATION.sub(" ", recomposed)
        return _WHITESPACE.sub(" ", spaced).strip()

    __call__ = normalize


def normalize_query(text: str | None) -> str:
    """Module-level convenience wrapper around :class:`QueryNormalizer`."""
    return _default_normalizer.normalize(text)


_default_normalizer = QueryNormalizer()
