"""
Field Search Entities - Structured search by individual hotel attributes.

Unlike the unified free-text search, the caller says which field each value
belongs to. Blank values are ignored; at least one field must carry text
for the search to reach the backend.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, fields, replace
from typing import Any

# Searchable logical fields, in clause order
SEARCHABLE_FIELDS = ("code", "name", "city", "address1")


@dataclass(frozen=True, slots=True)
class FieldSearchParameters:
    """
    Per-field search values.

    Example:
        >>> params = FieldSearchParameters(name="mulia", city="jakarta")
        >>> params.supplied()
        (('name', 'mulia'), ('city', 'jakarta'))
    """

    code: str | None = None
    name: str | None = None
    city: str | None = None
    address1: str | None = None

    def supplied(self) -> tuple[tuple[str, str], ...]:
        """Non-blank (field, value) pairs in clause order."""
        pairs = ((name, getattr(self, name)) for name in SEARCHABLE_FIELDS)
        return tuple((name, value) for name, value in pairs if value and value.strip())

    @property
    def is_empty(self) -> bool:
        return not self.supplied()

    def normalized(self, normalize: Callable[[str], str]) -> FieldSearchParameters:
        """Copy with every supplied value passed through ``normalize``."""
        return replace(self, **{name: normalize(value) for name, value in self.supplied()})

    def describe(self) -> str:
        """Compact ``field:value`` form used as the response's query echo."""
        return " ".join(f"{name}:{value}" for name, value in self.supplied())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FieldSearchParameters:
        known = {f.name for f in fields(cls)}
        return cls(**{key: str(value) for key, value in data.items() if key in known and value is not None})

    def to_dict(self) -> dict[str, Any]:
        return dict(self.supplied())
