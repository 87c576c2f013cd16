"""
ReferenceData - Curated, read-only lookup sets.

Loaded once at process start (from the bundled YAML file or a path given in
``HOTEL_SEARCH_REFERENCE_DATA``) and passed by reference to the classifier and
typo corrector. Instances are immutable so any number of concurrent searches
can share one.

Every entry is run through :class:`QueryNormalizer` on load, so lookups always
compare canonical forms.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from hotel_search.shared.exceptions import ConfigurationError, ErrorContext

from .normalizer import QueryNormalizer

logger = logging.getLogger(__name__)

REFERENCE_DATA_ENV = "HOTEL_SEARCH_REFERENCE_DATA"
_BUNDLED_RESOURCE = "reference_data.yaml"


@dataclass(frozen=True, slots=True)
class ReferenceData:
    """Immutable curated sets used for intent classification."""

    cities: frozenset[str]
    countries: frozenset[str]
    brands: Mapping[str, tuple[str, ...]]
    exact_hotel_names: frozenset[str]
    typos: tuple[tuple[str, str], ...]
    location_indicators: frozenset[str]
    locality_suffixes: tuple[str, ...]

    @property
    def brand_terms(self) -> tuple[str, ...]:
        """Every brand key and alias, longest first then alphabetical."""
        terms = set(self.brands)
        for aliases in self.brands.values():
            terms.update(aliases)
        return tuple(sorted(terms, key=lambda term: (-len(term), term)))

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        normalizer: QueryNormalizer | None = None,
    ) -> ReferenceData:
        """
        Build reference data from a raw mapping (e.g. parsed YAML).

        Raises:
            ConfigurationError: If a section has the wrong shape.
        """
        normalize = (normalizer or QueryNormalizer()).normalize

        def normalized_set(section: str) -> frozenset[str]:
            values = _as_list(data, section)
            return frozenset(entry for entry in (normalize(str(v)) for v in values) if entry)

        brands_raw = data.get("brands") or {}
        if not isinstance(brands_raw, Mapping):
            raise ConfigurationError(
                "Reference data section 'brands' must be a mapping of brand to aliases",
                context=ErrorContext(operation="load_reference_data", input_value=type(brands_raw).__name__),
            )
        brands: dict[str, tuple[str, ...]] = {}
        for brand, aliases in brands_raw.items():
            key = normalize(str(brand))
            if not key:
                continue
            normalized_aliases = {normalize(str(alias)) for alias in (aliases or [])}
            normalized_aliases.discard("")
            normalized_aliases.discard(key)
            brands[key] = tuple(sorted(normalized_aliases))

        typos_raw = data.get("typos") or {}
        if not isinstance(typos_raw, Mapping):
            raise ConfigurationError(
                "Reference data section 'typos' must be a mapping of misspelling to correction",
                context=ErrorContext(operation="load_reference_data", input_value=type(typos_raw).__name__),
            )
        typos: dict[str, str] = {}
        for wrong, right in typos_raw.items():
            wrong_norm, right_norm = normalize(str(wrong)), normalize(str(right))
            if wrong_norm and right_norm and wrong_norm != right_norm:
                typos[wrong_norm] = right_norm

        suffixes = sorted({normalize(str(s)) for s in _as_list(data, "locality_suffixes")} - {""})

        return cls(
            cities=normalized_set("cities"),
            countries=normalized_set("countries"),
            brands=MappingProxyType(dict(sorted(brands.items()))),
            exact_hotel_names=normalized_set("exact_hotel_names"),
            # Longest misspelling first, then alphabetical
            typos=tuple(sorted(typos.items(), key=lambda item: (-len(item[0]), item[0]))),
            location_indicators=normalized_set("location_indicators"),
            locality_suffixes=tuple(suffixes),
        )

    def summary(self) -> dict[str, int]:
        return {
            "cities": len(self.cities),
            "countries": len(self.countries),
            "brands": len(self.brands),
            "exact_hotel_names": len(self.exact_hotel_names),
            "typos": len(self.typos),
        }


def load_reference_data(
    path: str | Path | None = None,
    normalizer: QueryNormalizer | None = None,
) -> ReferenceData:
    """
    Load reference data from ``path``, the environment, or the bundled file.

    Priority: explicit path > HOTEL_SEARCH_REFERENCE_DATA > bundled YAML.
    """
    source = path or os.environ.get(REFERENCE_DATA_ENV, "").strip() or None

    try:
        if source:
            text = Path(source).read_text(encoding="utf-8")
            origin = str(source)
        else:
            text = resources.files("hotel_search.data").joinpath(_BUNDLED_RESOURCE).read_text(encoding="utf-8")
            origin = f"bundled:{_BUNDLED_RESOURCE}"
        raw = yaml.safe_load(text) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Cannot read reference data: {e}",
            context=ErrorContext(operation="load_reference_data", input_value=str(source)),
        ) from e

    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            "Reference data must be a YAML mapping",
            context=ErrorContext(operation="load_reference_data", input_value=str(source)),
        )

    data = ReferenceData.from_dict(raw, normalizer)
    logger.info("Reference data loaded from %s: %s", origin, data.summary())
    return data


def _as_list(data: Mapping[str, Any], section: str) -> list[Any]:
    values = data.get(section) or []
    if isinstance(values, str) or not isinstance(values, (list, tuple, set, frozenset)):
        raise ConfigurationError(
            f"Reference data section '{section}' must be a list",
            context=ErrorContext(operation="load_reference_data", input_value=section),
        )
    return list(values)
