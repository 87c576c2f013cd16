"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from hotel_search.application.search import (
    SearchConfig,
    UnifiedSearchEngine,
    load_reference_data,
)
from hotel_search.application.search.reference_data import ReferenceData
from hotel_search.domain.entities import Hotel, ScoredHotel

# ============================================================
# Reference Data Fixtures
# ============================================================


@pytest.fixture(scope="session")
def reference_data() -> ReferenceData:
    """Bundled reference data, loaded once per test session."""
    return load_reference_data()


@pytest.fixture
def small_reference_data() -> ReferenceData:
    """Tiny, fully controlled reference data."""
    return ReferenceData.from_dict(
        {
            "cities": ["Jakarta", "Kuala Lumpur", "Bandung"],
            "countries": ["Indonesia", "Malaysia"],
            "brands": {"marriott": ["courtyard"], "ibis": ["ibis styles"]},
            "exact_hotel_names": ["Hotel Mulia Senayan"],
            "typos": {"jakrata": "jakarta", "marriot": "marriott"},
            "location_indicators": ["resort", "hotel", "grand"],
            "locality_suffixes": ["city", "island"],
        }
    )


# ============================================================
# Hotel Factories
# ============================================================


def make_hotel(code: str = "H0000001", name: str = "Test Hotel", city: str | None = "Jakarta", **kwargs) -> Hotel:
    return Hotel(code=code, name=name, city=city, **kwargs)


def make_hits(cities: list[str | None], start_score: float = 100.0, step: float = 1.0) -> list[ScoredHotel]:
    """One hit per entry, descending scores, codes H0000000, H0000001, ..."""
    return [
        ScoredHotel(
            hotel=make_hotel(code=f"H{i:07d}", name=f"Hotel {i}", city=city),
            score=start_score - i * step,
        )
        for i, city in enumerate(cities)
    ]


@pytest.fixture
def hotel() -> Hotel:
    return make_hotel(
        code="JKT0001",
        name="Hotel Indonesia Kempinski",
        city="Jakarta",
        address1="Jl. M.H. Thamrin No.1",
        country="Indonesia",
        postal_code="10310",
    )


# ============================================================
# Engine Fixtures
# ============================================================


@pytest.fixture
def mock_backend() -> AsyncMock:
    """Backend whose search returns no hits unless a test says otherwise."""
    backend = AsyncMock()
    backend.search.return_value = ([], 0)
    return backend


@pytest.fixture
def engine(mock_backend, reference_data) -> UnifiedSearchEngine:
    return UnifiedSearchEngine(mock_backend, reference_data, SearchConfig())


@pytest.fixture
def hotel_factory():
    """Factory fixture: ``hotel_factory(code=..., name=..., city=...)``."""
    return make_hotel


@pytest.fixture
def hits_factory():
    """Factory fixture: ``hits_factory(["Jakarta", "Bandung", None])``."""
    return make_hits
