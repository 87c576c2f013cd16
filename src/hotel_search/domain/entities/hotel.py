"""
Hotel Entities - Search Domain Model

Key Entities:
    - Hotel: Immutable hotel record as stored in the search index
    - ScoredHotel: A hotel paired with its backend relevance score
    - SearchIntent: Inferred category of a free-text query

Architecture:
    Hotels are fetched from the backend per query and never mutated by the
    engine. Document field names follow the index schema (``hotelcode``,
    ``hotelname``, ``cityname`` ...).

Example:
    >>> hotel = Hotel(code="JKT0001", name="Hotel Indonesia Kempinski", city="Jakarta")
    >>> hotel.is_indexable
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class SearchIntent(Enum):
    """
    What the user is searching for, inferred from the query text.

    HOTEL_CODE: A short alphanumeric business key ("12345678", "jkt12345")
    EXACT_HOTEL_NAME: A curated, well-known hotel name
    HOTEL_BRAND: A chain or brand ("marriott", "ibis styles")
    BRAND_WITH_LOCATION: Brand-like words plus a place ("harris resort bali")
    CITY_NAME: A city or locality ("jakarta", "batam island")
    COUNTRY_NAME: A country ("indonesia")
    GENERAL: Anything else
    """

    HOTEL_CODE = "hotel_code"
    EXACT_HOTEL_NAME = "exact_hotel_name"
    HOTEL_BRAND = "hotel_brand"
    BRAND_WITH_LOCATION = "brand_with_location"
    CITY_NAME = "city_name"
    COUNTRY_NAME = "country_name"
    GENERAL = "general"

    @property
    def is_brand_scoped(self) -> bool:
        """Brand searches want to see the brand across many cities."""
        return self in (SearchIntent.HOTEL_BRAND, SearchIntent.BRAND_WITH_LOCATION)


# Index document field names
DOCUMENT_FIELDS = {
    "code": "hotelcode",
    "name": "hotelname",
    "city": "cityname",
    "address1": "address1",
    "address2": "address2",
    "state": "state",
    "country": "country",
    "postal_code": "postalcode",
    "phone": "phonenumber",
    "last_updated": "lastupdated",
}


@dataclass(frozen=True, slots=True)
class Hotel:
    """A hotel record. ``code`` is the unique business key."""

    code: str | None
    name: str | None
    city: str | None = None
    address1: str | None = None
    address2: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    phone: str | None = None
    last_updated: datetime | None = None

    @property
    def is_indexable(self) -> bool:
        """Records without a code or a name cannot be indexed or searched."""
        return bool(self.code and self.code.strip() and self.name and self.name.strip())

    def to_document(self) -> dict[str, Any]:
        """Serialize to an index document."""
        document: dict[str, Any] = {}
        for attr, doc_field in DOCUMENT_FIELDS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, datetime):
                value = value.isoformat()
            document[doc_field] = value
        return document

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Hotel:
        """Build a Hotel from an index document (``_source``)."""
        values: dict[str, Any] = {}
        for attr, doc_field in DOCUMENT_FIELDS.items():
            value = document.get(doc_field)
            if attr == "last_updated":
                value = _parse_timestamp(value)
            elif value is not None and not isinstance(value, str):
                value = str(value)
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary using attribute names."""
        return {
            "code": self.code,
            "name": self.name,
            "city": self.city,
            "address1": self.address1,
            "address2": self.address2,
            "state": self.state,
            "country": self.country,
            "postal_code": self.postal_code,
            "phone": self.phone,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
        }


@dataclass(frozen=True, slots=True)
class ScoredHotel:
    """A backend hit. The score is opaque and only compared relatively."""

    hotel: Hotel
    score: float


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
