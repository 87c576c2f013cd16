"""
Paginator - Slices the final ordered list per requested page.

The total-hit count is not touched here; it stays whatever upstream reported,
so total pages may exceed the number of pages that actually hold items.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from hotel_search.shared.exceptions import InvalidParameterError

T = TypeVar("T")


def validate_page(page_number: int, page_size: int) -> None:
    """
    Raises:
        InvalidParameterError: page_number < 1 or page_size < 1
    """
    if not isinstance(page_number, int) or page_number < 1:
        raise InvalidParameterError("page_number", page_number, "an integer >= 1")
    if not isinstance(page_size, int) or page_size < 1:
        raise InvalidParameterError("page_size", page_size, "an integer >= 1")


class Paginator:
    """Returns ``items[(page - 1) * size : page * size]``, clipped to bounds."""

    @staticmethod
    def paginate(items: Sequence[T], page_number: int, page_size: int) -> list[T]:
        validate_page(page_number, page_size)
        start = (page_number - 1) * page_size
        return list(items[start : start + page_size])
