"""Pagination value objects."""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from core.exceptions import ValidationError

T = TypeVar("T")


def validate_page(page: int, limit: int) -> None:
    """Pages are 1-based and must hold at least one item."""
    if page < 1:
        raise ValidationError("page must be >= 1", details={"field": "page"})
    if limit < 1:
        raise ValidationError("limit must be >= 1", details={"field": "limit"})


def page_offset(page: int, limit: int) -> int:
    """Row offset of the first item on ``page``."""
    return (page - 1) * limit


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """Read-only value object: one page of results plus the total count.

    ``total`` is read in a separate query from ``items`` and may drift by a
    few rows under concurrent writes.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
