"""Slice an in-memory result set into 1-based pages."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from .errors import ValidationError

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: list[T]
    page: int
    limit: int
    total: int
    pages: int = field(init=False)

    def __post_init__(self) -> None:
        self.pages = math.ceil(self.total / self.limit) if self.total else 0


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """Return the requested page. Pages past the end are empty, not an error."""
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    if limit < 1:
        raise ValidationError("limit must be 1 or greater")
    start = (page - 1) * limit
    return Page(items=list(items[start : start + limit]), page=page, limit=limit, total=len(items))
