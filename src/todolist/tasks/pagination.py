# src/todolist/tasks/pagination.py

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Page(Generic[T]):
    items: list[T]
    current_page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def prev_page(self) -> int:
        return max(1, self.current_page - 1)

    @property
    def next_page(self) -> int:
        return min(self.total_pages, self.current_page + 1)


def paginate(items: Sequence[T], page_number: int, page_size: int) -> Page[T]:
    """
    Slice `items` into the requested 1-based page.

    A page past the end yields an empty slice; there is always at least one page.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    current = max(1, int(page_number))
    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))

    start = (current - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        current_page=current,
        page_size=page_size,
        total_items=total,
        total_pages=total_pages,
    )
