"""
Client-side paginator.

Pages are 1-based. ``total_pages`` is 0 when there is nothing to show; the
current page is still reported as 1 in that case and its slice is empty.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 6
DEFAULT_PAGE_WINDOW = 5


def total_pages(count: int, page_size: int) -> int:
    """Number of pages needed for ``count`` items; 0 iff count is 0."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    if count <= 0:
        return 0
    return math.ceil(count / page_size)


def clamp_page(page: int, total: int) -> int:
    """Clamp ``page`` into [1, max(total, 1)]."""
    return max(1, min(int(page), max(total, 1)))


def page_slice(items: Sequence[T], page: int, page_size: int) -> List[T]:
    """Items shown on ``page`` (clamped first)."""
    page = clamp_page(page, total_pages(len(items), page_size))
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def page_window(current: int, total: int, window: int = DEFAULT_PAGE_WINDOW) -> List[int]:
    """
    Page numbers to offer as buttons.

    At most ``window`` consecutive pages, centered on ``current`` and shifted
    to stay inside [1, total]. Every page stays reachable through
    previous/next even when it is outside the window.
    """
    if total <= 0:
        return []
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    current = clamp_page(current, total)
    size = min(window, total)
    start = current - (size - 1) // 2
    start = max(1, min(start, total - size + 1))
    return list(range(start, start + size))


@dataclass(frozen=True)
class Page(Generic[T]):
    """One rendered page of a (filtered) sequence."""

    items: List[T]
    number: int
    total_pages: int
    page_size: int
    total_items: int

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def start_index(self) -> int:
        """1-based index of the first item shown, 0 when empty."""
        if self.is_empty:
            return 0
        return (self.number - 1) * self.page_size + 1

    @property
    def end_index(self) -> int:
        if self.is_empty:
            return 0
        return self.start_index + len(self.items) - 1


def paginate(items: Sequence[T], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page[T]:
    """Slice ``items`` into the (clamped) requested page."""
    pages = total_pages(len(items), page_size)
    number = clamp_page(page, pages)
    start = (number - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        number=number,
        total_pages=pages,
        page_size=page_size,
        total_items=len(items),
    )
