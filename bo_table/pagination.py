"""Page-number windows, item ranges and the pagination strip model."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Final, Sequence, Union

ELLIPSIS: Final[str] = "..."
DEFAULT_PAGE_SIZE_OPTIONS: Final[tuple[int, ...]] = (10, 20, 50, 100)

PageItem = Union[int, str]


def compute_page_window(current: int, total: int, max_visible: int = 5) -> list[PageItem]:
    """Page buttons to show for ``current`` out of ``total`` pages.

    Small page counts are listed in full. Larger ones get a window of
    ``max_visible`` pages centred on ``current`` with the first and last page
    always present, separated by an ellipsis marker when not adjacent.
    """
    if total <= max_visible:
        return list(range(1, total + 1))

    start = max(1, current - max_visible // 2)
    end = min(total, start + max_visible - 1)
    if end - start < max_visible - 1:
        start = max(1, end - max_visible + 1)

    pages: list[PageItem] = []
    if start > 1:
        pages.append(1)
        if start > 2:
            pages.append(ELLIPSIS)
    pages.extend(range(start, end + 1))
    if end < total:
        if end < total - 1:
            pages.append(ELLIPSIS)
        pages.append(total)
    return pages


def compute_item_range(current: int, items_per_page: int, total_items: int) -> tuple[int, int]:
    """First and last item numbers shown on ``current`` (1-based)."""
    if total_items <= 0 or items_per_page <= 0:
        return 0, 0
    start = (current - 1) * items_per_page + 1
    end = min(current * items_per_page, total_items)
    return max(start, 0), max(end, 0)


def total_pages_for(total_items: int, items_per_page: int) -> int:
    if total_items <= 0 or items_per_page <= 0:
        return 0
    return math.ceil(total_items / items_per_page)


def range_label(current: int, items_per_page: int, total_items: int) -> str:
    start, end = compute_item_range(current, items_per_page, total_items)
    return f"{start}–{end} of {total_items}"


@dataclass(frozen=True)
class PaginationDescriptor:
    current_page: int
    total_pages: int
    on_page_change: Callable[[int], None]
    total_items: int | None = None
    items_per_page: int | None = None
    on_items_per_page_change: Callable[[int], None] | None = None


@dataclass(frozen=True)
class PaginationStrip:
    """What the pagination bar shows for one render pass."""

    current_page: int
    total_pages: int
    window: tuple[PageItem, ...]
    has_previous: bool
    has_next: bool
    range_label: str | None
    items_per_page: int | None
    page_size_options: tuple[int, ...] | None


def build_pagination_strip(
    pagination: PaginationDescriptor,
    *,
    max_visible: int = 5,
    page_size_options: Sequence[int] = DEFAULT_PAGE_SIZE_OPTIONS,
) -> PaginationStrip:
    """Describe the strip for ``pagination`` without clamping its values."""
    current = pagination.current_page
    total = pagination.total_pages
    label = None
    if pagination.total_items is not None and pagination.items_per_page is not None:
        label = range_label(current, pagination.items_per_page, pagination.total_items)

    options: tuple[int, ...] | None = None
    if pagination.on_items_per_page_change is not None:
        options = tuple(page_size_options)
        size = pagination.items_per_page
        if size is not None and size > 0 and size not in options:
            options = tuple(sorted((*options, size)))

    return PaginationStrip(
        current_page=current,
        total_pages=total,
        window=tuple(compute_page_window(current, total, max_visible)),
        has_previous=current > 1,
        has_next=current < total,
        range_label=label,
        items_per_page=pagination.items_per_page,
        page_size_options=options,
    )


class PaginationEngine:
    """Page navigation over a caller-owned pagination descriptor."""

    def __init__(self, pagination: PaginationDescriptor) -> None:
        self._pagination = pagination

    def go_to(self, page: PageItem) -> None:
        if not isinstance(page, int) or page == self._pagination.current_page:
            return
        self._pagination.on_page_change(page)

    def previous(self) -> None:
        if self._pagination.current_page > 1:
            self._pagination.on_page_change(self._pagination.current_page - 1)

    def next(self) -> None:
        if self._pagination.current_page < self._pagination.total_pages:
            self._pagination.on_page_change(self._pagination.current_page + 1)

    def change_page_size(self, size: int) -> None:
        callback = self._pagination.on_items_per_page_change
        if callback is None or size <= 0 or size == self._pagination.items_per_page:
            return
        callback(size)
