"""Tests for page windows, ranges and page navigation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from bo_table.pagination import (
    ELLIPSIS,
    PaginationDescriptor,
    PaginationEngine,
    build_pagination_strip,
    compute_item_range,
    compute_page_window,
    range_label,
    total_pages_for,
)

pytestmark = pytest.mark.unit_table


@pytest.mark.parametrize(
    ("current", "total", "expected"),
    [
        (1, 3, [1, 2, 3]),
        (3, 5, [1, 2, 3, 4, 5]),
        (1, 10, [1, 2, 3, 4, 5, ELLIPSIS, 10]),
        (5, 10, [1, ELLIPSIS, 3, 4, 5, 6, 7, ELLIPSIS, 10]),
        (10, 10, [1, ELLIPSIS, 6, 7, 8, 9, 10]),
        (4, 7, [1, 2, 3, 4, 5, 6, 7]),
        (0, 0, []),
    ],
)
def test_page_window(current: int, total: int, expected: list) -> None:
    assert compute_page_window(current, total, 5) == expected


def test_window_without_gap_has_no_ellipsis() -> None:
    # start == 2 touches page 1, end == total - 1 touches the last page
    assert compute_page_window(4, 6, 4) == [1, 2, 3, 4, 5, 6]


def test_item_range() -> None:
    assert compute_item_range(1, 10, 25) == (1, 10)
    assert compute_item_range(3, 10, 25) == (21, 25)
    assert compute_item_range(1, 10, 0) == (0, 0)


def test_range_label_uses_en_dash() -> None:
    assert range_label(2, 10, 25) == "11–20 of 25"


def test_total_pages() -> None:
    assert total_pages_for(25, 10) == 3
    assert total_pages_for(0, 10) == 0


def test_strip_offers_page_sizes_only_with_callback() -> None:
    without = build_pagination_strip(PaginationDescriptor(1, 3, lambda p: None, 25, 10))
    assert without.page_size_options is None

    with_sizes = build_pagination_strip(
        PaginationDescriptor(1, 3, lambda p: None, 25, 15, lambda s: None),
        page_size_options=(10, 20),
    )
    assert with_sizes.page_size_options == (10, 15, 20)
    assert with_sizes.range_label == "1–15 of 25"


def test_strip_navigation_flags() -> None:
    strip = build_pagination_strip(PaginationDescriptor(1, 1, lambda p: None))
    assert strip.has_previous is False
    assert strip.has_next is False
    assert strip.range_label is None


class TestPaginationEngine:
    def _engine(self, current: int = 2, total: int = 3) -> tuple[PaginationEngine, MagicMock, MagicMock]:
        on_page = MagicMock()
        on_size = MagicMock()
        engine = PaginationEngine(PaginationDescriptor(current, total, on_page, 30, 10, on_size))
        return engine, on_page, on_size

    def test_previous_and_next(self) -> None:
        engine, on_page, _ = self._engine()
        engine.previous()
        engine.next()
        assert [c.args[0] for c in on_page.call_args_list] == [1, 3]

    def test_bounds_are_no_ops(self) -> None:
        engine, on_page, _ = self._engine(current=1, total=1)
        engine.previous()
        engine.next()
        on_page.assert_not_called()

    def test_ellipsis_and_current_page_are_inert(self) -> None:
        engine, on_page, _ = self._engine()
        engine.go_to(ELLIPSIS)
        engine.go_to(2)
        on_page.assert_not_called()
        engine.go_to(3)
        on_page.assert_called_once_with(3)

    def test_change_page_size(self) -> None:
        engine, _, on_size = self._engine()
        engine.change_page_size(10)
        engine.change_page_size(0)
        on_size.assert_not_called()
        engine.change_page_size(50)
        on_size.assert_called_once_with(50)
