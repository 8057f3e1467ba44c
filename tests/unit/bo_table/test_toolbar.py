"""Tests for toolbar composition."""

from __future__ import annotations

import pytest

from bo_table.columns import Column, ColumnVisibilityEngine
from bo_table.search import DebouncedSearchChannel
from bo_table.toolbar import BulkAction, compose_toolbar
from tests.helpers.scheduler import ManualScheduler

pytestmark = pytest.mark.unit_table

ACTIONS = (BulkAction(label="Delete", value="delete", variant="danger"),)


def test_nothing_supplied_gives_empty_toolbar() -> None:
    assert compose_toolbar(search=None).is_empty


def test_search_box_reflects_channel(scheduler: ManualScheduler) -> None:
    channel = DebouncedSearchChannel(scheduler, lambda v: None, value="en")
    channel.type("eng")
    model = compose_toolbar(search=channel, search_placeholder="Search languages...")
    assert model.search is not None
    assert model.search.text == "eng"
    assert model.search.pending is True
    assert model.search.placeholder == "Search languages..."


def test_filter_toggle_needs_callback() -> None:
    assert compose_toolbar(search=None, is_filter_active=True).filter_toggle is None
    toggle = compose_toolbar(search=None, on_filter_click=lambda: None, is_filter_active=True)
    assert toggle.filter_toggle is not None and toggle.filter_toggle.active is True


@pytest.mark.parametrize(
    ("selected", "has_callback", "expected"),
    [(0, True, False), (2, False, False), (2, True, True)],
)
def test_bulk_actions_need_selection_and_callback(selected: int, has_callback: bool, expected: bool) -> None:
    model = compose_toolbar(
        search=None,
        bulk_actions=ACTIONS,
        on_bulk_action=(lambda value: None) if has_callback else None,
        selected_count=selected,
    )
    assert (model.bulk_actions is not None) is expected


def test_column_picker_only_when_enabled() -> None:
    engine = ColumnVisibilityEngine(
        [Column(header="A", accessor="a", id="a"), Column(header="B", accessor="b", id="b", hideable=False)],
        None,
    )
    assert compose_toolbar(search=None, visibility=engine).column_picker is None
    picker = compose_toolbar(search=None, visibility=engine, show_column_visibility=True).column_picker
    assert picker is not None
    assert [entry.column_id for entry in picker] == ["a"]
