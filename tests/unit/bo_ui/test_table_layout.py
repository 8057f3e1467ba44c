"""Tests for terminal table rendering helpers."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest
from rich.console import Console

from bo_table.columns import Column
from bo_table.pagination import PaginationDescriptor, build_pagination_strip
from bo_table.renderer import DataTable, TableConfig
from bo_table.sorting import SortDescriptor, SortDirection
from bo_ui.cli.commands.preview import build_preview, infer_columns, load_rows
from bo_ui.tui import TableModel, build_rich_table, pagination_text, table_model_from_render
from tests.helpers.scheduler import ManualScheduler

pytestmark = pytest.mark.unit_ui

ROWS = [{"id": 1, "name": "English"}, {"id": 2, "name": "French"}]
COLUMNS = (Column(header="Name", accessor="name", id="name", is_sortable=True),)


def _render(**overrides):
    config = replace(TableConfig(columns=COLUMNS, data=ROWS), **overrides)
    return DataTable(config, ManualScheduler()).render()


def test_model_includes_selection_and_sort_marks() -> None:
    render = _render(
        selection=frozenset({1}),
        on_selection_change=lambda ids: None,
        sort=SortDescriptor("name", SortDirection.ASC),
    )

    model = table_model_from_render(render, title="Languages")

    assert model.columns == ["[-]", "Name ▲"]
    assert model.rows == [["[x]", "English"], ["[ ]", "French"]]


def test_loading_model_uses_placeholders() -> None:
    model = table_model_from_render(_render(is_loading=True, skeleton_rows=2), title="t")
    assert model.rows == [["…"], ["…"]]


def test_empty_model_shows_message() -> None:
    model = table_model_from_render(_render(data=[], empty_message="Nothing"), title="t")
    assert model.rows == [["Nothing"]]


@pytest.mark.parametrize(
    ("current", "total", "expected"),
    [
        (1, 1, "[1]"),
        (2, 3, "< 1 [2] 3 >"),
        (1, 10, "[1] 2 3 4 5 ... 10 >"),
        (10, 10, "< 1 ... 6 7 8 9 [10]"),
    ],
)
def test_pagination_text(current: int, total: int, expected: str) -> None:
    strip = build_pagination_strip(
        PaginationDescriptor(current_page=current, total_pages=total, on_page_change=lambda page: None)
    )
    assert pagination_text(strip).strip() == expected


def test_pagination_text_absent() -> None:
    assert pagination_text(None) == ""


def test_rich_table_has_model_columns() -> None:
    console = Console(width=80, record=True)
    table = build_rich_table(
        TableModel(title="Languages", columns=["[x]", "Name"], rows=[["[ ]", "English"]]),
        console=console,
    )
    console.print(table)

    text = console.export_text()
    assert len(table.columns) == 2
    assert "[x]" in text
    assert "English" in text


def test_infer_columns() -> None:
    rows = [{"id": 1, "name": "a", "updated_at": "2026-01-01", "ratio": 0.5, "ok": True}]
    kinds = {column.column_id: column.type.value for column in infer_columns(rows)}
    assert kinds == {
        "id": "number",
        "name": "text",
        "updated_at": "datetime",
        "ratio": "number",
        "ok": "text",
    }


def test_load_rows_accepts_empty_file(tmp_path) -> None:
    path = tmp_path / "rows.yaml"
    path.write_text("", encoding="utf-8")
    assert load_rows(path) == []


def test_build_preview_formats_dates() -> None:
    rows = [{"id": 1, "updated_at": "2026-10-16T12:00:00Z"}]
    now = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)

    render = build_preview(rows, fields=["updated_at"], now=now)

    assert render.rows[0].cells[0].text == "1 day ago"
    assert render.pagination is not None
    assert render.pagination.range_label == "1–1 of 1"
