"""`bo preview`: render a row file through the table engine."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

import typer
import yaml
from rich.console import Console

from bo_common.errors import BOError, DataSourceError
from bo_table.columns import Column, ColumnType
from bo_table.datasource import InMemoryDataSource, ListQuery
from bo_table.pagination import PaginationDescriptor
from bo_table.renderer import DataTable, TableConfig, TableRenderModel
from bo_table.scheduling import ThreadingScheduler
from bo_table.sorting import SortDescriptor, SortDirection

from bo_ui.tui.table_layout import build_rich_table, pagination_text, table_model_from_render

logger = logging.getLogger(__name__)

_DATETIME_SUFFIXES = ("_at", "_date", "_time")


def load_rows(path: Path) -> list[dict[str, Any]]:
    """Read a JSON or YAML list of objects (or a ``{"items": [...]}`` page)."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DataSourceError(f"Cannot read {path}", context={"path": path}, cause=exc) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DataSourceError(f"Cannot parse {path}", context={"path": path}, cause=exc) from exc
    if isinstance(data, Mapping) and "items" in data:
        data = data["items"]
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(row, Mapping) for row in data):
        raise DataSourceError("Expected a list of objects", context={"path": path})
    return [dict(row) for row in data]


def infer_columns(rows: Sequence[Mapping[str, Any]], fields: Sequence[str] | None = None) -> list[Column]:
    """One sortable column per field; ``*_at``/``*_date`` fields render as dates."""
    if not fields:
        seen: dict[str, None] = {}
        for row in rows:
            for key in row:
                seen.setdefault(str(key), None)
        fields = list(seen)
    columns = []
    for name in fields:
        if name.endswith(_DATETIME_SUFFIXES):
            kind = ColumnType.DATETIME
        elif rows and isinstance(rows[0].get(name), (int, float)) and not isinstance(rows[0].get(name), bool):
            kind = ColumnType.NUMBER
        else:
            kind = ColumnType.TEXT
        columns.append(
            Column(
                header=name.replace("_", " ").title(),
                accessor=name,
                id=name,
                is_sortable=True,
                type=kind,
            )
        )
    return columns


def build_preview(
    rows: Sequence[Mapping[str, Any]],
    *,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    search_fields: Sequence[str] = (),
    sort_by: str | None = None,
    descending: bool = False,
    fields: Sequence[str] | None = None,
    now: datetime | None = None,
) -> TableRenderModel:
    """Query ``rows`` like a list screen would and render the result."""
    columns = infer_columns(rows, fields)
    source = InMemoryDataSource(rows, search_fields=search_fields or [c.column_id for c in columns])
    direction = SortDirection.DESC if descending else SortDirection.ASC
    result = source.list(
        ListQuery(page=page, limit=limit, search=search, sort_by=sort_by, sort_direction=direction)
    )
    config = TableConfig(
        columns=columns,
        data=result.items,
        sort=SortDescriptor(sort_by, direction) if sort_by else None,
        pagination=PaginationDescriptor(
            current_page=result.page,
            total_pages=result.total_pages,
            total_items=result.total,
            items_per_page=result.limit,
            on_page_change=lambda _page: None,
        ),
        search_value=search or "",
    )
    table = DataTable(config, ThreadingScheduler())
    try:
        return table.render(now=now)
    finally:
        table.close()


def register_preview_command(app: typer.Typer, console: Console) -> None:
    """Register `bo preview` on the root app."""

    @app.command("preview")
    def preview(
        file: Path = typer.Argument(..., help="JSON or YAML file holding a list of rows."),
        page: int = typer.Option(1, "--page", "-p", min=1, help="Page to show."),
        limit: int = typer.Option(10, "--limit", "-l", min=1, help="Rows per page."),
        search: Optional[str] = typer.Option(None, "--search", "-s", help="Case-insensitive search text."),
        search_field: Optional[List[str]] = typer.Option(
            None, "--search-field", help="Field searched by --search (repeatable; default: all)."
        ),
        sort: Optional[str] = typer.Option(None, "--sort", help="Field to sort by."),
        desc: bool = typer.Option(False, "--desc", help="Sort descending."),
        columns: Optional[str] = typer.Option(
            None, "--columns", "-c", help="Comma-separated fields to show, in order."
        ),
    ) -> None:
        """Render a page of rows the way an admin list screen shows it."""
        try:
            rows = load_rows(file)
        except BOError as exc:
            logger.debug("preview failed: %s", exc.to_dict())
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)

        fields = [name.strip() for name in columns.split(",") if name.strip()] if columns else None
        render = build_preview(
            rows,
            page=page,
            limit=limit,
            search=search,
            search_fields=search_field or (),
            sort_by=sort,
            descending=desc,
            fields=fields,
        )
        model = table_model_from_render(render, title=file.name)
        console.print(build_rich_table(model, console=console))
        strip = pagination_text(render.pagination)
        if strip:
            console.print(strip, markup=False)
