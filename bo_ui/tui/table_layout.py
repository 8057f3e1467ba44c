from __future__ import annotations

import shutil

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from bo_table.pagination import ELLIPSIS, PaginationStrip
from bo_table.renderer import RenderState, TableRenderModel
from bo_table.selection import HeaderCheckState
from bo_table.sorting import SortDirection

from bo_ui.tui.models import TableModel

_SORT_ARROWS = {SortDirection.ASC: " ▲", SortDirection.DESC: " ▼"}


def _check_mark(state: HeaderCheckState | None) -> str:
    if state is not None and state.checked:
        return "[x]"
    if state is not None and state.indeterminate:
        return "[-]"
    return "[ ]"


def _console_width(console: Console) -> int | None:
    try:
        width = int(getattr(console.size, "width"))
        if width > 0:
            return width
    except (AttributeError, TypeError, ValueError):
        pass
    width = int(shutil.get_terminal_size(fallback=(100, 24)).columns)
    return width if width > 0 else None


def table_model_from_render(render: TableRenderModel, *, title: str) -> TableModel:
    """Flatten a render model into header labels and text rows."""
    columns: list[str] = []
    if render.selection_enabled:
        columns.append(_check_mark(render.header_check))
    for header in render.headers:
        arrow = _SORT_ARROWS.get(header.sort_direction, "") if header.sort_direction else ""
        columns.append(f"{header.header}{arrow}")

    rows: list[list[str]] = []
    if render.state is RenderState.LOADING and render.skeleton is not None:
        rows = [["…"] * len(columns) for _ in range(render.skeleton.rows)]
    elif render.state is RenderState.EMPTY:
        message = render.empty_message or ""
        rows = [[message] + [""] * (len(columns) - 1)] if columns else []
    else:
        for body in render.rows:
            cells = [cell.text for cell in body.cells]
            if render.selection_enabled:
                cells.insert(0, "[x]" if body.selected else "[ ]")
            rows.append(cells)
    return TableModel(title=title, columns=columns, rows=rows)


def pagination_text(strip: PaginationStrip | None) -> str:
    """One-line rendition of the pagination strip; current page in brackets."""
    if strip is None:
        return ""
    parts = ["<" if strip.has_previous else " "]
    for item in strip.window:
        if item == ELLIPSIS:
            parts.append(ELLIPSIS)
        elif item == strip.current_page:
            parts.append(f"[{item}]")
        else:
            parts.append(str(item))
    parts.append(">" if strip.has_next else " ")
    line = " ".join(parts)
    if strip.range_label:
        line = f"{line}   Showing {strip.range_label}"
    return line


def build_rich_table(
    model: TableModel,
    *,
    console: Console,
    show_lines: bool = False,
    border_style: str = "blue",
    header_style: str = "bold blue",
    title_style: str = "bold blue",
    box_style: box.Box = box.ROUNDED,
) -> Table:
    """
    Build a Rich Table from a TableModel that fits the current terminal width.

    Columns are rendered as single-line and truncated with ellipsis when needed.
    """
    term_width = _console_width(console)
    max_table_width = max(60, (term_width - 2) if term_width else 100)
    min_col_width = 3

    title_text = Text(str(model.title))
    title_text.no_wrap = True
    title_text.overflow = "ellipsis"
    title_max = max(10, max_table_width - 6)
    if len(title_text) > title_max:
        title_text.truncate(title_max, overflow="ellipsis")

    rich_table = Table(
        title=title_text,
        show_lines=show_lines,
        expand=True,
        width=max_table_width,
        box=box_style,
        border_style=border_style,
        header_style=header_style,
        title_style=title_style,
    )

    def _cell_width(value: str) -> int:
        return max((len(line) for line in str(value).splitlines()), default=0)

    column_count = max(1, len(model.columns))
    # Rough overhead for borders + separators + padding.
    overhead = 4 + (column_count - 1) * 3

    desired: list[int] = []
    for idx, col in enumerate(model.columns):
        max_len = _cell_width(col)
        for row in model.rows:
            if idx < len(row):
                max_len = max(max_len, _cell_width(row[idx]))
        desired.append(max(min_col_width, min(max_len, max_table_width)))

    # Shrink widest columns until the approximate total fits.
    while sum(desired) + overhead > max_table_width:
        widest = max(range(len(desired)), key=lambda i: desired[i])
        if desired[widest] <= min_col_width:
            break
        desired[widest] -= 1

    for idx, col in enumerate(model.columns):
        rich_table.add_column(
            # Header labels are plain text, "[x]" must not parse as markup.
            Text(col),
            overflow="ellipsis",
            no_wrap=True,
            min_width=min_col_width,
            max_width=desired[idx] if idx < len(desired) else None,
        )
    for row in model.rows:
        rich_table.add_row(*(Text(cell) for cell in row))
    return rich_table
