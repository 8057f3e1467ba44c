"""Per-cell rendering with faults captured as data."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from bo_common.errors import RenderFault
from bo_table.columns import Column, ColumnType
from bo_table.formatting import (
    ERROR_PLACEHOLDER,
    PLACEHOLDER,
    format_cell_value,
    format_datetime,
)
from bo_table.rows import get_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellResult:
    """Outcome of rendering one cell.

    ``value`` is whatever the column produced (text or a toolkit object),
    ``text`` its plain-text form. A failed cell carries ``fault`` and the
    error placeholder as text.
    """

    value: Any
    text: str
    tooltip: str | None = None
    fault: RenderFault | None = None

    @property
    def ok(self) -> bool:
        return self.fault is None

    @classmethod
    def failure(cls, fault: RenderFault) -> "CellResult":
        return cls(value=None, text=ERROR_PLACEHOLDER, tooltip=str(fault), fault=fault)


def _as_text(node: Any) -> str:
    if node is None or node == "":
        return PLACEHOLDER
    return node if isinstance(node, str) else str(node)


def render_cell(
    column: Column,
    row: Any,
    index: int,
    *,
    now: datetime | None = None,
) -> CellResult:
    """Render ``row``'s value for ``column`` without letting errors escape."""
    try:
        field = column.field
        if field is None:
            node = column.accessor(row, index)  # type: ignore[operator]
            if column.render is not None:
                node = column.render(node, row, index)
            return CellResult(value=node, text=_as_text(node))

        value = get_field(row, field)
        if column.render is not None:
            node = column.render(value, row, index)
            return CellResult(value=node, text=_as_text(node))

        text = format_cell_value(value, column.type, now=now)
        tooltip = None
        if column.type is ColumnType.DATETIME:
            formatted = format_datetime(value, now=now)
            tooltip = formatted.raw if formatted is not None else None
        return CellResult(value=text, text=text, tooltip=tooltip)
    except Exception as exc:
        fault = RenderFault(
            f"Failed to render column {column.id!r}",
            context={"column": column.id, "row_index": index},
            cause=exc,
        )
        logger.warning("Cell render failed: %s (%s)", fault, exc, exc_info=exc)
        return CellResult.failure(fault)
