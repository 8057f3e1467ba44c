"""Column definitions and the column visibility engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Iterable, Sequence, Union

logger = logging.getLogger(__name__)

Accessor = Union[str, Callable[[Any, int], Any]]


class ColumnType(str, Enum):
    TEXT = "text"
    DATETIME = "datetime"
    NUMBER = "number"
    BOOLEAN = "boolean"


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Column:
    """A column of an admin list table.

    ``accessor`` is either a row field name or a callable receiving
    ``(row, index)``. Only field accessors can be sorted.
    """

    header: str
    accessor: Accessor
    id: str | None = None
    render: Callable[[Any, Any, int], Any] | None = None
    class_name: str | None = None
    is_sortable: bool = False
    hideable: bool = True
    width: str | None = None
    min_width: str | None = None
    align: Align = Align.LEFT
    type: ColumnType = ColumnType.TEXT

    @property
    def column_id(self) -> str:
        if self.id is None:
            raise ValueError("column id is assigned by normalize_columns()")
        return self.id

    @property
    def field(self) -> str | None:
        """Field name for key accessors, None for callable accessors."""
        return self.accessor if isinstance(self.accessor, str) else None

    @property
    def sortable(self) -> bool:
        return self.is_sortable and self.field is not None


def normalize_columns(columns: Sequence[Column]) -> list[Column]:
    """Assign ``column-<index>`` ids to columns declared without one."""
    normalized: list[Column] = []
    seen: set[str] = set()
    for index, column in enumerate(columns):
        if column.id is None:
            column = replace(column, id=f"column-{index}")
        if column.id in seen:
            logger.warning("Duplicate column id %r in table definition", column.id)
        seen.add(column.column_id)
        normalized.append(column)
    return normalized


def required_column_ids(columns: Iterable[Column]) -> frozenset[str]:
    """Ids of columns that can never be hidden."""
    return frozenset(column.column_id for column in columns if not column.hideable)


def effective_visible_ids(
    columns: Sequence[Column], visible: frozenset[str] | None
) -> frozenset[str]:
    """The visible set after forcing non-hideable columns on.

    ``None`` means the caller has not constrained visibility: every column is
    visible.
    """
    if visible is None:
        return frozenset(column.column_id for column in columns)
    return frozenset(visible) | required_column_ids(columns)


@dataclass(frozen=True)
class ColumnPickerEntry:
    column_id: str
    header: str
    checked: bool


class ColumnVisibilityEngine:
    """Computes the rendered column list and visibility transitions.

    The engine is controlled: it reads the caller's visible set and hands
    a new set back through ``on_change``; it never keeps its own copy.
    """

    def __init__(
        self,
        columns: Sequence[Column],
        visible: frozenset[str] | None,
        on_change: Callable[[str, bool, frozenset[str]], None] | None = None,
    ) -> None:
        self._columns = normalize_columns(columns)
        self._visible = None if visible is None else frozenset(visible)
        self._on_change = on_change

    @property
    def columns(self) -> list[Column]:
        return list(self._columns)

    def effective_columns(self) -> list[Column]:
        """Declared columns that render, in declaration order."""
        visible = effective_visible_ids(self._columns, self._visible)
        return [column for column in self._columns if column.column_id in visible]

    def picker_entries(self) -> list[ColumnPickerEntry]:
        """Entries for the toolbar column menu (hideable columns only)."""
        return [
            ColumnPickerEntry(
                column_id=column.column_id,
                header=column.header,
                checked=self._visible is None or column.column_id in self._visible,
            )
            for column in self._columns
            if column.hideable
        ]

    def next_visible(self, column_id: str, visible: bool) -> frozenset[str]:
        current = effective_visible_ids(self._columns, self._visible)
        if visible:
            return current | {column_id}
        if column_id in required_column_ids(self._columns):
            return current
        return current - {column_id}

    def set_visible(self, column_id: str, visible: bool) -> None:
        """Show or hide a column by handing the next set to the caller."""
        if self._on_change is None:
            return
        known = {column.column_id for column in self._columns}
        if column_id not in known:
            logger.debug("Ignoring visibility change for unknown column %r", column_id)
            return
        self._on_change(column_id, visible, self.next_visible(column_id, visible))
