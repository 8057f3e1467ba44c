"""Single-column sort descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from bo_table.columns import Column


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class SortDescriptor:
    column_accessor: str
    direction: SortDirection = SortDirection.ASC


def next_sort(current: SortDescriptor | None, column_accessor: str) -> SortDescriptor:
    """Descriptor produced by clicking the header of ``column_accessor``."""
    if current is not None and current.column_accessor == column_accessor:
        return SortDescriptor(column_accessor, current.direction.flipped())
    return SortDescriptor(column_accessor, SortDirection.ASC)


class SortEngine:
    """Header-click transitions over a caller-owned sort descriptor."""

    def __init__(
        self,
        columns: Sequence[Column],
        current: SortDescriptor | None,
        on_sort_change: Callable[[SortDescriptor], None] | None = None,
    ) -> None:
        self._sortable = {
            column.field for column in columns if column.sortable and column.field
        }
        self._current = current
        self._on_sort_change = on_sort_change

    @property
    def enabled(self) -> bool:
        return self._on_sort_change is not None

    def is_sortable(self, column: Column) -> bool:
        return self.enabled and column.field in self._sortable

    def direction_for(self, column: Column) -> SortDirection | None:
        """Direction arrow to show on ``column``'s header, if any."""
        if self._current is None or column.field is None:
            return None
        if self._current.column_accessor != column.field:
            return None
        return self._current.direction

    def toggle(self, column_accessor: str) -> SortDescriptor | None:
        if self._on_sort_change is None or column_accessor not in self._sortable:
            return None
        descriptor = next_sort(self._current, column_accessor)
        self._on_sort_change(descriptor)
        return descriptor
