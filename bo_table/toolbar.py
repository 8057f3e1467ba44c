"""Toolbar composition: search box, filter toggle, bulk actions, column menu."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from bo_table.columns import ColumnPickerEntry, ColumnVisibilityEngine
from bo_table.search import DebouncedSearchChannel


@dataclass(frozen=True)
class BulkAction:
    label: str
    value: str
    variant: str = "default"
    icon: str | None = None


@dataclass(frozen=True)
class SearchBoxModel:
    text: str
    placeholder: str
    pending: bool


@dataclass(frozen=True)
class FilterToggleModel:
    active: bool


@dataclass(frozen=True)
class BulkActionMenu:
    actions: tuple[BulkAction, ...]
    selected_count: int


@dataclass(frozen=True)
class ToolbarModel:
    search: SearchBoxModel | None
    filter_toggle: FilterToggleModel | None
    bulk_actions: BulkActionMenu | None
    column_picker: tuple[ColumnPickerEntry, ...] | None

    @property
    def is_empty(self) -> bool:
        return (
            self.search is None
            and self.filter_toggle is None
            and self.bulk_actions is None
            and self.column_picker is None
        )


def compose_toolbar(
    *,
    search: DebouncedSearchChannel | None,
    search_placeholder: str = "Search...",
    on_filter_click: Callable[[], None] | None = None,
    is_filter_active: bool = False,
    bulk_actions: Sequence[BulkAction] = (),
    on_bulk_action: Callable[[str], None] | None = None,
    selected_count: int = 0,
    visibility: ColumnVisibilityEngine | None = None,
    show_column_visibility: bool = False,
) -> ToolbarModel:
    """Assemble the toolbar from the engines' current state.

    Each part is present only when the caller supplied what drives it.
    """
    search_box = None
    if search is not None:
        search_box = SearchBoxModel(
            text=search.text,
            placeholder=search_placeholder,
            pending=search.has_pending_commit,
        )

    filter_toggle = None
    if on_filter_click is not None:
        filter_toggle = FilterToggleModel(active=is_filter_active)

    bulk_menu = None
    if bulk_actions and on_bulk_action is not None and selected_count > 0:
        bulk_menu = BulkActionMenu(actions=tuple(bulk_actions), selected_count=selected_count)

    picker = None
    if show_column_visibility and visibility is not None:
        picker = tuple(visibility.picker_entries())

    return ToolbarModel(
        search=search_box,
        filter_toggle=filter_toggle,
        bulk_actions=bulk_menu,
        column_picker=picker,
    )
