"""Top-level table: configuration, render model and interaction dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Mapping, Sequence

from bo_table.cells import CellResult, render_cell
from bo_table.columns import Align, Column, ColumnVisibilityEngine, normalize_columns
from bo_table.pagination import (
    DEFAULT_PAGE_SIZE_OPTIONS,
    PageItem,
    PaginationDescriptor,
    PaginationEngine,
    PaginationStrip,
    build_pagination_strip,
)
from bo_table.rows import RowId, row_id
from bo_table.scheduling import Scheduler
from bo_table.search import DEFAULT_SEARCH_DEBOUNCE_MS, DebouncedSearchChannel
from bo_table.selection import HeaderCheckState, SelectionEngine
from bo_table.sorting import SortDescriptor, SortDirection, SortEngine
from bo_table.toolbar import BulkAction, ToolbarModel, compose_toolbar

logger = logging.getLogger(__name__)


class RenderState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


class RowEventKind(str, Enum):
    CLICK = "click"
    HOVER = "hover"
    LEAVE = "leave"


@dataclass
class RowEvent:
    """A row interaction passed to caller handlers before the engine acts.

    A handler calling ``mark_handled()`` suppresses the engine's default
    action for this event.
    """

    kind: RowEventKind
    row: Any
    index: int
    handled: bool = False

    def mark_handled(self) -> None:
        self.handled = True


@dataclass(frozen=True)
class RowAttributes:
    """Caller-supplied extras merged onto a body row."""

    on_click: Callable[[RowEvent], None] | None = None
    on_hover: Callable[[RowEvent], None] | None = None
    on_leave: Callable[[RowEvent], None] | None = None
    class_name: str | None = None
    tooltip: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EmptyAction:
    label: str
    on_click: Callable[[], None]
    icon: str | None = None


@dataclass(frozen=True)
class TableConfig:
    """Everything the host screen hands to the table for one render.

    Optional callbacks switch their feature off when left as None: no
    ``on_sort_change`` means no sortable headers, no ``on_selection_change``
    means no checkbox column, and so on.
    """

    columns: Sequence[Column]
    data: Sequence[Any]
    table_id: str | None = None
    row_id_field: str = "id"
    is_loading: bool = False
    sort: SortDescriptor | None = None
    on_sort_change: Callable[[SortDescriptor], None] | None = None
    selection: frozenset[RowId] = frozenset()
    on_selection_change: Callable[[frozenset[RowId]], None] | None = None
    visible_columns: frozenset[str] | None = None
    on_column_visibility_change: Callable[[str, bool, frozenset[str]], None] | None = None
    show_column_visibility: bool = False
    pagination: PaginationDescriptor | None = None
    search_value: str = ""
    on_search_change: Callable[[str], None] | None = None
    search_placeholder: str = "Search..."
    on_filter_click: Callable[[], None] | None = None
    is_filter_active: bool = False
    bulk_actions: Sequence[BulkAction] = ()
    on_bulk_action: Callable[[str], None] | None = None
    on_row_click: Callable[[Any, int], None] | None = None
    row_attributes: Callable[[Any, int], RowAttributes | None] | None = None
    enable_row_hover: bool = True
    empty_message: str = "No data found"
    empty_action: EmptyAction | None = None
    skeleton_rows: int = 5
    max_visible_pages: int = 5
    page_size_options: Sequence[int] = DEFAULT_PAGE_SIZE_OPTIONS


@dataclass(frozen=True)
class HeaderCell:
    column_id: str
    header: str
    sortable: bool
    sort_direction: SortDirection | None
    align: Align
    width: str | None
    min_width: str | None


@dataclass(frozen=True)
class BodyRow:
    index: int
    row: Any
    row_id: RowId | None
    selected: bool
    hovered: bool
    cells: tuple[CellResult, ...]
    attributes: RowAttributes | None = None

    @property
    def selectable(self) -> bool:
        return self.row_id is not None


@dataclass(frozen=True)
class SkeletonShape:
    rows: int
    columns: int


@dataclass(frozen=True)
class TableRenderModel:
    state: RenderState
    toolbar: ToolbarModel
    headers: tuple[HeaderCell, ...]
    selection_enabled: bool
    header_check: HeaderCheckState | None
    rows: tuple[BodyRow, ...] = ()
    skeleton: SkeletonShape | None = None
    empty_message: str | None = None
    empty_action: EmptyAction | None = None
    pagination: PaginationStrip | None = None

    @property
    def column_count(self) -> int:
        return len(self.headers) + (1 if self.selection_enabled else 0)


class DataTable:
    """Controlled table over a caller-supplied :class:`TableConfig`.

    The table owns only transient UI state: the search box echo (through
    its :class:`DebouncedSearchChannel`) and the hovered row. Everything
    else is recomputed from the latest config on each call.
    """

    def __init__(
        self,
        config: TableConfig,
        scheduler: Scheduler,
        *,
        search_debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS,
    ) -> None:
        self._config = config
        self._columns = normalize_columns(config.columns)
        self._hovered: int | None = None
        self._search = DebouncedSearchChannel(
            scheduler,
            self._emit_search,
            value=config.search_value,
            delay_ms=search_debounce_ms,
        )

    @property
    def config(self) -> TableConfig:
        return self._config

    @property
    def search(self) -> DebouncedSearchChannel:
        return self._search

    @property
    def hovered_index(self) -> int | None:
        return self._hovered

    def update(self, config: TableConfig) -> None:
        """Adopt the host's latest descriptors."""
        self._config = config
        self._columns = normalize_columns(config.columns)
        self._search.sync_external(config.search_value)
        if self._hovered is not None and self._hovered >= len(config.data):
            self._hovered = None

    def close(self) -> None:
        """Tear down: no search commit may fire after this."""
        self._search.close()

    # engines -----------------------------------------------------------

    def sort_engine(self) -> SortEngine:
        return SortEngine(self._columns, self._config.sort, self._config.on_sort_change)

    def selection_engine(self) -> SelectionEngine:
        return SelectionEngine(
            list(self._config.data),
            self._config.selection,
            self._config.on_selection_change,
            id_field=self._config.row_id_field,
        )

    def visibility_engine(self) -> ColumnVisibilityEngine:
        return ColumnVisibilityEngine(
            self._columns,
            self._config.visible_columns,
            self._config.on_column_visibility_change,
        )

    def effective_columns(self) -> list[Column]:
        return self.visibility_engine().effective_columns()

    # rendering ---------------------------------------------------------

    def render(self, *, now: datetime | None = None) -> TableRenderModel:
        config = self._config
        columns = self.effective_columns()
        sort = self.sort_engine()
        selection = self.selection_engine()
        visibility = self.visibility_engine()

        toolbar = compose_toolbar(
            search=self._search if config.on_search_change is not None else None,
            search_placeholder=config.search_placeholder,
            on_filter_click=config.on_filter_click,
            is_filter_active=config.is_filter_active,
            bulk_actions=config.bulk_actions,
            on_bulk_action=config.on_bulk_action,
            selected_count=len(selection.selection),
            visibility=visibility if config.on_column_visibility_change else None,
            show_column_visibility=config.show_column_visibility,
        )
        headers = tuple(
            HeaderCell(
                column_id=column.column_id,
                header=column.header,
                sortable=sort.is_sortable(column),
                sort_direction=sort.direction_for(column),
                align=column.align,
                width=column.width,
                min_width=column.min_width,
            )
            for column in columns
        )
        header_check = selection.header_state() if selection.enabled else None

        if config.is_loading:
            return TableRenderModel(
                state=RenderState.LOADING,
                toolbar=toolbar,
                headers=headers,
                selection_enabled=selection.enabled,
                header_check=header_check,
                skeleton=SkeletonShape(
                    rows=max(config.skeleton_rows, 1),
                    columns=len(columns) + (1 if selection.enabled else 0),
                ),
            )

        if not config.data:
            return TableRenderModel(
                state=RenderState.EMPTY,
                toolbar=toolbar,
                headers=headers,
                selection_enabled=selection.enabled,
                header_check=header_check,
                empty_message=config.empty_message,
                empty_action=config.empty_action,
            )

        rows = tuple(
            self._render_row(index, item, columns, selection, now)
            for index, item in enumerate(config.data)
        )
        strip = None
        if config.pagination is not None:
            strip = build_pagination_strip(
                config.pagination,
                max_visible=config.max_visible_pages,
                page_size_options=config.page_size_options,
            )
        return TableRenderModel(
            state=RenderState.POPULATED,
            toolbar=toolbar,
            headers=headers,
            selection_enabled=selection.enabled,
            header_check=header_check,
            rows=rows,
            pagination=strip,
        )

    def _render_row(
        self,
        index: int,
        item: Any,
        columns: Sequence[Column],
        selection: SelectionEngine,
        now: datetime | None,
    ) -> BodyRow:
        identifier = row_id(item, self._config.row_id_field)
        return BodyRow(
            index=index,
            row=item,
            row_id=identifier,
            selected=selection.is_selected(identifier),
            hovered=self._hovered == index,
            cells=tuple(render_cell(column, item, index, now=now) for column in columns),
            attributes=self._row_attributes(item, index),
        )

    def _row_attributes(self, item: Any, index: int) -> RowAttributes | None:
        factory = self._config.row_attributes
        if factory is None:
            return None
        try:
            return factory(item, index)
        except Exception:
            logger.warning("Row attributes failed for row %d", index, exc_info=True)
            return None

    # interactions ------------------------------------------------------

    def click_header(self, column_id: str) -> SortDescriptor | None:
        column = next((c for c in self._columns if c.column_id == column_id), None)
        if column is None or column.field is None:
            return None
        return self.sort_engine().toggle(column.field)

    def click_row(self, index: int) -> RowEvent | None:
        return self._dispatch_row_event(RowEventKind.CLICK, index)

    def hover_row(self, index: int | None) -> RowEvent | None:
        if index is None:
            previous = self._hovered
            if previous is None:
                return None
            return self._dispatch_row_event(RowEventKind.LEAVE, previous)
        return self._dispatch_row_event(RowEventKind.HOVER, index)

    def click_row_checkbox(self, index: int, checked: bool) -> frozenset[RowId] | None:
        """Toggle a row's selection; never reaches the row click handler."""
        item = self._row_at(index)
        selection = self.selection_engine()
        if item is None or not selection.enabled:
            return None
        identifier = row_id(item, self._config.row_id_field)
        if identifier is None:
            return None
        return selection.toggle_row(identifier, checked)

    def click_header_checkbox(self, checked: bool) -> frozenset[RowId] | None:
        selection = self.selection_engine()
        if not selection.enabled:
            return None
        return selection.toggle_select_all_on_page(checked)

    def type_search(self, text: str) -> None:
        self._search.type(text)

    def set_column_visible(self, column_id: str, visible: bool) -> None:
        self.visibility_engine().set_visible(column_id, visible)

    def click_filter(self) -> None:
        if self._config.on_filter_click is not None:
            self._config.on_filter_click()

    def click_bulk_action(self, value: str) -> None:
        if self._config.on_bulk_action is not None:
            self._config.on_bulk_action(value)

    def click_empty_action(self) -> None:
        if self._config.empty_action is not None:
            self._config.empty_action.on_click()

    def go_to_page(self, page: PageItem) -> None:
        if self._config.pagination is not None:
            PaginationEngine(self._config.pagination).go_to(page)

    def previous_page(self) -> None:
        if self._config.pagination is not None:
            PaginationEngine(self._config.pagination).previous()

    def next_page(self) -> None:
        if self._config.pagination is not None:
            PaginationEngine(self._config.pagination).next()

    def change_page_size(self, size: int) -> None:
        if self._config.pagination is not None:
            PaginationEngine(self._config.pagination).change_page_size(size)

    def _row_at(self, index: int) -> Any | None:
        if 0 <= index < len(self._config.data):
            return self._config.data[index]
        return None

    def _dispatch_row_event(self, kind: RowEventKind, index: int) -> RowEvent | None:
        item = self._row_at(index)
        if item is None:
            return None
        event = RowEvent(kind=kind, row=item, index=index)
        attributes = self._row_attributes(item, index)
        handler = None
        if attributes is not None:
            handler = {
                RowEventKind.CLICK: attributes.on_click,
                RowEventKind.HOVER: attributes.on_hover,
                RowEventKind.LEAVE: attributes.on_leave,
            }[kind]
        if handler is not None:
            handler(event)
        if not event.handled:
            self._default_row_action(event)
        return event

    def _default_row_action(self, event: RowEvent) -> None:
        if event.kind is RowEventKind.CLICK:
            if self._config.on_row_click is not None:
                self._config.on_row_click(event.row, event.index)
        elif event.kind is RowEventKind.HOVER:
            if self._config.enable_row_hover:
                self._hovered = event.index
        else:
            self._hovered = None

    def _emit_search(self, value: str) -> None:
        if self._config.on_search_change is not None:
            self._config.on_search_change(value)
