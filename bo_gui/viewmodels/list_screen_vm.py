"""ViewModel for a generic admin list screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from PySide6.QtCore import QObject, Signal

from bo_table.columns import Column, normalize_columns, required_column_ids
from bo_table.datasource import ListPage, ListQuery
from bo_table.pagination import PaginationDescriptor
from bo_table.preferences import TablePreferencesController
from bo_table.query_params import (
    QueryParamMirror,
    active_filter_count,
    parse_boolean_param,
    parse_number_param,
    parse_page_param,
)
from bo_table.renderer import DataTable, EmptyAction, TableConfig, TableRenderModel
from bo_common.errors import DataSourceError
from bo_table.rows import RowId, get_field, row_id
from bo_table.settings import TableSettings
from bo_table.sorting import SortDescriptor
from bo_table.toolbar import BulkAction

if TYPE_CHECKING:
    from bo_table.datasource import ListDataSource
    from bo_table.preferences import PreferenceStore
    from bo_table.query_params import AddressBar
    from bo_table.scheduling import Scheduler

logger = logging.getLogger(__name__)

ACTION_DELETE = "delete"
ACTION_ACTIVATE = "activate"
ACTION_DEACTIVATE = "deactivate"
ACTION_TOGGLE_ACTIVE = "toggle_active"

_STATUS_ACTIONS = (ACTION_ACTIVATE, ACTION_DEACTIVATE, ACTION_TOGGLE_ACTIVE)


@dataclass(frozen=True)
class FilterDefinition:
    name: str
    label: str
    kind: str = "boolean"  # "boolean" or "text"


@dataclass(frozen=True)
class ScreenDefinition:
    """Static description of one list screen."""

    title: str
    table_id: str
    columns: tuple[Column, ...]
    search_placeholder: str = "Search..."
    empty_message: str = "No data found"
    empty_action_label: str | None = None
    bulk_actions: tuple[BulkAction, ...] = ()
    filters: tuple[FilterDefinition, ...] = ()
    default_visible_columns: tuple[str, ...] | None = None
    row_id_field: str = "id"
    row_actions: tuple[BulkAction, ...] = ()
    # boolean field flipped by the activate/deactivate/toggle_active actions
    status_field: str | None = None


class ListScreenViewModel(QObject):
    """ViewModel behind one admin list screen.

    Page, page size, search and filters live in the address bar's query
    parameters; sort, selection and visible columns are held here and the
    table engine renders from all of them.
    """

    # Signals
    model_changed = Signal(object)  # TableRenderModel
    loading_changed = Signal(bool)
    error_occurred = Signal(str)
    row_activated = Signal(object)  # row
    bulk_action_requested = Signal(str, list)  # action value, selected ids
    row_action_requested = Signal(str, object)  # action value, row id
    empty_action_requested = Signal()
    filters_visibility_changed = Signal(bool)

    def __init__(
        self,
        definition: ScreenDefinition,
        data_source: "ListDataSource",
        preference_store: "PreferenceStore",
        address_bar: "AddressBar",
        *,
        scheduler: "Scheduler | None" = None,
        settings: TableSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        if scheduler is None:
            from bo_gui.adapters.qt_scheduler import QtScheduler

            scheduler = QtScheduler(self)
        self._definition = definition
        self._data_source = data_source
        self._settings = settings or TableSettings()
        self._columns = normalize_columns(definition.columns)
        self._preferences = TablePreferencesController(
            preference_store,
            definition.table_id,
            default_page_size=self._settings.default_page_size,
            default_visible_columns=definition.default_visible_columns,
        )
        self._mirror = QueryParamMirror(
            address_bar, scheduler, delay_ms=self._settings.query_debounce_ms
        )

        # State
        self._visible = self._preferences.visible_columns(required_column_ids(self._columns))
        self._sort: SortDescriptor | None = None
        self._selection: frozenset[RowId] = frozenset()
        self._filters_open = False
        self._is_loading = False
        self._page = ListPage(page=self.page, limit=self.limit)

        self._table = DataTable(
            self._build_config(),
            scheduler,
            search_debounce_ms=self._settings.search_debounce_ms,
        )

    @property
    def definition(self) -> ScreenDefinition:
        return self._definition

    @property
    def table(self) -> DataTable:
        return self._table

    @property
    def page(self) -> int:
        return parse_page_param(self._mirror.get("page"))

    @property
    def limit(self) -> int:
        return parse_number_param(self._mirror.get("limit"), self._preferences.page_size)

    @property
    def search(self) -> str:
        return self._mirror.get("search") or ""

    @property
    def filters(self) -> dict[str, Any]:
        """Current filter values parsed from the query parameters."""
        values: dict[str, Any] = {}
        for flt in self._definition.filters:
            raw = self._mirror.get(flt.name)
            values[flt.name] = parse_boolean_param(raw) if flt.kind == "boolean" else raw
        return values

    @property
    def active_filter_count(self) -> int:
        return active_filter_count({**self.filters, "search": self.search})

    @property
    def filters_open(self) -> bool:
        return self._filters_open

    @property
    def sort(self) -> SortDescriptor | None:
        return self._sort

    @property
    def selection(self) -> frozenset[RowId]:
        return self._selection

    @property
    def visible_columns(self) -> frozenset[str] | None:
        return self._visible

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def current_page(self) -> ListPage:
        return self._page

    def render(self) -> TableRenderModel:
        return self._table.render()

    def load(self) -> None:
        """Fetch the page described by the current query parameters."""
        query = ListQuery(
            page=self.page,
            limit=self.limit,
            search=self.search or None,
            sort_by=self._sort.column_accessor if self._sort else None,
            sort_direction=self._sort.direction if self._sort else ListQuery().sort_direction,
            filters={name: value for name, value in self.filters.items() if value is not None},
        )
        self._set_loading(True)
        try:
            self._page = self._data_source.list(query)
        except Exception as e:
            logger.warning("Failed to load %s: %s", self._definition.table_id, e)
            self._page = ListPage(page=query.page, limit=query.limit)
            self.error_occurred.emit(f"Failed to load {self._definition.title.lower()}: {e}")
        finally:
            self._set_loading(False)

    def close(self) -> None:
        """Write pending query parameters and cancel timers."""
        self._table.close()
        self._mirror.flush()
        self._mirror.close()

    # view interactions -------------------------------------------------

    def click_header(self, column_id: str) -> None:
        self._table.click_header(column_id)

    def click_row(self, index: int) -> None:
        self._table.click_row(index)

    def hover_row(self, index: int | None) -> None:
        if self._table.hover_row(index) is not None:
            self._emit_model()

    def toggle_row(self, index: int, checked: bool) -> None:
        self._table.click_row_checkbox(index, checked)

    def toggle_page_selection(self, checked: bool) -> None:
        self._table.click_header_checkbox(checked)

    def clear_selection(self) -> None:
        self._on_selection_change(frozenset())

    def type_search(self, text: str) -> None:
        self._table.type_search(text)

    def submit_search(self) -> None:
        self._table.search.flush()

    def set_column_visible(self, column_id: str, visible: bool) -> None:
        self._table.set_column_visible(column_id, visible)

    def toggle_filters(self) -> None:
        self._table.click_filter()

    def set_filter(self, name: str, value: Any) -> None:
        self._navigate({name: value, "page": 1})

    def clear_filters(self) -> None:
        updates: dict[str, Any] = {flt.name: None for flt in self._definition.filters}
        updates.update({"search": None, "page": 1})
        self._navigate(updates)

    def trigger_bulk_action(self, value: str) -> None:
        self._table.click_bulk_action(value)

    def run_row_action(self, value: str, index: int) -> None:
        """Apply a row action to the row displayed at ``index``."""
        items = self._page.items
        if not 0 <= index < len(items):
            return
        row = items[index]
        target = row_id(row, self._definition.row_id_field)
        if target is None:
            return
        if self._is_mutation(value) and not self._run_action(value, [(target, row)]):
            return
        self.row_action_requested.emit(value, target)

    def trigger_empty_action(self) -> None:
        self._table.click_empty_action()

    def go_to_page(self, page: int) -> None:
        self._table.go_to_page(page)

    def previous_page(self) -> None:
        self._table.previous_page()

    def next_page(self) -> None:
        self._table.next_page()

    def change_page_size(self, size: int) -> None:
        self._table.change_page_size(size)

    # engine callbacks --------------------------------------------------

    def _on_sort_change(self, descriptor: SortDescriptor) -> None:
        self._sort = descriptor
        self._navigate({"page": 1})

    def _on_selection_change(self, selection: frozenset[RowId]) -> None:
        self._selection = selection
        self._refresh()

    def _on_visibility_change(self, column_id: str, visible: bool, columns: frozenset[str]) -> None:
        logger.debug("Column %s visible=%s", column_id, visible)
        self._visible = columns
        self._preferences.update_visible_columns(columns)
        self._refresh()

    def _on_page_change(self, page: int) -> None:
        self._navigate({"page": page})

    def _on_page_size_change(self, size: int) -> None:
        self._preferences.update_page_size(size)
        self._navigate({"limit": size, "page": 1})

    def _on_search_change(self, value: str) -> None:
        self._navigate({"search": value, "page": 1})

    def _on_filter_click(self) -> None:
        self._filters_open = not self._filters_open
        self.filters_visibility_changed.emit(self._filters_open)
        self._refresh()

    def _on_bulk_action(self, value: str) -> None:
        ids = list(self._selection)
        if self._is_mutation(value) and not self._run_action(value, [(i, None) for i in ids]):
            return
        self.bulk_action_requested.emit(value, ids)

    def _on_row_click(self, row: Any, index: int) -> None:
        self.row_activated.emit(row)

    # internals ---------------------------------------------------------

    def _is_mutation(self, value: str) -> bool:
        if value == ACTION_DELETE:
            return True
        return self._definition.status_field is not None and value in _STATUS_ACTIONS

    def _mutate(self, value: str, target: RowId, row: Any) -> None:
        if value == ACTION_DELETE:
            self._data_source.delete(target)
            return
        field = self._definition.status_field
        if value == ACTION_TOGGLE_ACTIVE:
            active = not get_field(row, field)
        else:
            active = value == ACTION_ACTIVATE
        self._data_source.update(target, {field: active})

    def _run_action(self, value: str, targets: list[tuple[RowId, Any]]) -> bool:
        """Apply ``value`` to each target through the data source, then reload.

        Stops at the first failure; rows already changed stay changed and
        deleted ids leave the selection either way.
        """
        done: list[RowId] = []
        error: DataSourceError | None = None
        for target, row in targets:
            try:
                self._mutate(value, target, row)
            except DataSourceError as e:
                error = e
                break
            done.append(target)
        if value == ACTION_DELETE and done:
            self._selection = self._selection.difference(done)
        self._reload()
        if error is not None:
            logger.warning("Failed to %s in %s: %s", value, self._definition.table_id, error)
            self.error_occurred.emit(f"Failed to {value} {self._definition.title.lower()}: {error}")
            return False
        logger.info("%s applied to %d row(s) in %s", value, len(done), self._definition.table_id)
        return True

    def _reload(self) -> None:
        self.load()
        page = self._page
        if not page.items and page.page > 1 and page.total_pages:
            self._navigate({"page": page.total_pages})

    def _navigate(self, updates: dict[str, Any]) -> None:
        self._mirror.update(updates)
        self.load()

    def _set_loading(self, loading: bool) -> None:
        self._is_loading = loading
        self.loading_changed.emit(loading)
        self._refresh()

    def _refresh(self) -> None:
        self._table.update(self._build_config())
        self._emit_model()

    def _emit_model(self) -> None:
        self.model_changed.emit(self._table.render())

    def _build_config(self) -> TableConfig:
        definition = self._definition
        page = self._page
        empty_action = None
        if definition.empty_action_label:
            empty_action = EmptyAction(
                label=definition.empty_action_label,
                on_click=self.empty_action_requested.emit,
            )
        return TableConfig(
            columns=self._columns,
            data=list(page.items),
            table_id=definition.table_id,
            row_id_field=definition.row_id_field,
            is_loading=self._is_loading,
            sort=self._sort,
            on_sort_change=self._on_sort_change,
            selection=self._selection,
            on_selection_change=self._on_selection_change,
            visible_columns=self._visible,
            on_column_visibility_change=self._on_visibility_change,
            show_column_visibility=True,
            pagination=PaginationDescriptor(
                current_page=page.page,
                total_pages=page.total_pages,
                total_items=page.total,
                items_per_page=page.limit,
                on_page_change=self._on_page_change,
                on_items_per_page_change=self._on_page_size_change,
            ),
            search_value=self.search,
            on_search_change=self._on_search_change,
            search_placeholder=definition.search_placeholder,
            on_filter_click=self._on_filter_click if definition.filters else None,
            is_filter_active=self._filters_open,
            bulk_actions=definition.bulk_actions,
            on_bulk_action=self._on_bulk_action if definition.bulk_actions else None,
            on_row_click=self._on_row_click,
            empty_message=definition.empty_message,
            empty_action=empty_action,
            skeleton_rows=self._settings.skeleton_rows,
            max_visible_pages=self._settings.max_visible_pages,
            page_size_options=self._settings.page_size_options,
        )
