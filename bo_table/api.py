"""Public API surface for bo_table."""

from bo_table.cells import CellResult, render_cell
from bo_table.columns import (
    Align,
    Column,
    ColumnPickerEntry,
    ColumnType,
    ColumnVisibilityEngine,
    effective_visible_ids,
    normalize_columns,
)
from bo_table.datasource import InMemoryDataSource, ListDataSource, ListPage, ListQuery
from bo_table.formatting import (
    PLACEHOLDER,
    FormattedDateTime,
    format_cell_value,
    format_datetime,
)
from bo_table.pagination import (
    ELLIPSIS,
    PaginationDescriptor,
    PaginationEngine,
    PaginationStrip,
    build_pagination_strip,
    compute_item_range,
    compute_page_window,
    range_label,
    total_pages_for,
)
from bo_table.preferences import (
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    PreferenceStore,
    TablePreferences,
    TablePreferencesController,
)
from bo_table.query_params import (
    AddressBar,
    InMemoryAddressBar,
    QueryParamMirror,
    active_filter_count,
    parse_boolean_param,
    parse_number_param,
    parse_page_param,
)
from bo_table.renderer import (
    BodyRow,
    DataTable,
    EmptyAction,
    HeaderCell,
    RenderState,
    RowAttributes,
    RowEvent,
    RowEventKind,
    TableConfig,
    TableRenderModel,
)
from bo_table.scheduling import ScheduledTask, Scheduler, ThreadingScheduler
from bo_table.search import DebouncedSearchChannel, SearchState
from bo_table.selection import HeaderCheckState, SelectionEngine
from bo_table.serialized import FloatingAction, parse_floating_action, parse_json_feature
from bo_table.settings import TableSettings, load_settings
from bo_table.sorting import SortDescriptor, SortDirection, SortEngine, next_sort
from bo_table.toolbar import BulkAction, ToolbarModel, compose_toolbar

__all__ = [
    "AddressBar",
    "Align",
    "BodyRow",
    "BulkAction",
    "CellResult",
    "Column",
    "ColumnPickerEntry",
    "ColumnType",
    "ColumnVisibilityEngine",
    "DataTable",
    "DebouncedSearchChannel",
    "ELLIPSIS",
    "EmptyAction",
    "FloatingAction",
    "FormattedDateTime",
    "HeaderCell",
    "HeaderCheckState",
    "InMemoryAddressBar",
    "InMemoryDataSource",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "ListDataSource",
    "ListPage",
    "ListQuery",
    "PLACEHOLDER",
    "PaginationDescriptor",
    "PaginationEngine",
    "PaginationStrip",
    "PreferenceStore",
    "QueryParamMirror",
    "RenderState",
    "RowAttributes",
    "RowEvent",
    "RowEventKind",
    "ScheduledTask",
    "Scheduler",
    "SearchState",
    "SelectionEngine",
    "SortDescriptor",
    "SortDirection",
    "SortEngine",
    "TableConfig",
    "TablePreferences",
    "TablePreferencesController",
    "TableRenderModel",
    "TableSettings",
    "ThreadingScheduler",
    "ToolbarModel",
    "active_filter_count",
    "build_pagination_strip",
    "compose_toolbar",
    "compute_item_range",
    "compute_page_window",
    "effective_visible_ids",
    "format_cell_value",
    "format_datetime",
    "load_settings",
    "next_sort",
    "normalize_columns",
    "parse_boolean_param",
    "parse_floating_action",
    "parse_json_feature",
    "parse_number_param",
    "parse_page_param",
    "range_label",
    "render_cell",
    "total_pages_for",
]
