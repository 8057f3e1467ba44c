"""Reusable Qt widgets."""

from bo_gui.widgets.data_table import DataTableWidget
from bo_gui.widgets.pagination_bar import PaginationBar
from bo_gui.widgets.table_toolbar import TableToolbar

__all__ = [
    "DataTableWidget",
    "PaginationBar",
    "TableToolbar",
]
