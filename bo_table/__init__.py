"""Tabular data presentation engine for back-office list screens."""

from bo_table.api import (
    Column,
    DataTable,
    PaginationDescriptor,
    SortDescriptor,
    TableConfig,
    TableRenderModel,
)

__all__ = [
    "Column",
    "DataTable",
    "PaginationDescriptor",
    "SortDescriptor",
    "TableConfig",
    "TableRenderModel",
]
