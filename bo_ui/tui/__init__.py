"""Terminal rendering of table render models."""

from bo_ui.tui.models import TableModel
from bo_ui.tui.table_layout import build_rich_table, pagination_text, table_model_from_render

__all__ = ["TableModel", "build_rich_table", "pagination_text", "table_model_from_render"]
