"""Row field access shared by the engines."""

from __future__ import annotations

from typing import Any, Mapping, Union

RowId = Union[str, int]

_MISSING = object()


def get_field(row: Any, field: str, default: Any = None) -> Any:
    """Read ``field`` from a mapping row or an attribute-style row."""
    if isinstance(row, Mapping):
        return row.get(field, default)
    return getattr(row, field, default)


def has_field(row: Any, field: str) -> bool:
    return get_field(row, field, _MISSING) is not _MISSING


def row_id(row: Any, id_field: str) -> RowId | None:
    """Return the row identifier, or None when the row is not selectable."""
    value = get_field(row, id_field)
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        return value
    return None


def ids_on_page(rows: list[Any], id_field: str) -> frozenset[RowId]:
    """Identifiers of the selectable rows currently displayed."""
    ids = (row_id(row, id_field) for row in rows)
    return frozenset(value for value in ids if value is not None)
