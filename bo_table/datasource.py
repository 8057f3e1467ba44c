"""Contract of the list data layer that feeds admin screens."""

from __future__ import annotations

import math
from typing import Any, Mapping, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field

from bo_common.errors import DataSourceError, wrap_error
from bo_table.rows import RowId, get_field, row_id
from bo_table.sorting import SortDirection


class ListQuery(BaseModel):
    """Parameters a list screen sends to its data source."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    search: str | None = None
    sort_by: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    filters: dict[str, Any] = Field(default_factory=dict)


class ListPage(BaseModel):
    """One page of results: ``{items, total, page, limit}``."""

    items: list[Any] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    page: int = 1
    limit: int = 10

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(self.total / self.limit)


class ListDataSource(Protocol):
    """Remote list endpoint; implementations raise DataSourceError on failure."""

    def list(self, query: ListQuery) -> ListPage: ...

    def create(self, values: Mapping[str, Any]) -> Any: ...

    def update(self, item_id: RowId, changes: Mapping[str, Any]) -> Any: ...

    def delete(self, item_id: RowId) -> None: ...


def _sort_key(value: Any) -> tuple[int, int, Any]:
    # Numbers order before text; a field mixing both must still sort.
    if value is None:
        return (1, 0, "")
    if isinstance(value, (int, float)):
        return (0, 0, value)
    return (0, 1, str(value).casefold())


class InMemoryDataSource:
    """Serves a row list held in memory; stands in for the remote layer in demos and tests.

    Mapping rows are copied on the way in, so mutations never touch the
    caller's list.
    """

    def __init__(
        self,
        rows: Sequence[Any],
        *,
        search_fields: Sequence[str] = (),
        id_field: str = "id",
    ) -> None:
        self._rows = [dict(row) if isinstance(row, Mapping) else row for row in rows]
        self._search_fields = tuple(search_fields)
        self._id_field = id_field

    @property
    def rows(self) -> list[Any]:
        return list(self._rows)

    def list(self, query: ListQuery) -> ListPage:
        rows = [row for row in self._rows if self._matches(row, query)]
        if query.sort_by:
            rows.sort(
                key=lambda row: _sort_key(get_field(row, query.sort_by)),
                reverse=query.sort_direction is SortDirection.DESC,
            )
        start = (query.page - 1) * query.limit
        return ListPage(
            items=rows[start : start + query.limit],
            total=len(rows),
            page=query.page,
            limit=query.limit,
        )

    def create(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Append a row; an id is assigned when ``values`` carries none."""
        row = dict(values)
        new_id = row_id(row, self._id_field)
        if new_id is None:
            new_id = self._next_id()
            row[self._id_field] = new_id
        elif self._index_of(new_id) is not None:
            raise DataSourceError(
                f"Row {new_id!r} already exists", context={"id": new_id}
            )
        self._rows.append(row)
        return row

    def update(self, item_id: RowId, changes: Mapping[str, Any]) -> Any:
        index = self._require(item_id)
        row = self._rows[index]
        if isinstance(row, Mapping):
            row = {**row, **changes, self._id_field: item_id}
        else:
            try:
                for name, value in changes.items():
                    setattr(row, name, value)
            except AttributeError as exc:
                raise wrap_error(
                    DataSourceError,
                    f"Row {item_id!r} cannot be updated",
                    context={"id": item_id, "fields": sorted(changes)},
                    cause=exc,
                ) from exc
        self._rows[index] = row
        return row

    def delete(self, item_id: RowId) -> None:
        del self._rows[self._require(item_id)]

    def _index_of(self, item_id: RowId) -> int | None:
        for index, row in enumerate(self._rows):
            if row_id(row, self._id_field) == item_id:
                return index
        return None

    def _require(self, item_id: RowId) -> int:
        index = self._index_of(item_id)
        if index is None:
            raise DataSourceError(f"Row {item_id!r} not found", context={"id": item_id})
        return index

    def _next_id(self) -> int:
        ids = [row_id(row, self._id_field) for row in self._rows]
        return max((value for value in ids if isinstance(value, int)), default=0) + 1

    def _matches(self, row: Any, query: ListQuery) -> bool:
        if not self._matches_filters(row, query.filters):
            return False
        if not query.search:
            return True
        needle = query.search.casefold()
        return any(
            needle in str(get_field(row, name, "")).casefold() for name in self._search_fields
        )

    @staticmethod
    def _matches_filters(row: Any, filters: Mapping[str, Any]) -> bool:
        for name, expected in filters.items():
            if expected is None or expected == "":
                continue
            if get_field(row, name) != expected:
                return False
        return True
