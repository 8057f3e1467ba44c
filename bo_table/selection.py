"""Cross-page row selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable

from bo_table.rows import RowId, ids_on_page


@dataclass(frozen=True)
class HeaderCheckState:
    checked: bool
    indeterminate: bool


def header_check_state(
    selection: Iterable[RowId], page_ids: frozenset[RowId]
) -> HeaderCheckState:
    selected_on_page = frozenset(selection) & page_ids
    count = len(selected_on_page)
    return HeaderCheckState(
        checked=bool(page_ids) and count == len(page_ids),
        indeterminate=0 < count < len(page_ids),
    )


class SelectionEngine:
    """Selection transitions over a caller-owned set of row ids.

    Every transition builds a new frozenset and passes it to
    ``on_selection_change``; ids belonging to other pages are carried over.
    """

    def __init__(
        self,
        rows: list[Any],
        selection: Iterable[RowId],
        on_selection_change: Callable[[frozenset[RowId]], None] | None = None,
        *,
        id_field: str = "id",
    ) -> None:
        self._selection = frozenset(selection)
        self._page_ids = ids_on_page(rows, id_field)
        self._on_selection_change = on_selection_change

    @property
    def enabled(self) -> bool:
        return self._on_selection_change is not None

    @property
    def selection(self) -> frozenset[RowId]:
        return self._selection

    @property
    def page_ids(self) -> frozenset[RowId]:
        return self._page_ids

    @property
    def selected_on_page(self) -> frozenset[RowId]:
        return self._selection & self._page_ids

    def is_selected(self, row_id: RowId | None) -> bool:
        return row_id is not None and row_id in self._selection

    def header_state(self) -> HeaderCheckState:
        return header_check_state(self._selection, self._page_ids)

    def toggle_row(self, row_id: RowId | None, checked: bool) -> frozenset[RowId]:
        if row_id is None:
            return self._selection
        if checked:
            updated = self._selection | {row_id}
        else:
            updated = self._selection - {row_id}
        return self._commit(updated)

    def toggle_select_all_on_page(self, checked: bool) -> frozenset[RowId]:
        if checked:
            updated = self._selection | self._page_ids
        else:
            updated = self._selection - self._page_ids
        return self._commit(updated)

    def clear(self) -> frozenset[RowId]:
        return self._commit(frozenset())

    def _commit(self, updated: frozenset[RowId]) -> frozenset[RowId]:
        self._selection = updated
        if self._on_selection_change is not None:
            self._on_selection_change(updated)
        return updated
