"""Per-table view preferences and their persistence adapters."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Mapping, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bo_common.errors import PreferenceStoreError
from bo_table.serialized import parse_json_feature

logger = logging.getLogger(__name__)


class TablePreferences(BaseModel):
    """Persisted view preferences of one logical table."""

    page_size: int = Field(default=10, ge=1)
    visible_columns: list[str] | None = None

    model_config = ConfigDict(extra="ignore")

    def visible_set(self) -> frozenset[str] | None:
        if self.visible_columns is None:
            return None
        return frozenset(self.visible_columns)


def preferences_from_payload(payload: object, *, table_id: str) -> TablePreferences | None:
    """Validate a decoded payload, treating bad data as missing."""
    if payload is None:
        return None
    if not isinstance(payload, Mapping):
        logger.warning("Ignoring stored preferences for %r: expected an object", table_id)
        return None
    try:
        return TablePreferences.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Ignoring invalid stored preferences for %r: %s", table_id, exc)
        return None


class PreferenceStore(Protocol):
    """Keyed persistence of table preferences."""

    def load(self, table_id: str) -> TablePreferences | None: ...

    def save(self, table_id: str, preferences: TablePreferences) -> None: ...


class InMemoryPreferenceStore:
    def __init__(self) -> None:
        self._items: dict[str, TablePreferences] = {}

    def load(self, table_id: str) -> TablePreferences | None:
        stored = self._items.get(table_id)
        return stored.model_copy(deep=True) if stored is not None else None

    def save(self, table_id: str, preferences: TablePreferences) -> None:
        self._items[table_id] = preferences.model_copy(deep=True)


class JsonFilePreferenceStore:
    """All tables' preferences in one JSON document keyed by table id."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, object]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Could not read preferences file %s: %s", self._path, exc)
            return {}
        data = parse_json_feature(raw, feature="table preferences")
        if not isinstance(data, dict):
            return {}
        return data

    def load(self, table_id: str) -> TablePreferences | None:
        return preferences_from_payload(self._read_all().get(table_id), table_id=table_id)

    def save(self, table_id: str, preferences: TablePreferences) -> None:
        data = self._read_all()
        data[table_id] = preferences.model_dump(mode="json")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            raise PreferenceStoreError(
                "Failed to write table preferences",
                context={"path": self._path, "table_id": table_id},
                cause=exc,
            ) from exc


class TablePreferencesController:
    """Reads a table's preferences at mount and writes them on change."""

    def __init__(
        self,
        store: PreferenceStore,
        table_id: str,
        *,
        default_page_size: int = 10,
        default_visible_columns: Iterable[str] | None = None,
    ) -> None:
        self._store = store
        self._table_id = table_id
        self._defaults = TablePreferences(
            page_size=default_page_size,
            visible_columns=(
                list(default_visible_columns) if default_visible_columns is not None else None
            ),
        )
        self._preferences = self._mount()

    @property
    def table_id(self) -> str:
        return self._table_id

    @property
    def preferences(self) -> TablePreferences:
        return self._preferences

    @property
    def page_size(self) -> int:
        return self._preferences.page_size

    def visible_columns(self, required: Iterable[str] = ()) -> frozenset[str] | None:
        """Stored visible set with ``required`` ids forced in."""
        visible = self._preferences.visible_set()
        if visible is None:
            return None
        return visible | frozenset(required)

    def update_page_size(self, size: int) -> None:
        if size < 1 or size == self._preferences.page_size:
            return
        self._write(self._preferences.model_copy(update={"page_size": size}))

    def update_visible_columns(self, columns: Iterable[str]) -> None:
        ordered = sorted(set(columns))
        self._write(self._preferences.model_copy(update={"visible_columns": ordered}))

    def _mount(self) -> TablePreferences:
        stored = self._store.load(self._table_id)
        if stored is not None:
            return stored
        defaults = self._defaults.model_copy(deep=True)
        self._persist(defaults)
        return defaults

    def _write(self, preferences: TablePreferences) -> None:
        self._preferences = preferences
        self._persist(preferences)

    def _persist(self, preferences: TablePreferences) -> None:
        try:
            self._store.save(self._table_id, preferences)
        except PreferenceStoreError as exc:
            logger.warning("Table preferences not saved for %r: %s", self._table_id, exc)
