"""Table preferences persisted through QSettings."""

from __future__ import annotations

import logging
from typing import Final

from PySide6.QtCore import QSettings

from bo_common.errors import PreferenceStoreError
from bo_table.preferences import TablePreferences, preferences_from_payload
from bo_table.serialized import parse_json_feature

logger = logging.getLogger(__name__)

_PREFIX: Final[str] = "tables"


class QSettingsPreferenceStore:
    """Stores each table's preferences as JSON under ``tables/<id>``."""

    def __init__(self, settings: QSettings | None = None) -> None:
        self._settings = settings or QSettings()

    @staticmethod
    def key_for(table_id: str) -> str:
        return f"{_PREFIX}/{table_id}"

    def load(self, table_id: str) -> TablePreferences | None:
        value = self._settings.value(self.key_for(table_id))
        if value is None:
            return None
        if not isinstance(value, str):
            logger.warning("Ignoring non-text preferences entry for %r", table_id)
            return None
        payload = parse_json_feature(value, feature="table preferences")
        return preferences_from_payload(payload, table_id=table_id)

    def save(self, table_id: str, preferences: TablePreferences) -> None:
        self._settings.setValue(self.key_for(table_id), preferences.model_dump_json())
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            raise PreferenceStoreError(
                "Failed to write table preferences",
                context={"table_id": table_id, "status": self._settings.status()},
            )
