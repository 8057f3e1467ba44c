"""Tests for table preference persistence."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from bo_common.errors import PreferenceStoreError
from bo_table.preferences import (
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    TablePreferences,
    TablePreferencesController,
    preferences_from_payload,
)

pytestmark = pytest.mark.unit_table


class TestController:
    def test_mount_saves_defaults(self) -> None:
        store = InMemoryPreferenceStore()
        controller = TablePreferencesController(
            store, "languages-table", default_page_size=20, default_visible_columns=["name"]
        )
        assert controller.page_size == 20
        assert store.load("languages-table") == TablePreferences(page_size=20, visible_columns=["name"])

    def test_mount_reads_existing(self) -> None:
        store = InMemoryPreferenceStore()
        store.save("t", TablePreferences(page_size=50))
        controller = TablePreferencesController(store, "t", default_page_size=10)
        assert controller.page_size == 50
        assert controller.visible_columns() is None

    def test_required_columns_forced_in(self) -> None:
        store = InMemoryPreferenceStore()
        store.save("t", TablePreferences(visible_columns=["name"]))
        controller = TablePreferencesController(store, "t")
        assert controller.visible_columns({"actions"}) == frozenset({"name", "actions"})

    def test_updates_are_persisted(self) -> None:
        store = InMemoryPreferenceStore()
        controller = TablePreferencesController(store, "t")
        controller.update_page_size(25)
        controller.update_visible_columns({"b", "a"})
        assert store.load("t") == TablePreferences(page_size=25, visible_columns=["a", "b"])

    def test_invalid_page_size_ignored(self) -> None:
        store = MagicMock()
        store.load.return_value = TablePreferences(page_size=10)
        controller = TablePreferencesController(store, "t")
        controller.update_page_size(0)
        controller.update_page_size(10)
        store.save.assert_not_called()

    def test_tables_sharing_an_id_share_preferences(self) -> None:
        store = InMemoryPreferenceStore()
        TablePreferencesController(store, "shared").update_page_size(100)
        assert TablePreferencesController(store, "shared").page_size == 100

    def test_save_failure_is_logged_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        store = MagicMock()
        store.load.return_value = None
        store.save.side_effect = PreferenceStoreError("disk full")
        controller = TablePreferencesController(store, "t", default_page_size=10)
        controller.update_page_size(20)
        assert controller.page_size == 20
        assert "not saved" in caplog.text


class TestJsonFileStore:
    def test_round_trip_keeps_other_tables(self, tmp_path: Path) -> None:
        path = tmp_path / "prefs" / "tables.json"
        store = JsonFilePreferenceStore(path)
        store.save("a", TablePreferences(page_size=20))
        store.save("b", TablePreferences(visible_columns=["x"]))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) == {"a", "b"}
        assert store.load("a") == TablePreferences(page_size=20)

    def test_corrupt_file_reads_as_missing(self, tmp_path: Path) -> None:
        path = tmp_path / "tables.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonFilePreferenceStore(path).load("a") is None

    def test_write_failure_raises_typed_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        store = JsonFilePreferenceStore(blocker / "tables.json")
        with pytest.raises(PreferenceStoreError) as excinfo:
            store.save("a", TablePreferences())
        assert excinfo.value.context["table_id"] == "a"


def test_payload_validation() -> None:
    assert preferences_from_payload(None, table_id="t") is None
    assert preferences_from_payload([1], table_id="t") is None
    assert preferences_from_payload({"page_size": 0}, table_id="t") is None
    assert preferences_from_payload({"page_size": 5, "extra": 1}, table_id="t") == TablePreferences(page_size=5)
