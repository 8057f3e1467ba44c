"""Unit tests for ListScreenViewModel."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from bo_common.errors import DataSourceError
from bo_table.datasource import InMemoryDataSource
from bo_table.preferences import InMemoryPreferenceStore, TablePreferences
from bo_table.query_params import InMemoryAddressBar
from bo_table.renderer import RenderState
from bo_table.settings import TableSettings
from tests.helpers.scheduler import ManualScheduler

pytestmark = pytest.mark.unit_gui


class TestListScreenViewModel:
    """Tests for ListScreenViewModel wired to in-memory collaborators."""

    @pytest.fixture
    def env(self, qapp) -> dict:
        from bo_gui.services.demo_catalog import LANGUAGE_ROWS

        return {
            "source": InMemoryDataSource(LANGUAGE_ROWS, search_fields=("code", "name", "native_name")),
            "store": InMemoryPreferenceStore(),
            "bar": InMemoryAddressBar(),
            "scheduler": ManualScheduler(),
        }

    def _vm(self, env: dict, data_source=None):
        from bo_gui.services.demo_catalog import languages_screen
        from bo_gui.viewmodels.list_screen_vm import ListScreenViewModel

        vm = ListScreenViewModel(
            languages_screen(),
            data_source or env["source"],
            env["store"],
            env["bar"],
            scheduler=env["scheduler"],
            settings=TableSettings(),
        )
        models: list = []
        vm.model_changed.connect(models.append)
        vm.load()
        return vm, models

    def test_initial_load(self, env: dict) -> None:
        vm, models = self._vm(env)

        model = models[-1]
        assert model.state is RenderState.POPULATED
        assert len(model.rows) == 10
        assert model.pagination.range_label == "1–10 of 14"
        assert vm.is_loading is False
        # the loading state is rendered before the data arrives
        assert any(m.state is RenderState.LOADING for m in models)

    def test_mount_saves_default_preferences(self, env: dict) -> None:
        self._vm(env)
        assert env["store"].load("languages-table") == TablePreferences(page_size=10)

    def test_next_page_updates_address_bar_after_debounce(self, env: dict) -> None:
        vm, models = self._vm(env)

        vm.next_page()

        assert vm.page == 2
        assert len(models[-1].rows) == 4
        assert env["bar"].params() == {}
        env["scheduler"].advance(100)
        assert env["bar"].params() == {"page": "2"}

    def test_page_size_change_persists_and_resets_page(self, env: dict) -> None:
        vm, models = self._vm(env)
        vm.next_page()

        vm.change_page_size(20)

        assert vm.page == 1
        assert vm.limit == 20
        assert len(models[-1].rows) == 14
        assert env["store"].load("languages-table").page_size == 20

    def test_page_size_preference_restored(self, env: dict) -> None:
        env["store"].save("languages-table", TablePreferences(page_size=5))
        vm, models = self._vm(env)
        assert vm.limit == 5
        assert len(models[-1].rows) == 5

    def test_search_is_debounced_then_mirrored(self, env: dict) -> None:
        vm, models = self._vm(env)
        scheduler = env["scheduler"]

        vm.type_search("f")
        vm.type_search("fr")
        assert len(models[-1].rows) == 10

        scheduler.advance(400)
        assert vm.search == "fr"
        assert [body.row["code"] for body in models[-1].rows] == ["fr"]

        scheduler.advance(100)
        assert env["bar"].params() == {"search": "fr", "page": "1"}

    def test_submit_search_commits_immediately(self, env: dict) -> None:
        vm, _ = self._vm(env)
        vm.type_search("de")
        vm.submit_search()
        assert vm.search == "de"

    def test_header_click_sorts(self, env: dict) -> None:
        vm, models = self._vm(env)

        vm.click_header("name")
        assert models[-1].rows[0].row["name"] == "Arabic"

        vm.click_header("name")
        assert models[-1].rows[0].row["name"] == "Turkish"
        assert vm.sort.column_accessor == "name"

    def test_selection_survives_paging(self, env: dict) -> None:
        vm, models = self._vm(env)

        vm.toggle_page_selection(True)
        assert len(vm.selection) == 10
        assert models[-1].header_check.checked is True

        vm.next_page()
        assert len(vm.selection) == 10
        assert models[-1].header_check.checked is False
        assert models[-1].header_check.indeterminate is False

    def test_hiding_column_is_persisted(self, env: dict) -> None:
        vm, models = self._vm(env)

        vm.set_column_visible("native_name", False)

        assert "native_name" not in [h.column_id for h in models[-1].headers]
        stored = env["store"].load("languages-table")
        assert stored.visible_columns == sorted(["code", "name", "is_active", "updated_at"])

    def test_boolean_filter(self, env: dict) -> None:
        vm, models = self._vm(env)

        vm.set_filter("is_active", False)

        assert vm.filters == {"is_active": False}
        assert vm.active_filter_count == 1
        assert {b.row["code"] for b in models[-1].rows} == {"it", "nl", "sv", "ar"}
        env["scheduler"].advance(100)
        assert env["bar"].params()["is_active"] == "false"

    def test_clear_filters(self, env: dict) -> None:
        vm, models = self._vm(env)
        vm.set_filter("is_active", True)
        vm.type_search("x")
        vm.submit_search()

        vm.clear_filters()

        assert vm.filters == {"is_active": None}
        assert vm.search == ""
        assert vm.active_filter_count == 0
        assert models[-1].toolbar.search.text == ""

    def test_filter_toggle_emits_visibility(self, env: dict) -> None:
        vm, models = self._vm(env)
        shown: list[bool] = []
        vm.filters_visibility_changed.connect(shown.append)

        vm.toggle_filters()
        vm.toggle_filters()

        assert shown == [True, False]
        assert models[-1].toolbar.filter_toggle.active is False

    def test_bulk_delete_removes_rows_and_selection(self, env: dict) -> None:
        vm, models = self._vm(env)
        requested: list[tuple] = []
        vm.bulk_action_requested.connect(lambda value, ids: requested.append((value, ids)))
        vm.toggle_row(0, True)
        vm.toggle_row(1, True)

        vm.trigger_bulk_action("delete")

        assert [(value, sorted(ids)) for value, ids in requested] == [("delete", [1, 2])]
        assert vm.selection == frozenset()
        assert {row["id"] for row in env["source"].rows}.isdisjoint({1, 2})
        assert models[-1].rows[0].row["code"] == "de"
        assert models[-1].pagination.range_label == "1–10 of 12"

    def test_bulk_deactivate_updates_rows(self, env: dict) -> None:
        vm, models = self._vm(env)
        vm.toggle_row(0, True)
        vm.toggle_row(1, True)

        vm.trigger_bulk_action("deactivate")
        vm.set_filter("is_active", False)

        assert {b.row["code"] for b in models[-1].rows} == {"en", "fr", "it", "nl", "sv", "ar"}
        # updated rows stay selected
        assert vm.selection == frozenset({1, 2})

    def test_bulk_activate_updates_rows(self, env: dict) -> None:
        vm, models = self._vm(env)
        vm.set_filter("is_active", False)
        vm.toggle_page_selection(True)

        vm.trigger_bulk_action("activate")

        assert models[-1].state is RenderState.EMPTY
        assert all(row["is_active"] for row in env["source"].rows)

    def test_bulk_failure_reports_error(self, env: dict) -> None:
        vm, models = self._vm(env)
        errors: list[str] = []
        requested: list[tuple] = []
        vm.error_occurred.connect(errors.append)
        vm.bulk_action_requested.connect(lambda value, ids: requested.append((value, ids)))
        vm.toggle_row(0, True)
        env["source"].delete(1)

        vm.trigger_bulk_action("delete")

        assert errors == ["Failed to delete languages: Row 1 not found"]
        assert requested == []
        assert models[-1].pagination.range_label == "1–10 of 13"

    def test_unknown_bulk_action_is_only_reported(self, env: dict) -> None:
        vm, _ = self._vm(env)
        source = MagicMock(wraps=env["source"])
        vm._data_source = source
        requested: list[tuple] = []
        vm.bulk_action_requested.connect(lambda value, ids: requested.append((value, ids)))
        vm.toggle_row(0, True)

        vm.trigger_bulk_action("export")

        assert requested == [("export", [1])]
        source.update.assert_not_called()
        source.delete.assert_not_called()

    def test_row_delete(self, env: dict) -> None:
        vm, models = self._vm(env)
        applied: list[tuple] = []
        vm.row_action_requested.connect(lambda value, target: applied.append((value, target)))
        vm.toggle_row(1, True)

        vm.run_row_action("delete", 1)

        assert applied == [("delete", 2)]
        assert vm.selection == frozenset()
        assert [b.row["code"] for b in models[-1].rows][:2] == ["en", "de"]

    def test_row_toggle_active(self, env: dict) -> None:
        vm, models = self._vm(env)

        vm.run_row_action("toggle_active", 4)
        assert models[-1].rows[4].row["is_active"] is True
        vm.run_row_action("toggle_active", 4)
        assert models[-1].rows[4].row["is_active"] is False

    def test_row_action_out_of_range_is_ignored(self, env: dict) -> None:
        vm, _ = self._vm(env)
        applied: list[tuple] = []
        vm.row_action_requested.connect(lambda value, target: applied.append((value, target)))

        vm.run_row_action("delete", 42)

        assert applied == []
        assert len(env["source"].rows) == 14

    def test_row_action_failure_reports_error(self, env: dict) -> None:
        source = MagicMock(wraps=env["source"])
        source.update.side_effect = DataSourceError("read-only")
        vm, _ = self._vm(env, data_source=source)
        errors: list[str] = []
        vm.error_occurred.connect(errors.append)

        vm.run_row_action("toggle_active", 0)

        assert errors == ["Failed to toggle_active languages: read-only"]
        assert env["source"].rows[0]["is_active"] is True

    def test_deleting_last_row_of_page_moves_back(self, env: dict) -> None:
        vm, models = self._vm(env)
        vm.next_page()
        vm.toggle_page_selection(True)

        vm.trigger_bulk_action("delete")

        assert vm.page == 1
        assert models[-1].pagination.range_label == "1–10 of 10"

    def test_row_click_activates_row(self, env: dict) -> None:
        vm, _ = self._vm(env)
        activated: list = []
        vm.row_activated.connect(activated.append)

        vm.click_row(1)

        assert activated[0]["code"] == "fr"

    def test_hover_rerenders(self, env: dict) -> None:
        vm, models = self._vm(env)
        vm.hover_row(2)
        assert models[-1].rows[2].hovered is True
        vm.hover_row(None)
        assert not any(row.hovered for row in models[-1].rows)

    def test_empty_result_offers_action(self, env: dict) -> None:
        vm, models = self._vm(env)
        requested: list[bool] = []
        vm.empty_action_requested.connect(lambda: requested.append(True))

        vm.type_search("zzz")
        vm.submit_search()

        assert models[-1].state is RenderState.EMPTY
        assert models[-1].empty_action.label == "Clear filters"
        vm.trigger_empty_action()
        assert requested == [True]

    def test_load_error_is_reported(self, env: dict) -> None:
        source = MagicMock()
        source.list.side_effect = DataSourceError("backend down")
        errors: list[str] = []

        from bo_gui.services.demo_catalog import languages_screen
        from bo_gui.viewmodels.list_screen_vm import ListScreenViewModel

        vm = ListScreenViewModel(
            languages_screen(),
            source,
            env["store"],
            env["bar"],
            scheduler=env["scheduler"],
        )
        vm.error_occurred.connect(errors.append)
        vm.load()

        assert errors == ["Failed to load languages: backend down"]
        assert vm.render().state is RenderState.EMPTY
        assert vm.is_loading is False

    def test_query_params_seed_initial_state(self, env: dict) -> None:
        env["bar"].replace({"page": "2", "limit": "5", "search": "e"})
        vm, _ = self._vm(env)
        assert (vm.page, vm.limit, vm.search) == (2, 5, "e")
        assert vm.current_page.page == 2

    def test_close_flushes_pending_params(self, env: dict) -> None:
        vm, _ = self._vm(env)
        vm.next_page()
        vm.type_search("late")

        vm.close()
        env["scheduler"].advance(1000)

        assert env["bar"].params() == {"page": "2"}
        assert vm.search == ""
