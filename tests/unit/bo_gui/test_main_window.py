"""Unit tests for MainWindow and the service container."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from bo_table.preferences import InMemoryPreferenceStore
from bo_table.query_params import InMemoryAddressBar
from bo_table.settings import TableSettings

pytestmark = pytest.mark.unit_gui


def _services(floating_action: str | None = None) -> MagicMock:
    from bo_gui.services import DemoCatalog

    bars: dict[str, InMemoryAddressBar] = {}
    services = MagicMock()
    services.settings = TableSettings(floating_action=floating_action)
    services.preference_store = InMemoryPreferenceStore()
    services.catalog = DemoCatalog()
    services.address_bar.side_effect = lambda key: bars.setdefault(key, InMemoryAddressBar())
    return services


class TestMainWindow:
    def test_sections_built_from_catalog(self, qapp) -> None:
        from bo_gui.windows import MainWindow

        window = MainWindow(_services())

        assert window._sidebar.count() == 2
        assert window._sidebar.item(0).text() == "Languages"
        assert window.get_view("currencies") is not None
        assert window.get_viewmodel("missing") is None
        assert window.floating_action_button is None

    def test_select_section_switches_stack(self, qapp) -> None:
        from bo_gui.windows import MainWindow

        window = MainWindow(_services())
        window.select_section("currencies")

        assert window._stack.currentWidget() is window.get_view("currencies")

    def test_each_screen_loads_its_rows(self, qapp) -> None:
        from bo_gui.windows import MainWindow

        window = MainWindow(_services())
        assert window.get_viewmodel("languages").current_page.total == 14
        assert window.get_viewmodel("currencies").current_page.total == 7

    def test_floating_action_button(self, qapp) -> None:
        from bo_gui.windows import MainWindow

        raw = json.dumps({"label": "Help", "url": "https://example.org/help", "position": "bottom-left"})
        window = MainWindow(_services(raw))

        fab = window.floating_action_button
        assert fab is not None
        assert fab.text() == "Help"
        with patch("bo_gui.windows.main_window.QDesktopServices") as desktop:
            fab.click()
        desktop.openUrl.assert_called_once()
        assert desktop.openUrl.call_args.args[0].toString() == "https://example.org/help"

    def test_malformed_floating_action_is_ignored(self, qapp) -> None:
        from bo_gui.windows import MainWindow

        window = MainWindow(_services("{not json"))
        assert window.floating_action_button is None

    def test_close_flushes_viewmodels(self, qapp) -> None:
        from PySide6.QtGui import QCloseEvent

        from bo_gui.windows import MainWindow

        services = _services()
        window = MainWindow(services)
        window.get_viewmodel("languages").next_page()

        window.closeEvent(QCloseEvent())

        assert services.address_bar("languages").params() == {"page": "2"}


class TestServiceContainer:
    def test_settings_loaded_lazily(self, qapp, tmp_path, monkeypatch) -> None:
        from bo_gui.app import ServiceContainer

        monkeypatch.delenv("BO_TABLE_CONFIG", raising=False)
        monkeypatch.delenv("BO_DEFAULT_PAGE_SIZE", raising=False)
        config = tmp_path / "bo.yaml"
        config.write_text("default_page_size: 20\n", encoding="utf-8")

        services = ServiceContainer(config)

        assert services.settings.default_page_size == 20
        assert services.settings is services.settings

    def test_address_bars_are_per_screen(self) -> None:
        from bo_gui.app import ServiceContainer

        services = ServiceContainer()
        assert services.address_bar("languages") is services.address_bar("languages")
        assert services.address_bar("languages") is not services.address_bar("currencies")
