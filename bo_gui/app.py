"""Application setup and global services."""

from __future__ import annotations

from pathlib import Path

from bo_table.preferences import PreferenceStore
from bo_table.query_params import InMemoryAddressBar
from bo_table.settings import TableSettings, load_settings

from bo_gui.adapters.qsettings_store import QSettingsPreferenceStore
from bo_gui.services.demo_catalog import DemoCatalog
from bo_gui.windows.main_window import MainWindow


class ServiceContainer:
    """Container for all GUI services (dependency injection)."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path
        self._settings: TableSettings | None = None
        self._preference_store: PreferenceStore | None = None
        self._catalog: DemoCatalog | None = None
        self._address_bars: dict[str, InMemoryAddressBar] = {}

    @property
    def settings(self) -> TableSettings:
        if self._settings is None:
            self._settings = load_settings(self._config_path)
        return self._settings

    @property
    def preference_store(self) -> PreferenceStore:
        if self._preference_store is None:
            self._preference_store = QSettingsPreferenceStore()
        return self._preference_store

    @property
    def catalog(self) -> DemoCatalog:
        if self._catalog is None:
            self._catalog = DemoCatalog()
        return self._catalog

    def address_bar(self, key: str) -> InMemoryAddressBar:
        """Per-screen query parameters, kept for the lifetime of the app."""
        if key not in self._address_bars:
            self._address_bars[key] = InMemoryAddressBar()
        return self._address_bars[key]


def create_app(config_path: Path | None = None) -> MainWindow:
    """Create and wire up the main application window."""
    services = ServiceContainer(config_path)
    window = MainWindow(services)
    return window
