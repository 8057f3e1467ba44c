"""Main application window with sidebar navigation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import (
    QHBoxLayout,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QWidget,
)

from bo_table.serialized import FloatingAction, parse_floating_action

from bo_gui.utils import set_widget_role

if TYPE_CHECKING:
    from bo_gui.app import ServiceContainer
    from bo_gui.viewmodels.list_screen_vm import ListScreenViewModel

logger = logging.getLogger(__name__)

_FAB_MARGIN = 24


class MainWindow(QMainWindow):
    """Main application window with sidebar navigation."""

    def __init__(self, services: "ServiceContainer", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.services = services
        self._views: dict[str, QWidget] = {}
        self._viewmodels: dict[str, "ListScreenViewModel"] = {}
        self._sections: list[str] = []
        self._floating_action: FloatingAction | None = None
        self._fab: QPushButton | None = None

        self._setup_ui()
        self._setup_views()
        self._setup_floating_action()
        self._connect_signals()

    def _setup_ui(self) -> None:
        """Set up the main UI layout."""
        self.setWindowTitle("Back Office")
        self.setMinimumSize(1100, 720)

        central = QWidget()
        central.setObjectName("mainRoot")
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self._sidebar = QListWidget()
        self._sidebar.setObjectName("sidebar")
        self._sidebar.setFixedWidth(180)
        self._sidebar.setSpacing(2)

        self._stack = QStackedWidget()

        main_layout.addWidget(self._sidebar)
        main_layout.addWidget(self._stack, 1)

    def _setup_views(self) -> None:
        """Create a list screen per catalog entry."""
        from bo_gui.viewmodels import ListScreenViewModel
        from bo_gui.views import ListScreenView

        catalog = self.services.catalog
        for key in catalog.keys():
            definition = catalog.definition(key)
            vm = ListScreenViewModel(
                definition,
                catalog.data_source(key),
                self.services.preference_store,
                self.services.address_bar(key),
                settings=self.services.settings,
                parent=self,
            )
            view = ListScreenView(vm)
            self._viewmodels[key] = vm
            self._views[key] = view
            self._sections.append(key)
            self._sidebar.addItem(QListWidgetItem(definition.title))
            self._stack.addWidget(view)

        if self._sections:
            self._sidebar.setCurrentRow(0)

    def _setup_floating_action(self) -> None:
        """Show the configured floating action button, if any."""
        self._floating_action = parse_floating_action(self.services.settings.floating_action)
        if self._floating_action is None:
            return
        fab = QPushButton(self._floating_action.label, self.centralWidget())
        fab.setObjectName("floatingAction")
        set_widget_role(fab, "primary")
        fab.setCursor(Qt.CursorShape.PointingHandCursor)
        fab.clicked.connect(self._on_floating_action)
        fab.adjustSize()
        fab.raise_()
        self._fab = fab
        self._place_floating_action()

    def _place_floating_action(self) -> None:
        if self._fab is None or self._floating_action is None:
            return
        area = self.centralWidget().rect()
        y = area.height() - self._fab.height() - _FAB_MARGIN
        if self._floating_action.position == "bottom-left":
            x = self._sidebar.width() + _FAB_MARGIN
        else:
            x = area.width() - self._fab.width() - _FAB_MARGIN
        self._fab.move(max(x, 0), max(y, 0))

    def _on_floating_action(self) -> None:
        action = self._floating_action
        if action is None or not action.url:
            return
        logger.info("Opening floating action target %s", action.url)
        QDesktopServices.openUrl(QUrl(action.url))

    @property
    def floating_action_button(self) -> QPushButton | None:
        return self._fab

    def resizeEvent(self, event: object) -> None:  # noqa: N802
        super().resizeEvent(event)  # type: ignore[arg-type]
        self._place_floating_action()

    def closeEvent(self, event: object) -> None:  # noqa: N802
        """Flush pending address-bar writes before closing."""
        for vm in self._viewmodels.values():
            vm.close()
        event.accept()  # type: ignore[attr-defined]

    def _connect_signals(self) -> None:
        """Connect UI signals."""
        self._sidebar.currentRowChanged.connect(self._on_section_changed)

    def _on_section_changed(self, row: int) -> None:
        """Handle sidebar selection change."""
        if 0 <= row < len(self._sections):
            self._stack.setCurrentIndex(row)

    def get_view(self, key: str) -> QWidget | None:
        """Get a view by its key."""
        return self._views.get(key)

    def get_viewmodel(self, key: str) -> "ListScreenViewModel | None":
        """Get a viewmodel by its key."""
        return self._viewmodels.get(key)

    def select_section(self, key: str) -> None:
        """Programmatically select a section by key."""
        if key in self._sections:
            self._sidebar.setCurrentRow(self._sections.index(key))
