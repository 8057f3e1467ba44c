"""Generic list screen: toolbar, filter panel, table and pagination."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMenu,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from bo_gui.utils import set_widget_role
from bo_gui.widgets import DataTableWidget, PaginationBar, TableToolbar

if TYPE_CHECKING:
    from bo_gui.viewmodels.list_screen_vm import FilterDefinition, ListScreenViewModel
    from bo_table.renderer import TableRenderModel

_BOOLEAN_CHOICES: list[tuple[str, Any]] = [("Any", None), ("Yes", True), ("No", False)]


def _action_label(value: str, actions: tuple) -> str:
    return next((action.label for action in actions if action.value == value), value)


class ListScreenView(QWidget):
    """View binding a ListScreenViewModel to the table widgets."""

    def __init__(
        self,
        viewmodel: "ListScreenViewModel",
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._vm = viewmodel
        self._filter_inputs: dict[str, QWidget] = {}

        self._setup_ui()
        self._connect_signals()
        self._initial_load()

    @property
    def viewmodel(self) -> "ListScreenViewModel":
        return self._vm

    @property
    def table(self) -> DataTableWidget:
        return self._table

    @property
    def toolbar(self) -> TableToolbar:
        return self._toolbar

    @property
    def pagination(self) -> PaginationBar:
        return self._pagination

    @property
    def filter_panel(self) -> QGroupBox:
        return self._filter_panel

    @property
    def status_text(self) -> str:
        return self._status.text()

    def _initial_load(self) -> None:
        """Load the first page on first render."""
        self._vm.load()

    def _setup_ui(self) -> None:
        """Set up the UI layout."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        title = QLabel(self._vm.definition.title)
        title.setProperty("role", "title")
        layout.addWidget(title)

        self._toolbar = TableToolbar()
        layout.addWidget(self._toolbar)

        self._filter_panel = QGroupBox("Filters")
        filter_layout = QFormLayout(self._filter_panel)
        for flt in self._vm.definition.filters:
            widget = self._build_filter_input(flt)
            self._filter_inputs[flt.name] = widget
            filter_layout.addRow(f"{flt.label}:", widget)
        clear_btn = QPushButton("Clear filters")
        clear_btn.clicked.connect(self._vm.clear_filters)
        filter_layout.addRow(clear_btn)
        self._filter_panel.setVisible(False)
        layout.addWidget(self._filter_panel)

        self._table = DataTableWidget()
        layout.addWidget(self._table, 1)

        footer = QHBoxLayout()
        self._status = QLabel("")
        set_widget_role(self._status, "muted")
        footer.addWidget(self._status)
        footer.addStretch()
        layout.addLayout(footer)

        self._pagination = PaginationBar()
        layout.addWidget(self._pagination)

    def _build_filter_input(self, flt: "FilterDefinition") -> QWidget:
        if flt.kind == "boolean":
            combo = QComboBox()
            for label, value in _BOOLEAN_CHOICES:
                combo.addItem(label, value)
            combo.activated.connect(
                lambda index, name=flt.name, box=combo: self._vm.set_filter(name, box.itemData(index))
            )
            return combo
        edit = QLineEdit()
        edit.setPlaceholderText(flt.label)
        edit.editingFinished.connect(
            lambda name=flt.name, line=edit: self._vm.set_filter(name, line.text())
        )
        return edit

    def _connect_signals(self) -> None:
        """Connect widget and viewmodel signals."""
        # Widgets -> viewmodel
        self._toolbar.search_typed.connect(self._vm.type_search)
        self._toolbar.search_submitted.connect(self._vm.submit_search)
        self._toolbar.filter_clicked.connect(self._vm.toggle_filters)
        self._toolbar.bulk_action_triggered.connect(self._vm.trigger_bulk_action)
        self._toolbar.column_visibility_toggled.connect(self._vm.set_column_visible)

        self._table.header_clicked.connect(self._vm.click_header)
        self._table.header_checkbox_toggled.connect(self._vm.toggle_page_selection)
        self._table.row_clicked.connect(self._vm.click_row)
        self._table.row_hovered.connect(self._vm.hover_row)
        self._table.row_checkbox_toggled.connect(self._vm.toggle_row)
        self._table.empty_action_clicked.connect(self._vm.trigger_empty_action)
        self._table.row_menu_requested.connect(self._show_row_menu)

        self._pagination.page_requested.connect(self._vm.go_to_page)
        self._pagination.previous_requested.connect(self._vm.previous_page)
        self._pagination.next_requested.connect(self._vm.next_page)
        self._pagination.page_size_changed.connect(self._vm.change_page_size)

        # Viewmodel -> widgets
        self._vm.model_changed.connect(self._on_model_changed)
        self._vm.error_occurred.connect(self._on_error)
        self._vm.filters_visibility_changed.connect(self._filter_panel.setVisible)
        self._vm.bulk_action_requested.connect(self._on_bulk_action)
        self._vm.row_action_requested.connect(self._on_row_action)
        self._vm.row_activated.connect(self._on_row_activated)
        self._vm.empty_action_requested.connect(self._on_empty_action)

    def _on_model_changed(self, model: "TableRenderModel") -> None:
        self._toolbar.set_model(model.toolbar)
        self._table.set_model(model)
        self._pagination.set_strip(model.pagination)
        self._sync_filter_inputs()
        count = self._vm.active_filter_count
        self._status.setText(f"{count} active filter(s)" if count else "")

    def _sync_filter_inputs(self) -> None:
        values = self._vm.filters
        for name, widget in self._filter_inputs.items():
            value = values.get(name)
            if isinstance(widget, QComboBox):
                index = widget.findData(value)
                widget.setCurrentIndex(max(index, 0))
            elif isinstance(widget, QLineEdit) and not widget.hasFocus():
                widget.setText(value or "")

    def _on_error(self, message: str) -> None:
        self._status.setText(message)
        QMessageBox.warning(self, "Error", message)

    def build_row_menu(self, index: int) -> QMenu | None:
        """Context menu with the screen's row actions for the row at ``index``."""
        actions = self._vm.definition.row_actions
        if not actions:
            return None
        menu = QMenu(self)
        for action in actions:
            item = menu.addAction(action.label)
            item.setData(action.value)
            item.triggered.connect(
                lambda checked=False, value=action.value: self._vm.run_row_action(value, index)
            )
        return menu

    def _show_row_menu(self, index: int, pos: Any) -> None:
        menu = self.build_row_menu(index)
        if menu is not None:
            menu.exec(pos)
            menu.deleteLater()

    def _on_bulk_action(self, value: str, ids: list) -> None:
        label = _action_label(value, self._vm.definition.bulk_actions)
        self._status.setText(f"{label} applied to {len(ids)} item(s)")

    def _on_row_action(self, value: str, target: Any) -> None:
        label = _action_label(value, self._vm.definition.row_actions)
        self._status.setText(f"{label} applied to row {target}")

    def _on_row_activated(self, row: Any) -> None:
        self._status.setText(f"Opened {row!r}")

    def _on_empty_action(self) -> None:
        self._vm.clear_filters()
