"""Toolbar above an admin table."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMenu,
    QPushButton,
    QToolButton,
    QWidget,
)

from bo_table.toolbar import ToolbarModel

from bo_gui.utils import clear_layout, set_widget_role


class TableToolbar(QWidget):
    """Search box, filter toggle, bulk-action buttons and column menu."""

    search_typed = Signal(str)
    search_submitted = Signal()
    filter_clicked = Signal()
    bulk_action_triggered = Signal(str)
    column_visibility_toggled = Signal(str, bool)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._model: ToolbarModel | None = None
        self._column_actions: dict[str, QAction] = {}
        self._column_layout: list[tuple[str, str]] = []

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self._search = QLineEdit()
        self._search.setClearButtonEnabled(True)
        self._search.textEdited.connect(self.search_typed.emit)
        self._search.returnPressed.connect(self.search_submitted.emit)
        layout.addWidget(self._search, 1)

        self._filter_btn = QPushButton("Filters")
        self._filter_btn.setCheckable(True)
        self._filter_btn.clicked.connect(lambda _checked=False: self.filter_clicked.emit())
        layout.addWidget(self._filter_btn)

        self._bulk_container = QWidget()
        self._bulk_layout = QHBoxLayout(self._bulk_container)
        self._bulk_layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._bulk_container)

        self._columns_btn = QToolButton()
        self._columns_btn.setText("Columns")
        self._columns_btn.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        self._columns_menu = QMenu(self._columns_btn)
        self._columns_btn.setMenu(self._columns_menu)
        layout.addWidget(self._columns_btn)

    @property
    def search_edit(self) -> QLineEdit:
        return self._search

    @property
    def columns_menu(self) -> QMenu:
        return self._columns_menu

    def set_model(self, model: ToolbarModel) -> None:
        self._model = model
        self.setVisible(not model.is_empty)

        search = model.search
        self._search.setVisible(search is not None)
        if search is not None:
            self._search.setPlaceholderText(search.placeholder)
            if self._search.text() != search.text:
                self._search.setText(search.text)

        toggle = model.filter_toggle
        self._filter_btn.setVisible(toggle is not None)
        if toggle is not None:
            self._filter_btn.setChecked(toggle.active)

        clear_layout(self._bulk_layout)
        menu = model.bulk_actions
        self._bulk_container.setVisible(menu is not None)
        if menu is not None:
            count = QLabel(f"{menu.selected_count} selected")
            set_widget_role(count, "muted")
            self._bulk_layout.addWidget(count)
            for action in menu.actions:
                button = QPushButton(action.label)
                set_widget_role(button, action.variant)
                button.clicked.connect(
                    lambda _checked=False, value=action.value: self.bulk_action_triggered.emit(value)
                )
                self._bulk_layout.addWidget(button)

        picker = model.column_picker or ()
        self._columns_btn.setVisible(model.column_picker is not None)
        layout_key = [(entry.column_id, entry.header) for entry in picker]
        if layout_key != self._column_layout:
            # Rebuild only when the column set changes; a toggled action must
            # outlive the re-render its own signal triggers.
            self._columns_menu.clear()
            self._column_actions = {}
            self._column_layout = layout_key
            for entry in picker:
                action = self._columns_menu.addAction(entry.header)
                action.setCheckable(True)
                action.toggled.connect(
                    lambda checked, column_id=entry.column_id: self.column_visibility_toggled.emit(
                        column_id, checked
                    )
                )
                self._column_actions[entry.column_id] = action
        for entry in picker:
            action = self._column_actions[entry.column_id]
            action.blockSignals(True)
            action.setChecked(entry.checked)
            action.blockSignals(False)
