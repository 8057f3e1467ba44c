"""Grid widget rendering a TableRenderModel."""

from __future__ import annotations

from PySide6.QtCore import QEvent, QObject, QPoint, Qt, Signal
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from bo_table.cells import CellResult
from bo_table.renderer import BodyRow, RenderState, TableRenderModel
from bo_table.selection import HeaderCheckState
from bo_table.sorting import SortDirection

from bo_gui.utils import css_length_to_px, qt_alignment, set_widget_role

_SORT_ARROWS = {SortDirection.ASC: " ▲", SortDirection.DESC: " ▼"}
_SKELETON_TEXT = "░░░░░░"
_ERROR_COLOR = QColor("#c0392b")
_HOVER_COLOR = QColor(0, 0, 0, 18)


def header_checkbox_label(state: HeaderCheckState | None) -> str:
    if state is None:
        return ""
    if state.checked:
        return "☑"
    if state.indeterminate:
        return "▣"
    return "☐"


class DataTableWidget(QWidget):
    """Renders loading, empty and populated states of an admin table.

    The widget owns no table state: it draws the model it is given and
    reports user interactions through signals.
    """

    header_clicked = Signal(str)  # column id
    header_checkbox_toggled = Signal(bool)
    row_clicked = Signal(int)
    row_hovered = Signal(object)  # row index or None
    row_checkbox_toggled = Signal(int, bool)
    empty_action_clicked = Signal()
    row_menu_requested = Signal(int, object)  # row index, global position

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._model: TableRenderModel | None = None
        self._column_ids: list[str] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self._grid = QTableWidget()
        self._grid.setObjectName("dataTable")
        self._grid.verticalHeader().setVisible(False)
        self._grid.horizontalHeader().setStretchLastSection(True)
        self._grid.horizontalHeader().setSectionsClickable(True)
        self._grid.setAlternatingRowColors(True)
        self._grid.setShowGrid(False)
        self._grid.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._grid.setSelectionMode(QTableWidget.SelectionMode.NoSelection)
        self._grid.setMouseTracking(True)
        self._grid.viewport().installEventFilter(self)
        self._grid.cellClicked.connect(self._on_cell_clicked)
        self._grid.cellEntered.connect(self._on_cell_entered)
        self._grid.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self._grid.customContextMenuRequested.connect(self._on_context_menu)
        self._grid.horizontalHeader().sectionClicked.connect(self._on_section_clicked)
        layout.addWidget(self._grid, 1)

        self._empty_panel = QWidget()
        empty_layout = QVBoxLayout(self._empty_panel)
        empty_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label = QLabel()
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        set_widget_role(self._empty_label, "muted")
        empty_layout.addWidget(self._empty_label)
        action_row = QHBoxLayout()
        action_row.addStretch()
        self._empty_button = QPushButton()
        self._empty_button.clicked.connect(self.empty_action_clicked.emit)
        action_row.addWidget(self._empty_button)
        action_row.addStretch()
        empty_layout.addLayout(action_row)
        self._empty_panel.hide()
        layout.addWidget(self._empty_panel)

    @property
    def grid(self) -> QTableWidget:
        return self._grid

    @property
    def model(self) -> TableRenderModel | None:
        return self._model

    @property
    def column_ids(self) -> list[str]:
        return list(self._column_ids)

    def set_model(self, model: TableRenderModel) -> None:
        """Redraw the grid for ``model``."""
        self._model = model
        self._grid.blockSignals(True)
        try:
            self._setup_headers(model)
            if model.state is RenderState.LOADING:
                self._render_skeleton(model)
            elif model.state is RenderState.EMPTY:
                self._grid.setRowCount(0)
            else:
                self._render_rows(model)
        finally:
            self._grid.blockSignals(False)

        is_empty = model.state is RenderState.EMPTY
        self._empty_panel.setVisible(is_empty)
        if is_empty:
            self._empty_label.setText(model.empty_message or "")
            action = model.empty_action
            self._empty_button.setVisible(action is not None)
            if action is not None:
                self._empty_button.setText(action.label)

    def _offset(self) -> int:
        return 1 if self._model is not None and self._model.selection_enabled else 0

    def _setup_headers(self, model: TableRenderModel) -> None:
        labels: list[str] = []
        if model.selection_enabled:
            labels.append(header_checkbox_label(model.header_check))
        for header in model.headers:
            arrow = _SORT_ARROWS.get(header.sort_direction, "")
            labels.append(f"{header.header}{arrow}")
        self._column_ids = [header.column_id for header in model.headers]

        self._grid.setColumnCount(len(labels))
        self._grid.setHorizontalHeaderLabels(labels)
        header_view = self._grid.horizontalHeader()
        if model.selection_enabled:
            header_view.setSectionResizeMode(0, QHeaderView.ResizeMode.Fixed)
            self._grid.setColumnWidth(0, 36)
        offset = self._offset()
        for position, header in enumerate(model.headers):
            width = css_length_to_px(header.width) or css_length_to_px(header.min_width)
            if width is not None:
                self._grid.setColumnWidth(position + offset, width)
            item = self._grid.horizontalHeaderItem(position + offset)
            if item is not None:
                item.setTextAlignment(qt_alignment(header.align))
                if header.sortable:
                    item.setToolTip("Click to sort")

    def _render_skeleton(self, model: TableRenderModel) -> None:
        shape = model.skeleton
        rows = shape.rows if shape is not None else 0
        self._grid.setRowCount(rows)
        for row in range(rows):
            for col in range(self._grid.columnCount()):
                item = QTableWidgetItem(_SKELETON_TEXT)
                item.setFlags(Qt.ItemFlag.NoItemFlags)
                item.setForeground(QBrush(QColor(0, 0, 0, 40)))
                self._grid.setItem(row, col, item)

    def _render_rows(self, model: TableRenderModel) -> None:
        self._grid.setRowCount(len(model.rows))
        offset = self._offset()
        for body_row in model.rows:
            if model.selection_enabled:
                self._grid.setItem(body_row.index, 0, self._checkbox_item(body_row))
            for position, cell in enumerate(body_row.cells):
                column = position + offset
                self._grid.removeCellWidget(body_row.index, column)
                if isinstance(cell.value, QWidget):
                    self._grid.setCellWidget(body_row.index, column, cell.value)
                    continue
                self._grid.setItem(
                    body_row.index,
                    column,
                    self._cell_item(cell, body_row, model.headers[position].align),
                )

    def _checkbox_item(self, body_row: BodyRow) -> QTableWidgetItem:
        item = QTableWidgetItem()
        if body_row.selectable:
            item.setFlags(Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsUserCheckable)
            state = Qt.CheckState.Checked if body_row.selected else Qt.CheckState.Unchecked
            item.setCheckState(state)
        else:
            item.setFlags(Qt.ItemFlag.NoItemFlags)
        return item

    def _cell_item(self, cell: CellResult, body_row: BodyRow, align: object) -> QTableWidgetItem:
        item = QTableWidgetItem(cell.text)
        item.setTextAlignment(qt_alignment(align))  # type: ignore[arg-type]
        tooltip = cell.tooltip
        attributes = body_row.attributes
        if attributes is not None and attributes.tooltip:
            tooltip = attributes.tooltip
        if tooltip:
            item.setToolTip(tooltip)
        if not cell.ok:
            item.setForeground(QBrush(_ERROR_COLOR))
        if body_row.hovered:
            item.setBackground(QBrush(_HOVER_COLOR))
        return item

    def _column_id_at(self, section: int) -> str | None:
        index = section - self._offset()
        if 0 <= index < len(self._column_ids):
            return self._column_ids[index]
        return None

    def _on_section_clicked(self, section: int) -> None:
        model = self._model
        if model is None:
            return
        if model.selection_enabled and section == 0:
            state = model.header_check
            self.header_checkbox_toggled.emit(not (state is not None and state.checked))
            return
        column_id = self._column_id_at(section)
        if column_id is not None:
            self.header_clicked.emit(column_id)

    def _on_cell_clicked(self, row: int, column: int) -> None:
        model = self._model
        if model is None or model.state is not RenderState.POPULATED:
            return
        if model.selection_enabled and column == 0:
            if 0 <= row < len(model.rows) and model.rows[row].selectable:
                self.row_checkbox_toggled.emit(row, not model.rows[row].selected)
            return
        self.row_clicked.emit(row)

    def _on_cell_entered(self, row: int, column: int) -> None:
        model = self._model
        if model is None or model.state is not RenderState.POPULATED:
            return
        if 0 <= row < len(model.rows) and not model.rows[row].hovered:
            self.row_hovered.emit(row)

    def _on_context_menu(self, pos: QPoint) -> None:
        model = self._model
        if model is None or model.state is not RenderState.POPULATED:
            return
        row = self._grid.rowAt(pos.y())
        if 0 <= row < len(model.rows):
            self.row_menu_requested.emit(row, self._grid.viewport().mapToGlobal(pos))

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if watched is self._grid.viewport() and event.type() == QEvent.Type.Leave:
            self.row_hovered.emit(None)
        return super().eventFilter(watched, event)
