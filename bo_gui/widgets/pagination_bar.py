"""Pagination strip widget."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QComboBox, QHBoxLayout, QLabel, QPushButton, QWidget

from bo_table.pagination import PaginationStrip

from bo_gui.utils import clear_layout, set_widget_role


class PaginationBar(QWidget):
    """Previous/next buttons, page window, range label and page-size combo."""

    page_requested = Signal(int)
    previous_requested = Signal()
    next_requested = Signal()
    page_size_changed = Signal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._strip: PaginationStrip | None = None

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self._range_label = QLabel()
        set_widget_role(self._range_label, "muted")
        layout.addWidget(self._range_label)
        layout.addStretch()

        self._size_label = QLabel("Rows per page:")
        layout.addWidget(self._size_label)
        self._size_combo = QComboBox()
        self._size_combo.activated.connect(self._on_size_activated)
        layout.addWidget(self._size_combo)

        self._prev_btn = QPushButton("‹ Previous")
        self._prev_btn.clicked.connect(self.previous_requested.emit)
        layout.addWidget(self._prev_btn)

        self._pages_layout = QHBoxLayout()
        self._pages_layout.setSpacing(2)
        layout.addLayout(self._pages_layout)

        self._next_btn = QPushButton("Next ›")
        self._next_btn.clicked.connect(self.next_requested.emit)
        layout.addWidget(self._next_btn)

        self.hide()

    @property
    def strip(self) -> PaginationStrip | None:
        return self._strip

    def page_button_labels(self) -> list[str]:
        labels: list[str] = []
        for index in range(self._pages_layout.count()):
            widget = self._pages_layout.itemAt(index).widget()
            if widget is not None:
                labels.append(widget.text())  # type: ignore[attr-defined]
        return labels

    def set_strip(self, strip: PaginationStrip | None) -> None:
        self._strip = strip
        if strip is None:
            self.hide()
            return
        self.show()

        self._range_label.setText(f"Showing {strip.range_label}" if strip.range_label else "")
        self._prev_btn.setEnabled(strip.has_previous)
        self._next_btn.setEnabled(strip.has_next)

        clear_layout(self._pages_layout)
        for item in strip.window:
            if isinstance(item, int):
                button = QPushButton(str(item))
                button.setCheckable(True)
                button.setChecked(item == strip.current_page)
                button.clicked.connect(lambda _checked=False, page=item: self.page_requested.emit(page))
                self._pages_layout.addWidget(button)
            else:
                self._pages_layout.addWidget(QLabel(item))

        has_sizes = strip.page_size_options is not None
        self._size_label.setVisible(has_sizes)
        self._size_combo.setVisible(has_sizes)
        if has_sizes:
            self._size_combo.blockSignals(True)
            self._size_combo.clear()
            for size in strip.page_size_options or ():
                self._size_combo.addItem(str(size), size)
            if strip.items_per_page is not None:
                self._size_combo.setCurrentIndex(self._size_combo.findData(strip.items_per_page))
            self._size_combo.blockSignals(False)

    def _on_size_activated(self, index: int) -> None:
        size = self._size_combo.itemData(index)
        if isinstance(size, int):
            self.page_size_changed.emit(size)
