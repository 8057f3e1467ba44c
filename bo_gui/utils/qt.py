"""Qt helper utilities."""

from __future__ import annotations

import re

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLayout, QWidget

from bo_table.columns import Align

_PX_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(px)?\s*$")


def clear_layout(layout: QLayout) -> None:
    """Remove all items from a layout.

    Widgets are deleted on the next event-loop pass so a button may clear the
    layout it lives in from its own ``clicked`` handler.
    """
    while layout.count():
        item = layout.takeAt(0)
        widget = item.widget()
        if widget is not None:
            widget.hide()
            widget.deleteLater()


def set_widget_role(widget: QWidget, role: str | None) -> None:
    """Set a role dynamic property and refresh style."""
    widget.setProperty("role", role)
    widget.style().unpolish(widget)
    widget.style().polish(widget)


def css_length_to_px(value: str | None) -> int | None:
    """Convert "80px" / "80" to pixels; other units are not supported."""
    if not value:
        return None
    match = _PX_RE.match(value)
    if match is None:
        return None
    return int(float(match.group(1)))


def qt_alignment(align: Align) -> Qt.AlignmentFlag:
    horizontal = {
        Align.LEFT: Qt.AlignmentFlag.AlignLeft,
        Align.CENTER: Qt.AlignmentFlag.AlignHCenter,
        Align.RIGHT: Qt.AlignmentFlag.AlignRight,
    }[align]
    return horizontal | Qt.AlignmentFlag.AlignVCenter
