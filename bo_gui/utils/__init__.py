"""Qt utilities and helpers."""

from bo_gui.utils.qt import clear_layout, css_length_to_px, qt_alignment, set_widget_role

__all__ = [
    "clear_layout",
    "css_length_to_px",
    "qt_alignment",
    "set_widget_role",
]
