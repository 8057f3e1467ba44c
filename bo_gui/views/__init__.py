"""GUI views (Qt widgets for each section)."""

from bo_gui.views.list_screen_view import ListScreenView

__all__ = [
    "ListScreenView",
]
