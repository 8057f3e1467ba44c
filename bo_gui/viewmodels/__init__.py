"""ViewModels exposing Qt signals for views."""

from bo_gui.viewmodels.list_screen_vm import (
    FilterDefinition,
    ListScreenViewModel,
    ScreenDefinition,
)

__all__ = [
    "FilterDefinition",
    "ListScreenViewModel",
    "ScreenDefinition",
]
