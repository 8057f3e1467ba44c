"""Data services backing the GUI screens."""

from bo_gui.services.demo_catalog import DemoCatalog, currencies_screen, languages_screen

__all__ = [
    "DemoCatalog",
    "currencies_screen",
    "languages_screen",
]
