"""Top-level application windows."""

from bo_gui.windows.main_window import MainWindow

__all__ = ["MainWindow"]
