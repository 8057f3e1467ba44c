"""Pytest configuration for bo_gui tests."""

import os
import sys
from pathlib import Path

import pytest

from tests.helpers.optional_imports import module_available

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

HAS_PYSIDE6 = module_available("PySide6")
HAS_BO_GUI = module_available("bo_gui.viewmodels")

# Skip collection of test files if GUI deps are missing.
if not HAS_PYSIDE6 or not HAS_BO_GUI:
    collect_ignore = [
        path.name
        for path in Path(__file__).parent.glob("test_*.py")
        if path.name != "test_dependencies.py"
    ]


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    return app
