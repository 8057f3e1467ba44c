import pytest

from tests.helpers.optional_imports import module_available

pytestmark = pytest.mark.unit_gui


def test_bo_gui_dependency_availability() -> None:
    if not module_available("PySide6") or not module_available("bo_gui.viewmodels"):
        pytest.skip("bo_gui dependencies missing")
    assert module_available("bo_gui.widgets") is True
