from __future__ import annotations

import re
from pathlib import Path

import pytest

pytestmark = pytest.mark.unit_common

REPO_ROOT = Path(__file__).resolve().parents[3]

# The engine and shared packages stay free of any front end
HEADLESS_PACKAGES = ("bo_common", "bo_table")
FORBIDDEN = ("PySide6", "bo_gui", "bo_ui", "typer", "rich")

SKIP_DIRS = {"__pycache__"}

IMPORT_RE = re.compile(r"^\s*(?:from|import)\s+([A-Za-z_][\w]*)", re.MULTILINE)


def iter_py_files(package: str):
    for path in (REPO_ROOT / package).rglob("*.py"):
        if any(part in SKIP_DIRS for part in path.parts):
            continue
        yield path


@pytest.mark.parametrize("package", HEADLESS_PACKAGES)
def test_headless_packages_do_not_import_front_ends(package: str) -> None:
    violations: list[str] = []
    for path in iter_py_files(package):
        text = path.read_text(encoding="utf-8", errors="ignore")
        for match in IMPORT_RE.finditer(text):
            if match.group(1) in FORBIDDEN:
                violations.append(f"{path.relative_to(REPO_ROOT)}: imports {match.group(1)}")
    if violations:
        pytest.fail("Headless packages must not import front ends:\n" + "\n".join(sorted(violations)))
