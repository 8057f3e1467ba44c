from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TableModel:
    title: str
    columns: list[str]
    rows: list[list[str]]
