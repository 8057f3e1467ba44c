"""Demo admin screens (languages, currencies) served from memory."""

from __future__ import annotations

from typing import Any

from bo_table.columns import Align, Column, ColumnType
from bo_table.datasource import InMemoryDataSource
from bo_table.toolbar import BulkAction

from bo_gui.viewmodels.list_screen_vm import (
    ACTION_ACTIVATE,
    ACTION_DEACTIVATE,
    ACTION_DELETE,
    ACTION_TOGGLE_ACTIVE,
    FilterDefinition,
    ScreenDefinition,
)

LANGUAGE_ROWS: list[dict[str, Any]] = [
    {"id": 1, "code": "en", "name": "English", "native_name": "English", "is_active": True, "updated_at": "2026-10-16T09:12:00Z"},
    {"id": 2, "code": "fr", "name": "French", "native_name": "Français", "is_active": True, "updated_at": "2026-10-14T15:40:00Z"},
    {"id": 3, "code": "de", "name": "German", "native_name": "Deutsch", "is_active": True, "updated_at": "2026-09-30T08:00:00Z"},
    {"id": 4, "code": "es", "name": "Spanish", "native_name": "Español", "is_active": True, "updated_at": "2026-10-17T07:55:00Z"},
    {"id": 5, "code": "it", "name": "Italian", "native_name": "Italiano", "is_active": False, "updated_at": "2026-08-21T11:30:00Z"},
    {"id": 6, "code": "pt", "name": "Portuguese", "native_name": "Português", "is_active": True, "updated_at": "2026-10-02T18:05:00Z"},
    {"id": 7, "code": "nl", "name": "Dutch", "native_name": "Nederlands", "is_active": False, "updated_at": "2026-07-11T10:20:00Z"},
    {"id": 8, "code": "pl", "name": "Polish", "native_name": "Polski", "is_active": True, "updated_at": "2026-10-10T12:00:00Z"},
    {"id": 9, "code": "sv", "name": "Swedish", "native_name": "Svenska", "is_active": False, "updated_at": "2026-06-03T09:45:00Z"},
    {"id": 10, "code": "ja", "name": "Japanese", "native_name": "日本語", "is_active": True, "updated_at": "2026-10-15T22:10:00Z"},
    {"id": 11, "code": "zh", "name": "Chinese", "native_name": "中文", "is_active": True, "updated_at": "2026-10-12T03:25:00Z"},
    {"id": 12, "code": "ar", "name": "Arabic", "native_name": "العربية", "is_active": False, "updated_at": "2026-05-19T14:00:00Z"},
    {"id": 13, "code": "tr", "name": "Turkish", "native_name": "Türkçe", "is_active": True, "updated_at": "2026-10-08T16:45:00Z"},
    {"id": 14, "code": "ko", "name": "Korean", "native_name": "한국어", "is_active": True, "updated_at": "2026-10-11T05:30:00Z"},
]

CURRENCY_ROWS: list[dict[str, Any]] = [
    {"id": 1, "code": "EUR", "name": "Euro", "symbol": "€", "decimal_places": 2, "is_active": True, "updated_at": "2026-10-16T10:00:00Z"},
    {"id": 2, "code": "USD", "name": "US Dollar", "symbol": "$", "decimal_places": 2, "is_active": True, "updated_at": "2026-10-17T06:00:00Z"},
    {"id": 3, "code": "GBP", "name": "Pound Sterling", "symbol": "£", "decimal_places": 2, "is_active": True, "updated_at": "2026-10-13T09:00:00Z"},
    {"id": 4, "code": "JPY", "name": "Yen", "symbol": "¥", "decimal_places": 0, "is_active": True, "updated_at": "2026-09-28T09:00:00Z"},
    {"id": 5, "code": "CHF", "name": "Swiss Franc", "symbol": "CHF", "decimal_places": 2, "is_active": False, "updated_at": "2026-08-01T09:00:00Z"},
    {"id": 6, "code": "KWD", "name": "Kuwaiti Dinar", "symbol": "د.ك", "decimal_places": 3, "is_active": False, "updated_at": "2026-04-14T09:00:00Z"},
    {"id": 7, "code": "SEK", "name": "Swedish Krona", "symbol": "kr", "decimal_places": 2, "is_active": True, "updated_at": "2026-10-09T09:00:00Z"},
]


_ROW_ACTIONS = (
    BulkAction(label="Activate / deactivate", value=ACTION_TOGGLE_ACTIVE),
    BulkAction(label="Delete", value=ACTION_DELETE, variant="danger"),
)


def _status_label(value: Any, row: Any, index: int) -> str:
    return "Active" if value else "Inactive"


def languages_screen() -> ScreenDefinition:
    return ScreenDefinition(
        title="Languages",
        table_id="languages-table",
        columns=(
            Column(header="Code", accessor="code", id="code", is_sortable=True, hideable=False, width="80px"),
            Column(header="Name", accessor="name", id="name", is_sortable=True, min_width="160px"),
            Column(header="Native name", accessor="native_name", id="native_name"),
            Column(header="Status", accessor="is_active", id="is_active", render=_status_label, is_sortable=True),
            Column(header="Updated", accessor="updated_at", id="updated_at", is_sortable=True, type=ColumnType.DATETIME),
        ),
        search_placeholder="Search languages...",
        empty_message="No languages found",
        empty_action_label="Clear filters",
        bulk_actions=(
            BulkAction(label="Activate", value=ACTION_ACTIVATE),
            BulkAction(label="Deactivate", value=ACTION_DEACTIVATE),
            BulkAction(label="Delete", value=ACTION_DELETE, variant="danger"),
        ),
        row_actions=_ROW_ACTIONS,
        filters=(FilterDefinition(name="is_active", label="Active"),),
        status_field="is_active",
    )


def currencies_screen() -> ScreenDefinition:
    return ScreenDefinition(
        title="Currencies",
        table_id="currencies-table",
        columns=(
            Column(header="Code", accessor="code", id="code", is_sortable=True, hideable=False, width="80px"),
            Column(header="Name", accessor="name", id="name", is_sortable=True),
            Column(header="Symbol", accessor="symbol", id="symbol", align=Align.CENTER),
            Column(
                header="Decimals",
                accessor="decimal_places",
                id="decimal_places",
                is_sortable=True,
                align=Align.RIGHT,
                type=ColumnType.NUMBER,
            ),
            Column(header="Status", accessor="is_active", id="is_active", render=_status_label),
            Column(header="Updated", accessor="updated_at", id="updated_at", is_sortable=True, type=ColumnType.DATETIME),
        ),
        search_placeholder="Search currencies...",
        empty_message="No currencies found",
        bulk_actions=(BulkAction(label="Delete", value=ACTION_DELETE, variant="danger"),),
        row_actions=_ROW_ACTIONS,
        filters=(
            FilterDefinition(name="is_active", label="Active"),
            FilterDefinition(name="symbol", label="Symbol", kind="text"),
        ),
        default_visible_columns=("code", "name", "symbol", "is_active"),
        status_field="is_active",
    )


class DemoCatalog:
    """Screen definitions paired with their in-memory data sources."""

    def __init__(self) -> None:
        self._screens: dict[str, tuple[ScreenDefinition, InMemoryDataSource]] = {
            "languages": (
                languages_screen(),
                InMemoryDataSource(LANGUAGE_ROWS, search_fields=("code", "name", "native_name")),
            ),
            "currencies": (
                currencies_screen(),
                InMemoryDataSource(CURRENCY_ROWS, search_fields=("code", "name")),
            ),
        }

    def keys(self) -> list[str]:
        return list(self._screens)

    def definition(self, key: str) -> ScreenDefinition:
        return self._screens[key][0]

    def data_source(self, key: str) -> InMemoryDataSource:
        return self._screens[key][1]
