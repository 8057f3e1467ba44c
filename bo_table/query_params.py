"""Mirroring list-screen state into address-bar query parameters."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Protocol

from bo_table.scheduling import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

DEFAULT_QUERY_DEBOUNCE_MS = 100
PAGINATION_KEYS = frozenset({"page", "limit"})


class AddressBar(Protocol):
    """The location whose query string mirrors screen state."""

    def params(self) -> dict[str, str]: ...

    def replace(self, params: Mapping[str, str]) -> None: ...


class InMemoryAddressBar:
    """Address bar with a history stack; ``replace`` rewrites the top entry."""

    def __init__(self, params: Mapping[str, str] | None = None) -> None:
        self._history: list[dict[str, str]] = [dict(params or {})]
        self._listeners: list[Callable[[dict[str, str]], None]] = []

    @property
    def history(self) -> list[dict[str, str]]:
        return [dict(entry) for entry in self._history]

    def params(self) -> dict[str, str]:
        return dict(self._history[-1])

    def push(self, params: Mapping[str, str]) -> None:
        self._history.append(dict(params))
        self._notify()

    def replace(self, params: Mapping[str, str]) -> None:
        self._history[-1] = dict(params)
        self._notify()

    def subscribe(self, listener: Callable[[dict[str, str]], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        current = self.params()
        for listener in list(self._listeners):
            listener(current)


def serialize_param(value: Any) -> str | None:
    """Query-string form of ``value``; None and "" mean "remove the key"."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    return text if text != "" else None


def parse_page_param(raw: str | None) -> int:
    try:
        page = int(raw) if raw is not None else 1
    except ValueError:
        return 1
    return page if page >= 1 else 1


def parse_number_param(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def parse_boolean_param(raw: str | None) -> bool | None:
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


def active_filter_count(filters: Mapping[str, Any]) -> int:
    """Number of filters in effect, not counting pagination keys."""
    return sum(
        1
        for key, value in filters.items()
        if key not in PAGINATION_KEYS and value is not None and value != ""
    )


class QueryParamMirror:
    """Batches parameter updates and writes them with replace semantics.

    Updates arriving within ``delay_ms`` of each other are merged into a
    single ``replace`` call so typing never grows the history stack.
    """

    def __init__(
        self,
        address_bar: AddressBar,
        scheduler: Scheduler,
        *,
        delay_ms: int = DEFAULT_QUERY_DEBOUNCE_MS,
    ) -> None:
        self._address_bar = address_bar
        self._scheduler = scheduler
        self._delay_ms = delay_ms
        self._pending: dict[str, str | None] = {}
        self._task: ScheduledTask | None = None
        self._closed = False

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def get(self, key: str) -> str | None:
        return self.current().get(key)

    def current(self) -> dict[str, str]:
        """Address-bar params with not-yet-written updates applied."""
        return self._merge(self._address_bar.params(), self._pending)

    def update(self, updates: Mapping[str, Any]) -> None:
        if self._closed:
            return
        for key, value in updates.items():
            self._pending[key] = serialize_param(value)
        if self._task is not None:
            self._task.cancel()
        self._task = self._scheduler.schedule(self._delay_ms, self.flush)

    def flush(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        if not self._pending:
            return
        params = self.current()
        self._pending = {}
        logger.debug("Replacing query params: %s", params)
        self._address_bar.replace(params)

    def close(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._pending = {}
        self._closed = True

    @staticmethod
    def _merge(base: Mapping[str, str], updates: Mapping[str, str | None]) -> dict[str, str]:
        merged = dict(base)
        for key, value in updates.items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = value
        return merged
