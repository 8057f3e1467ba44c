"""Debounced search input channel."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from bo_table.scheduling import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_DEBOUNCE_MS = 400


class SearchState(str, Enum):
    IDLE = "idle"
    TYPING = "typing"
    COMMITTED = "committed"


class DebouncedSearchChannel:
    """Decouples keystroke-rate input from search notifications.

    ``text`` is the immediately rendered echo of the search box. The caller's
    ``on_search_change`` only runs once ``delay_ms`` pass without another
    keystroke. The pending commit is cancelled when the caller overrides the
    value and when the channel is closed.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_search_change: Callable[[str], None] | None,
        *,
        value: str = "",
        delay_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS,
    ) -> None:
        self._scheduler = scheduler
        self._on_search_change = on_search_change
        self._delay_ms = delay_ms
        self._external = value
        self._text = value
        self._state = SearchState.IDLE
        self._pending: ScheduledTask | None = None
        self._closed = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def has_pending_commit(self) -> bool:
        return self._pending is not None and self._pending.active

    @property
    def closed(self) -> bool:
        return self._closed

    def type(self, text: str) -> None:
        """Record a keystroke and restart the quiet-period timer."""
        if self._closed:
            return
        self._text = text
        self._cancel_pending()
        self._state = SearchState.TYPING
        self._pending = self._scheduler.schedule(self._delay_ms, self._commit)

    def sync_external(self, value: str) -> None:
        """Adopt a caller-side change of the search value immediately."""
        if value == self._external:
            return
        self._external = value
        self._cancel_pending()
        self._text = value
        self._state = SearchState.IDLE

    def flush(self) -> None:
        """Commit a pending value right away (e.g. on Enter)."""
        if self.has_pending_commit:
            self._cancel_pending()
            self._commit()

    def close(self) -> None:
        self._cancel_pending()
        self._closed = True
        self._state = SearchState.IDLE

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _commit(self) -> None:
        self._pending = None
        if self._closed:
            return
        self._state = SearchState.COMMITTED
        self._external = self._text
        logger.debug("Search committed: %r", self._text)
        try:
            if self._on_search_change is not None:
                self._on_search_change(self._text)
        finally:
            self._state = SearchState.IDLE
