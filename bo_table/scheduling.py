"""Cancellable deferred callbacks used by the debounced channels."""

from __future__ import annotations

import threading
from typing import Callable, Protocol


class ScheduledTask(Protocol):
    """Handle to a callback scheduled for later execution."""

    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


class Scheduler(Protocol):
    """Runs a callback once after ``delay_ms`` unless cancelled first."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask: ...


class TimerTask:
    """ScheduledTask backed by a daemon :class:`threading.Timer`."""

    def __init__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._done = threading.Event()
        self._timer = threading.Timer(max(delay_ms, 0) / 1000.0, self._run)
        self._timer.daemon = True

    def start(self) -> "TimerTask":
        self._timer.start()
        return self

    @property
    def active(self) -> bool:
        return not self._done.is_set()

    def cancel(self) -> None:
        self._done.set()
        self._timer.cancel()

    def _run(self) -> None:
        if self._done.is_set():
            return
        self._done.set()
        self._callback()


class ThreadingScheduler:
    """Scheduler for hosts without an event loop (CLI, scripts).

    Callbacks run on a timer thread.
    """

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TimerTask:
        return TimerTask(delay_ms, callback).start()
