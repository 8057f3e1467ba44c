"""QTimer-backed scheduler for the debounced channels."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer


class QtScheduledTask:
    """Handle to a single-shot QTimer."""

    def __init__(self, timer: QTimer) -> None:
        self._timer = timer
        self._done = False
        timer.timeout.connect(self._on_timeout)

    @property
    def active(self) -> bool:
        return not self._done and self._timer.isActive()

    def cancel(self) -> None:
        if self._done:
            return
        self._done = True
        self._timer.stop()
        self._timer.deleteLater()

    def _on_timeout(self) -> None:
        self._done = True
        self._timer.deleteLater()


class QtScheduler:
    """Schedules callbacks on the Qt event loop."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> QtScheduledTask:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        task = QtScheduledTask(timer)
        timer.timeout.connect(callback)
        timer.start(max(0, delay_ms))
        return task
