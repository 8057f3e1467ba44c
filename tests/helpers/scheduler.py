"""Deterministic scheduler for debounce tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class ManualTask:
    due_ms: int
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Scheduler whose clock only moves when a test calls :meth:`advance`."""

    now_ms: int = 0
    tasks: list[ManualTask] = field(default_factory=list)

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(self.now_ms + delay_ms, callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[ManualTask]:
        return [task for task in self.tasks if task.active]

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = sorted(
                (task for task in self.pending if task.due_ms <= target),
                key=lambda task: task.due_ms,
            )
            if not due:
                break
            task = due[0]
            self.now_ms = task.due_ms
            task.fired = True
            task.callback()
        self.now_ms = target
