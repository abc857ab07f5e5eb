"""
Deferred task scheduling for table pacing.

The game delays stage advances and AI turns so a human can follow the
table. Those delays go through a Scheduler so the same game code runs
under asyncio (server), step by step (tests) or with no delay at all.

Usage:
    scheduler = ImmediateScheduler()
    task = scheduler.call_later(1.2, advance)
    task.cancel()
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, List, Optional
import asyncio
import logging


logger = logging.getLogger(__name__)


class ScheduledTask:
    """Handle for a deferred callback."""

    def __init__(self, callback: Callable[[], None], delay: float = 0.0):
        self.callback = callback
        self.delay = delay
        self.cancelled = False
        self.done = False
        self._timer: Optional[asyncio.TimerHandle] = None

    def cancel(self) -> None:
        """Prevent the callback from running. No-op once it has run."""
        if self.done:
            return
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def run(self) -> None:
        if self.cancelled or self.done:
            return
        self.done = True
        self.callback()

    @property
    def pending(self) -> bool:
        return not self.cancelled and not self.done

    def __repr__(self) -> str:
        status = "cancelled" if self.cancelled else "done" if self.done else "pending"
        return f"ScheduledTask(delay={self.delay}, {status})"


class Scheduler(ABC):
    """Runs callbacks after a delay (in seconds)."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule `callback` and return its handle."""


class ImmediateScheduler(Scheduler):
    """
    Runs every task right away, ignoring the delay.

    Tasks scheduled from inside a running task are queued and run after
    it returns, so long chains of transitions do not recurse.
    """

    def __init__(self):
        self._queue: Deque[ScheduledTask] = deque()
        self._draining = False

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(callback, delay)
        self._queue.append(task)
        if not self._draining:
            self._drain()
        return task

    def _drain(self) -> None:
        self._draining = True
        try:
            while self._queue:
                self._queue.popleft().run()
        finally:
            self._draining = False


class ManualScheduler(Scheduler):
    """
    Holds tasks until the caller runs them.

    Lets tests observe the table between a transition and the deferred
    step that follows it.
    """

    def __init__(self):
        self.tasks: List[ScheduledTask] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(callback, delay)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> List[ScheduledTask]:
        return [t for t in self.tasks if t.pending]

    def run_next(self) -> bool:
        """Run the oldest pending task. Returns False if there was none."""
        for task in self.tasks:
            if task.pending:
                task.run()
                return True
        return False

    def run_all(self, limit: int = 10_000) -> int:
        """Run pending tasks (including newly scheduled ones) until none remain."""
        count = 0
        while count < limit and self.run_next():
            count += 1
        self.tasks = [t for t in self.tasks if t.pending]
        return count


class AsyncioScheduler(Scheduler):
    """Schedules tasks on the running asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(callback, delay)
        loop = self._loop or asyncio.get_running_loop()
        task._timer = loop.call_later(max(0.0, delay), self._run, task)
        return task

    @staticmethod
    def _run(task: ScheduledTask) -> None:
        try:
            task.run()
        except Exception:
            logger.exception(f"Scheduled task failed: {task!r}")
