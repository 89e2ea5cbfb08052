"""Delayed-callback scheduling.

The engine never sleeps or spawns threads; it hands (delay, callback) pairs to
a scheduler. The Qt screen uses ``memorypath.ui.qt_scheduler.QtScheduler``;
headless callers and tests drive a ``ManualScheduler`` by advancing its clock.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Protocol, Tuple


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        ...


class ManualScheduler:
    """Virtual-clock scheduler: callbacks run only when the clock is advanced."""

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        """Current virtual time in seconds."""
        return self._now

    @property
    def pending(self) -> int:
        """Number of callbacks not yet run."""
        return len(self._queue)

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        heapq.heappush(self._queue, (self._now + delay, next(self._counter), callback))

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every callback that falls due.

        Callbacks scheduled by other callbacks run in the same call when they
        are due before the new time. Returns the number of callbacks run.
        """
        target = self._now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target + 1e-9:
            due, _, callback = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            callback()
            ran += 1
        self._now = target
        return ran

    def run_all(self) -> int:
        """Run callbacks until the queue is empty."""
        ran = 0
        while self._queue:
            ran += self.advance(self._queue[0][0] - self._now)
        return ran
