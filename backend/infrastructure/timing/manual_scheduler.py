from __future__ import annotations

import heapq
import itertools
from typing import Callable

from application.ports.scheduler_port import SchedulerPort


class _ManualTimer:
    def __init__(self, deadline: float, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(SchedulerPort):
    """Virtual clock: time only moves when `advance()` is called.

    Timers due within the advanced window fire in deadline order, each seeing
    `now()` equal to its own deadline.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._heap: list[tuple[float, int, _ManualTimer]] = []
        self._order = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> _ManualTimer:
        timer = _ManualTimer(self._now + max(float(delay_s), 0.0), callback)
        heapq.heappush(self._heap, (timer.deadline, next(self._order), timer))
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for _, _, t in self._heap if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run due timers; returns how many fired."""
        target = self._now + max(float(seconds), 0.0)
        fired = 0
        while self._heap and self._heap[0][0] <= target:
            deadline, _, timer = heapq.heappop(self._heap)
            if timer.cancelled:
                continue
            self._now = deadline
            timer.callback()
            fired += 1
        self._now = target
        return fired
