from __future__ import annotations

import asyncio
from typing import Callable, Optional

from application.ports.scheduler_port import SchedulerPort, TimerHandle


class AsyncioScheduler(SchedulerPort):
    """Timers on the running event loop; `now()` is the loop's monotonic clock."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self._get_loop().time()

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle:
        return self._get_loop().call_later(max(float(delay_s), 0.0), callback)
