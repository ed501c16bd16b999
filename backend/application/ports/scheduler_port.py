from __future__ import annotations

from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class SchedulerPort(Protocol):
    """Clock + one-shot timers, injected so debounce logic can run on a virtual clock."""

    def now(self) -> float:
        """Monotonic time in seconds."""
        ...

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle:
        ...
