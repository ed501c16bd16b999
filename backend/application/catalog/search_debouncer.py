from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, Optional, Union

from application.ports.scheduler_port import SchedulerPort, TimerHandle
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)

# Timer callbacks may run up to one clock tick before the deadline.
_TIMER_SLACK_S = 0.001


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Armed:
    deadline: float
    text: str


@dataclass(frozen=True)
class Fired:
    text: str


DebounceState = Union[Idle, Armed, Fired]


class DebounceAction(str, Enum):
    NONE = "none"
    ARM = "arm"
    FETCH_PAGE = "fetch_page"
    DISPATCH_SEARCH = "dispatch_search"


@dataclass(frozen=True)
class Transition:
    state: DebounceState
    action: DebounceAction
    text: str = ""


def on_text(state: DebounceState, text: str, *, now: float, delay_s: float) -> Transition:
    """A new query text arrived. Blank text bypasses the quiet period entirely."""
    _ = state
    if not (text or "").strip():
        return Transition(Idle(), DebounceAction.FETCH_PAGE)
    return Transition(Armed(deadline=now + delay_s, text=text), DebounceAction.ARM, text)


def on_timer(state: DebounceState, *, now: float) -> Transition:
    if isinstance(state, Armed) and now + _TIMER_SLACK_S >= state.deadline:
        return Transition(Fired(text=state.text), DebounceAction.DISPATCH_SEARCH, state.text)
    return Transition(state, DebounceAction.NONE)


def on_teardown(state: DebounceState) -> Transition:
    _ = state
    return Transition(Idle(), DebounceAction.NONE)


class SearchDebouncer:
    """Drives the debounce transitions with an injected scheduler.

    At most one timer is live; every update cancels it before deciding what to
    do next, so only the most recent text can ever be dispatched.
    """

    def __init__(
        self,
        *,
        scheduler: SchedulerPort,
        delay_s: float,
        on_search: Callable[[str], None],
        on_clear: Callable[[], None],
    ) -> None:
        self._scheduler = scheduler
        self._delay_s = float(delay_s)
        self._on_search = on_search
        self._on_clear = on_clear
        self._state: DebounceState = Idle()
        self._timer: Optional[TimerHandle] = None
        self._closed = False

    @property
    def state(self) -> DebounceState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def update(self, text: str) -> None:
        if self._closed:
            return
        self._cancel_timer()
        transition = on_text(self._state, text, now=self._scheduler.now(), delay_s=self._delay_s)
        self._state = transition.state
        if transition.action is DebounceAction.FETCH_PAGE:
            logger.debug(format_kv(event="search_cleared"))
            self._on_clear()
        elif transition.action is DebounceAction.ARM:
            self._timer = self._scheduler.call_later(self._delay_s, partial(self._fire, transition.state))

    def close(self) -> None:
        self._cancel_timer()
        self._state = on_teardown(self._state).state
        self._closed = True

    def _fire(self, armed: DebounceState) -> None:
        if self._closed or self._state is not armed:
            return
        self._timer = None
        now = self._scheduler.now()
        transition = on_timer(self._state, now=now)
        self._state = transition.state
        if isinstance(self._state, Armed):
            # Early wake-up: wait out the rest of the quiet period.
            remaining = max(self._state.deadline - now, 0.0)
            self._timer = self._scheduler.call_later(remaining, partial(self._fire, self._state))
        elif transition.action is DebounceAction.DISPATCH_SEARCH:
            logger.debug(format_kv(event="search_dispatched", query=transition.text))
            self._on_search(transition.text)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
