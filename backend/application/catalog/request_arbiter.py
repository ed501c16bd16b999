from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from domain.catalog import FetchKind, PendingRequest
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestArbiter:
    """Sequence-numbers outbound fetches and drops responses that were superseded.

    Last-issued wins per kind: a response is applied only if its token is the
    most recently issued one of that kind and has not been cancelled. Late
    responses are discarded silently; the transport call itself is never aborted.
    """

    def __init__(self) -> None:
        self._counters: dict[FetchKind, int] = {kind: 0 for kind in FetchKind}
        self._live: dict[FetchKind, Optional[PendingRequest]] = {kind: None for kind in FetchKind}

    def issue(self, kind: FetchKind) -> PendingRequest:
        previous = self._live.get(kind)
        if previous is not None and previous.is_live:
            previous.cancelled = True
        self._counters[kind] += 1
        token = PendingRequest(seq=self._counters[kind], kind=kind)
        self._live[kind] = token
        logger.debug(format_kv(event="fetch_issued", kind=kind, seq=token.seq))
        return token

    def latest(self, kind: FetchKind) -> Optional[PendingRequest]:
        return self._live.get(kind)

    def is_current(self, token: PendingRequest) -> bool:
        return self._live.get(token.kind) is token and not token.cancelled

    def cancel(self, kind: FetchKind) -> Optional[PendingRequest]:
        """Invalidate the live request of `kind` without issuing a new one."""
        token = self._live.get(kind)
        if token is None or not token.is_live:
            return None
        token.cancelled = True
        logger.debug(format_kv(event="fetch_cancelled", kind=kind, seq=token.seq))
        return token

    def resolve(self, token: PendingRequest, apply: Callable[[], T]) -> bool:
        """Run `apply` only when `token` is still the current request of its kind.

        Returns whether the result was applied.
        """
        if token.resolved or not self.is_current(token):
            latest = self._live.get(token.kind)
            logger.debug(
                format_kv(
                    event="fetch_discarded",
                    kind=token.kind,
                    seq=token.seq,
                    latest=latest.seq if latest is not None else None,
                )
            )
            return False
        token.resolved = True
        apply()
        return True
