from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FetchKind(str, Enum):
    PAGE = "page"
    SEARCH = "search"


@dataclass
class PendingRequest:
    """Sequence token handed out by the request arbiter for one outbound fetch."""

    seq: int
    kind: FetchKind
    cancelled: bool = False
    resolved: bool = False

    @property
    def is_live(self) -> bool:
        return not (self.cancelled or self.resolved)
