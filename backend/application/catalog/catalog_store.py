from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from application.catalog.request_arbiter import RequestArbiter
from domain.catalog import (
    ALL_GENRES,
    CatalogError,
    CatalogView,
    FetchKind,
    Movie,
    PendingRequest,
    filter_by_genre,
    genre_options,
)
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchStatus:
    is_loading: bool = False
    error: Optional[CatalogError] = None


StoreObserver = Callable[["CatalogStore"], None]


class CatalogStore:
    """Authoritative in-memory view of the movie list.

    The view is written only by `apply_fetch_result` (gated by the arbiter) and
    by `set_rating_locally`. Page and search fetches keep separate loading/error
    channels so one never blanks the other.
    """

    def __init__(self, *, arbiter: Optional[RequestArbiter] = None) -> None:
        self._arbiter = arbiter or RequestArbiter()
        self._view: Optional[CatalogView] = None
        self._status: dict[FetchKind, FetchStatus] = {kind: FetchStatus() for kind in FetchKind}
        self._observers: list[StoreObserver] = []

    @property
    def arbiter(self) -> RequestArbiter:
        return self._arbiter

    @property
    def current_view(self) -> Optional[CatalogView]:
        return self._view

    @property
    def movies(self) -> list[Movie]:
        return list(self._view.movies) if self._view is not None else []

    @property
    def total(self) -> int:
        return self._view.total if self._view is not None else 0

    def status(self, kind: FetchKind) -> FetchStatus:
        return self._status[kind]

    def is_loading(self, kind: FetchKind) -> bool:
        return self._status[kind].is_loading

    def error(self, kind: FetchKind) -> Optional[CatalogError]:
        return self._status[kind].error

    # ----- fetch resolution path -----

    def begin_fetch(self, kind: FetchKind) -> PendingRequest:
        token = self._arbiter.issue(kind)
        self._status[kind] = FetchStatus(is_loading=True)
        self._notify()
        return token

    def cancel_fetch(self, kind: FetchKind) -> None:
        if self._arbiter.cancel(kind) is None:
            return
        self._status[kind] = FetchStatus(is_loading=False, error=self._status[kind].error)
        self._notify()

    def apply_fetch_result(
        self,
        token: PendingRequest,
        result: Optional[CatalogView] = None,
        *,
        error: Optional[CatalogError] = None,
    ) -> bool:
        """Apply a fetch outcome if `token` is still the latest of its kind.

        A successful result replaces the whole view; an error only lands on the
        token's own channel and leaves the view as it was.
        """
        kind = token.kind

        def _apply() -> None:
            if error is not None:
                self._status[kind] = FetchStatus(is_loading=False, error=error)
                return
            self._view = result
            self._status[kind] = FetchStatus(is_loading=False)

        applied = self._arbiter.resolve(token, _apply)
        if applied:
            logger.debug(
                format_kv(
                    event="fetch_applied",
                    kind=kind,
                    seq=token.seq,
                    ok=error is None,
                    total=self.total,
                )
            )
            self._notify()
        return applied

    # ----- local mutation -----

    def set_rating_locally(self, movie_id: str, rating: int) -> bool:
        """Update one movie's rating in place; ordering and total stay untouched."""
        if self._view is None:
            return False
        for movie in self._view.movies:
            if movie.id == movie_id:
                movie.user_rating = rating
                self._notify()
                return True
        return False

    # ----- projections -----

    def filtered_view(self, genre: str = ALL_GENRES) -> list[Movie]:
        return filter_by_genre(self.movies, genre)

    def genre_options(self) -> list[str]:
        return genre_options(self.movies)

    # ----- observers -----

    def subscribe(self, observer: StoreObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception:
                # A broken observer must not stop the others from redrawing.
                logger.exception(format_kv(event="store_observer_failed"))
