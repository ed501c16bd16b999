from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from application.catalog.catalog_store import CatalogStore, StoreObserver
from application.catalog.mutation_coordinator import MutationCoordinator
from application.catalog.search_debouncer import SearchDebouncer
from application.ports.catalog_endpoint_port import CatalogEndpointPort
from application.ports.scheduler_port import SchedulerPort
from domain.catalog import (
    ALL_GENRES,
    CatalogError,
    CatalogView,
    FetchKind,
    Movie,
    NewMovie,
    PendingRequest,
    describe_error,
    page_count,
)
from domain.catalog.views import has_next_page, has_previous_page
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
DEFAULT_SEARCH_DEBOUNCE_S = 0.4


class CatalogSession:
    """Catalog browsing controller.

    Reconciles the three input streams (search text, page navigation and
    mutations) into the single view held by `CatalogStore`. Search text goes
    through the debouncer; every fetch is sequenced by the store's arbiter so
    late replies cannot overwrite a newer view.
    """

    def __init__(
        self,
        *,
        endpoint: CatalogEndpointPort,
        scheduler: SchedulerPort,
        page_size: int = DEFAULT_PAGE_SIZE,
        search_debounce_s: float = DEFAULT_SEARCH_DEBOUNCE_S,
        store: Optional[CatalogStore] = None,
        owns_endpoint: bool = False,
    ) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._endpoint = endpoint
        self._owns_endpoint = owns_endpoint
        self._page_size = int(page_size)
        self._page = 1
        self._search_text = ""
        self._genre = ALL_GENRES
        self._store = store or CatalogStore()
        self._tasks: set[asyncio.Task] = set()
        self._closed = False
        self._debouncer = SearchDebouncer(
            scheduler=scheduler,
            delay_s=search_debounce_s,
            on_search=self._on_search_due,
            on_clear=self._on_search_cleared,
        )
        self._mutations = MutationCoordinator(endpoint=endpoint, store=self._store, refetch=self.refresh)

    # ----- state -----

    @property
    def store(self) -> CatalogStore:
        return self._store

    @property
    def mutations(self) -> MutationCoordinator:
        return self._mutations

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def page_count(self) -> int:
        return page_count(self._store.total, self._page_size)

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def selected_genre(self) -> str:
        return self._genre

    @property
    def page_error_message(self) -> str:
        err = self._store.error(FetchKind.PAGE)
        return describe_error(err, "fetch movies", login_action="view movies") if err is not None else ""

    @property
    def search_error_message(self) -> str:
        err = self._store.error(FetchKind.SEARCH)
        return describe_error(err, "search movies") if err is not None else ""

    def visible_movies(self) -> list[Movie]:
        return self._store.filtered_view(self._genre)

    def genre_options(self) -> list[str]:
        return self._store.genre_options()

    def select_genre(self, genre: str) -> None:
        self._genre = genre or ALL_GENRES

    def subscribe(self, observer: StoreObserver) -> Callable[[], None]:
        return self._store.subscribe(observer)

    # ----- fetch path -----

    async def start(self) -> None:
        await self.load_page(self._page)

    async def load_page(self, page: Optional[int] = None) -> bool:
        """Fetch one catalog page; returns whether the result reached the view."""
        if page is not None:
            self._page = max(1, int(page))
        token = self._store.begin_fetch(FetchKind.PAGE)
        return await self._execute(token, self._page_call(self._page))

    async def refresh(self) -> None:
        await self.load_page()

    async def search(self, query: str) -> bool:
        token = self._store.begin_fetch(FetchKind.SEARCH)
        return await self._execute(token, lambda: self._endpoint.fetch_by_query(query=query))

    def set_search_text(self, text: str) -> None:
        if self._closed:
            return
        self._search_text = text or ""
        self._debouncer.update(self._search_text)

    async def next_page(self) -> bool:
        if not has_next_page(self._page, self._store.total, self._page_size):
            return False
        return await self.load_page(self._page + 1)

    async def previous_page(self) -> bool:
        if not has_previous_page(self._page):
            return False
        return await self.load_page(self._page - 1)

    async def go_to_page(self, page: int) -> bool:
        last = max(self.page_count, 1)
        if page < 1 or page > last:
            return False
        return await self.load_page(page)

    def _page_call(self, page: int) -> Callable[[], Awaitable[CatalogView]]:
        return lambda: self._endpoint.fetch_page(page=page, page_size=self._page_size)

    async def _execute(self, token: PendingRequest, call: Callable[[], Awaitable[CatalogView]]) -> bool:
        page = self._page if token.kind is FetchKind.PAGE else None
        logger.info(format_kv(event="fetch_started", kind=token.kind, seq=token.seq, page=page))
        try:
            result = await call()
        except CatalogError as exc:
            logger.warning(
                format_kv(
                    event="fetch_failed",
                    kind=token.kind,
                    seq=token.seq,
                    error=type(exc).__name__,
                    status=exc.status,
                    detail=exc.message,
                )
            )
            return self._store.apply_fetch_result(token, error=exc)
        return self._store.apply_fetch_result(token, result)

    def _on_search_due(self, text: str) -> None:
        self._spawn(self.search(text))

    def _on_search_cleared(self) -> None:
        self._store.cancel_fetch(FetchKind.SEARCH)
        token = self._store.begin_fetch(FetchKind.PAGE)
        self._spawn(self._execute(token, self._page_call(self._page)))

    def _spawn(self, coro: Awaitable[bool]) -> None:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for fetches started from debouncer callbacks to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ----- mutations -----

    async def rate(self, movie_id: str, score: int) -> None:
        await self._mutations.rate(movie_id, score)

    async def add_movie(self, movie: NewMovie) -> Optional[Movie]:
        return await self._mutations.add_movie(movie)

    async def import_by_title(self, title: str) -> Optional[Movie]:
        return await self._mutations.import_by_title(title)

    # ----- teardown -----

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._debouncer.close()
        for kind in FetchKind:
            self._store.arbiter.cancel(kind)
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)
        if self._owns_endpoint:
            await self._endpoint.close()
