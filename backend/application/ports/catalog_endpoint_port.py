from __future__ import annotations

from typing import Any, Protocol

from domain.catalog import CatalogPage, Movie, NewMovie, RatingActivity, SearchResult


class CatalogEndpointPort(Protocol):
    """Remote movie API as seen by the client core.

    Implementations raise `domain.catalog.errors.CatalogError` subclasses on failure.
    """

    async def fetch_page(self, *, page: int, page_size: int) -> CatalogPage:
        ...

    async def fetch_by_query(self, *, query: str) -> SearchResult:
        ...

    async def submit_rating(self, *, movie_id: str, score: int) -> None:
        ...

    async def add_movie(self, *, movie: NewMovie) -> Movie | None:
        ...

    async def import_by_title(self, *, title: str) -> Movie | None:
        ...

    async def recent_activity(self) -> list[RatingActivity]:
        ...

    async def ai_recommendations(self) -> list[Any]:
        """Raw recommendation entries (strings or objects), normalised by the caller."""
        ...

    async def close(self) -> None:
        ...
