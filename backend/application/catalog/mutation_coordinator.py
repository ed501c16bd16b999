from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from application.catalog.catalog_store import CatalogStore
from application.ports.catalog_endpoint_port import CatalogEndpointPort
from domain.catalog import (
    CatalogError,
    Movie,
    NewMovie,
    SubmissionInProgress,
    ValidationFailure,
    describe_error,
)
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 5

ADD_SUCCESS_MESSAGE = "Movie added successfully!"
IMPORT_SUCCESS_MESSAGE = "Movie imported from OMDb!"


@dataclass(frozen=True)
class MutationOutcome:
    error: Optional[CatalogError] = None
    message: str = ""


def _is_valid_score(score: object) -> bool:
    return isinstance(score, int) and not isinstance(score, bool) and MIN_SCORE <= score <= MAX_SCORE


def _clean_optional(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


class MutationCoordinator:
    """Submits rate/add/import and resynchronises the store afterwards.

    Ratings are queued behind a lock. Add and import are rejected while one of
    the same kind is outstanding because the API has no idempotency key. The
    page refetch only starts after the endpoint acknowledged the mutation.
    """

    def __init__(
        self,
        *,
        endpoint: CatalogEndpointPort,
        store: CatalogStore,
        refetch: Callable[[], Awaitable[None]],
    ) -> None:
        self._endpoint = endpoint
        self._store = store
        self._refetch = refetch
        self._rate_lock = asyncio.Lock()
        self._adding = False
        self._importing = False
        self._outcome = MutationOutcome()

    @property
    def is_rating(self) -> bool:
        return self._rate_lock.locked()

    @property
    def is_adding(self) -> bool:
        return self._adding

    @property
    def is_importing(self) -> bool:
        return self._importing

    @property
    def error(self) -> Optional[CatalogError]:
        return self._outcome.error

    @property
    def message(self) -> str:
        """User-facing text for the last mutation: success notice or error description."""
        return self._outcome.message

    async def rate(self, movie_id: str, score: int) -> None:
        if not _is_valid_score(score):
            exc = ValidationFailure(f"Rating must be a whole number from {MIN_SCORE} to {MAX_SCORE}")
            self._fail(exc, "rate movie", login_action="rate movies")
            raise exc

        async with self._rate_lock:
            try:
                await self._endpoint.submit_rating(movie_id=movie_id, score=score)
            except CatalogError as exc:
                self._fail(exc, "rate movie", login_action="rate movies")
                raise
            self._store.set_rating_locally(movie_id, score)
            self._outcome = MutationOutcome()
            logger.info(format_kv(event="movie_rated", movie_id=movie_id, score=score))

        await self._refetch()

    async def add_movie(self, movie: NewMovie) -> Optional[Movie]:
        if self._adding:
            raise SubmissionInProgress("A movie is already being added")

        title = (movie.title or "").strip()
        genre = (movie.genre or "").strip()
        if not title or not genre:
            exc = ValidationFailure("Title and genre are required")
            self._fail(exc, "add movie")
            raise exc

        cleaned = NewMovie(
            title=title,
            genre=genre,
            description=_clean_optional(movie.description),
            release_date=_clean_optional(movie.release_date),
            poster_url=_clean_optional(movie.poster_url),
        )

        self._adding = True
        self._outcome = MutationOutcome()
        try:
            created = await self._endpoint.add_movie(movie=cleaned)
        except CatalogError as exc:
            self._fail(exc, "add movie")
            raise
        finally:
            self._adding = False

        self._outcome = MutationOutcome(message=ADD_SUCCESS_MESSAGE)
        logger.info(format_kv(event="movie_added", title=title, genre=genre))
        await self._refetch()
        return created

    async def import_by_title(self, title: str) -> Optional[Movie]:
        if self._importing:
            raise SubmissionInProgress("A movie is already being imported")

        title = (title or "").strip()
        if not title:
            exc = ValidationFailure("Title is required")
            self._fail(exc, "import movie")
            raise exc

        self._importing = True
        self._outcome = MutationOutcome()
        try:
            imported = await self._endpoint.import_by_title(title=title)
        except CatalogError as exc:
            self._fail(exc, "import movie")
            raise
        finally:
            self._importing = False

        self._outcome = MutationOutcome(message=IMPORT_SUCCESS_MESSAGE)
        logger.info(format_kv(event="movie_imported", title=title))
        await self._refetch()
        return imported

    def _fail(self, exc: CatalogError, action: str, *, login_action: Optional[str] = None) -> None:
        self._outcome = MutationOutcome(error=exc, message=describe_error(exc, action, login_action=login_action))
        logger.warning(
            format_kv(
                event="mutation_failed",
                action=action,
                error=type(exc).__name__,
                status=exc.status,
                detail=exc.message,
            )
        )
