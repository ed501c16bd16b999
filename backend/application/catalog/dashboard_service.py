from __future__ import annotations

import logging
from dataclasses import dataclass, field

from application.ports.catalog_endpoint_port import CatalogEndpointPort
from domain.catalog import (
    AuthenticationRequired,
    CatalogError,
    Movie,
    RatingActivity,
    Stats,
    compute_stats,
)
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    stats: Stats
    recent_activity: list[RatingActivity] = field(default_factory=list)


def recent_from_movies(movies: list[Movie], *, limit: int) -> list[RatingActivity]:
    """Rated movies in fetch order; the API gives no rating timestamps here."""
    rated = [m for m in movies if m.user_rating is not None]
    return [RatingActivity(movie=m.title, rating=m.user_rating, date="") for m in rated[:limit]]


class DashboardService:
    """Viewing statistics plus recent rating activity.

    Stats are computed from the first catalog page only. Widening that to the
    full catalog would change what the numbers mean, so it is left to callers
    that pass a bigger `stats_page_size`.
    """

    def __init__(
        self,
        *,
        endpoint: CatalogEndpointPort,
        stats_page_size: int = 50,
        recent_limit: int = 5,
    ) -> None:
        self._endpoint = endpoint
        self._stats_page_size = int(stats_page_size)
        self._recent_limit = int(recent_limit)

    async def load_stats(self) -> Stats:
        page = await self._endpoint.fetch_page(page=1, page_size=self._stats_page_size)
        return compute_stats(page.movies)

    async def load(self) -> DashboardSnapshot:
        page = await self._endpoint.fetch_page(page=1, page_size=self._stats_page_size)
        stats = compute_stats(page.movies)
        try:
            recent = await self._endpoint.recent_activity()
        except AuthenticationRequired:
            raise
        except CatalogError as exc:
            logger.warning(
                format_kv(
                    event="recent_activity_fallback",
                    error=type(exc).__name__,
                    status=exc.status,
                )
            )
            recent = recent_from_movies(page.movies, limit=self._recent_limit)
        return DashboardSnapshot(stats=stats, recent_activity=list(recent))
