import sys
import unittest
from pathlib import Path

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from application.catalog import DashboardService, RecommendationService
from application.catalog.recommendation_service import normalize_recommendations
from domain.catalog import (
    AuthenticationRequired,
    CatalogPage,
    FeatureUnavailable,
    Movie,
    NetworkFailure,
    RatingActivity,
)


class _DashboardEndpoint:
    def __init__(self, movies: list[Movie]) -> None:
        self.movies = movies
        self.page_calls: list[tuple[int, int]] = []
        self.activity: list[RatingActivity] = []
        self.activity_error: Exception | None = None
        self.recommendations: list = []

    async def fetch_page(self, *, page: int, page_size: int) -> CatalogPage:
        self.page_calls.append((page, page_size))
        return CatalogPage(movies=list(self.movies), total=len(self.movies), page=page, page_size=page_size)

    async def recent_activity(self) -> list[RatingActivity]:
        if self.activity_error is not None:
            raise self.activity_error
        return list(self.activity)

    async def ai_recommendations(self) -> list:
        return list(self.recommendations)


def _movies() -> list[Movie]:
    return [
        Movie(id="1", title="Heat", genre="Crime", user_rating=5),
        Movie(id="2", title="Ronin", genre="Action"),
        Movie(id="3", title="Thief", genre="Crime", user_rating=3),
    ]


class TestDashboardService(unittest.IsolatedAsyncioTestCase):
    async def test_stats_come_from_first_page(self) -> None:
        endpoint = _DashboardEndpoint(_movies())
        service = DashboardService(endpoint=endpoint, stats_page_size=20)

        stats = await service.load_stats()

        self.assertEqual(endpoint.page_calls, [(1, 20)])
        self.assertEqual(stats.movies_watched, 2)
        self.assertEqual(stats.average_rating, "4.0")
        self.assertEqual(stats.favorite_genre, "Crime")
        self.assertEqual(stats.last_rated, "Heat")

    async def test_snapshot_uses_recent_activity_when_available(self) -> None:
        endpoint = _DashboardEndpoint(_movies())
        endpoint.activity = [RatingActivity(movie="Thief", rating=3, date="2024-05-01")]

        snapshot = await DashboardService(endpoint=endpoint).load()

        self.assertEqual(snapshot.recent_activity, endpoint.activity)
        self.assertEqual(snapshot.stats.genres_explored, 1)

    async def test_missing_activity_route_falls_back_to_rated_movies(self) -> None:
        endpoint = _DashboardEndpoint(_movies())
        endpoint.activity_error = FeatureUnavailable(status=404)

        with self.assertLogs("application.catalog.dashboard_service", level="WARNING"):
            snapshot = await DashboardService(endpoint=endpoint, recent_limit=1).load()

        self.assertEqual([a.movie for a in snapshot.recent_activity], ["Heat"])
        self.assertEqual(snapshot.recent_activity[0].rating, 5)

    async def test_network_failure_also_falls_back(self) -> None:
        endpoint = _DashboardEndpoint(_movies())
        endpoint.activity_error = NetworkFailure("down")

        snapshot = await DashboardService(endpoint=endpoint).load()
        self.assertEqual([a.movie for a in snapshot.recent_activity], ["Heat", "Thief"])

    async def test_auth_failure_is_not_hidden(self) -> None:
        endpoint = _DashboardEndpoint(_movies())
        endpoint.activity_error = AuthenticationRequired(status=401)

        with self.assertRaises(AuthenticationRequired):
            await DashboardService(endpoint=endpoint).load()


class TestRecommendations(unittest.IsolatedAsyncioTestCase):
    def test_normalize_skips_unusable_entries(self) -> None:
        recs = normalize_recommendations(
            [
                "Collateral",
                "   ",
                {"title": "Thief", "genre": "Crime", "reason": "Mann"},
                {"title": 42},
                {"genre": "Drama"},
                7,
                None,
            ]
        )
        self.assertEqual([r.title for r in recs], ["Collateral", "Thief"])
        self.assertEqual(recs[1].genre, "Crime")
        self.assertEqual(recs[1].extra, {"reason": "Mann"})

    async def test_service_returns_server_order(self) -> None:
        endpoint = _DashboardEndpoint([])
        endpoint.recommendations = [{"title": "B"}, {"title": "A"}]

        recs = await RecommendationService(endpoint=endpoint).fetch_ai_recommendations()
        self.assertEqual([r.title for r in recs], ["B", "A"])

    async def test_empty_payload(self) -> None:
        recs = await RecommendationService(endpoint=_DashboardEndpoint([])).fetch_ai_recommendations()
        self.assertEqual(recs, [])


if __name__ == "__main__":
    unittest.main()
