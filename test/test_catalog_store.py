import dataclasses
import sys
import unittest
from pathlib import Path

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from application.catalog.catalog_store import CatalogStore
from domain.catalog import CatalogPage, FetchKind, Movie, NetworkFailure, SearchResult


def _page(*movies: Movie, total: int = 0) -> CatalogPage:
    return CatalogPage(movies=list(movies), total=total or len(movies), page=1, page_size=50)


def _movie(mid: str, genre: str = "Drama", rating=None) -> Movie:
    return Movie(
        id=mid,
        title=f"Title {mid}",
        genre=genre,
        description=f"About {mid}",
        release_date="1999-01-01",
        user_rating=rating,
    )


class TestCatalogStore(unittest.TestCase):
    def test_fetch_result_replaces_view(self) -> None:
        store = CatalogStore()
        token = store.begin_fetch(FetchKind.PAGE)
        self.assertTrue(store.is_loading(FetchKind.PAGE))

        self.assertTrue(store.apply_fetch_result(token, _page(_movie("1"), total=10)))
        self.assertFalse(store.is_loading(FetchKind.PAGE))
        self.assertEqual(store.total, 10)
        self.assertEqual([m.id for m in store.movies], ["1"])

    def test_superseded_result_does_not_touch_view_or_observers(self) -> None:
        store = CatalogStore()
        calls: list[int] = []
        store.subscribe(lambda s: calls.append(1))

        stale = store.begin_fetch(FetchKind.SEARCH)
        fresh = store.begin_fetch(FetchKind.SEARCH)
        store.apply_fetch_result(fresh, SearchResult(movies=[_movie("new")], total=1, query="new"))
        calls.clear()

        self.assertFalse(store.apply_fetch_result(stale, SearchResult(movies=[_movie("old")], total=1, query="old")))
        self.assertEqual(store.current_view.query, "new")
        self.assertEqual(calls, [])

    def test_error_lands_on_own_channel_and_keeps_view(self) -> None:
        store = CatalogStore()
        store.apply_fetch_result(store.begin_fetch(FetchKind.PAGE), _page(_movie("1")))

        search = store.begin_fetch(FetchKind.SEARCH)
        store.apply_fetch_result(search, error=NetworkFailure("boom"))

        self.assertIsInstance(store.error(FetchKind.SEARCH), NetworkFailure)
        self.assertIsNone(store.error(FetchKind.PAGE))
        self.assertEqual([m.id for m in store.movies], ["1"])

    def test_new_fetch_clears_previous_error_of_same_kind(self) -> None:
        store = CatalogStore()
        store.apply_fetch_result(store.begin_fetch(FetchKind.PAGE), error=NetworkFailure("down"))
        store.begin_fetch(FetchKind.PAGE)
        self.assertIsNone(store.error(FetchKind.PAGE))

    def test_set_rating_locally_touches_only_target(self) -> None:
        store = CatalogStore()
        movies = [_movie("1"), _movie("2", rating=3), _movie("3", genre="Action")]
        store.apply_fetch_result(store.begin_fetch(FetchKind.PAGE), _page(*movies, total=30))
        before = [dataclasses.asdict(m) for m in store.movies]

        self.assertTrue(store.set_rating_locally("2", 5))

        after = [dataclasses.asdict(m) for m in store.movies]
        self.assertEqual([m["id"] for m in after], ["1", "2", "3"])
        self.assertEqual(after[0], before[0])
        self.assertEqual(after[2], before[2])
        self.assertEqual(after[1]["user_rating"], 5)
        self.assertEqual({k: v for k, v in after[1].items() if k != "user_rating"},
                         {k: v for k, v in before[1].items() if k != "user_rating"})
        self.assertEqual(store.total, 30)

    def test_set_rating_locally_unknown_movie(self) -> None:
        store = CatalogStore()
        self.assertFalse(store.set_rating_locally("missing", 4))
        store.apply_fetch_result(store.begin_fetch(FetchKind.PAGE), _page(_movie("1")))
        self.assertFalse(store.set_rating_locally("missing", 4))

    def test_filtered_view(self) -> None:
        store = CatalogStore()
        movies = [_movie("a1", "Action"), _movie("d1", "Drama"), _movie("a2", "Action")]
        store.apply_fetch_result(store.begin_fetch(FetchKind.PAGE), _page(*movies))

        self.assertEqual([m.id for m in store.filtered_view("Action")], ["a1", "a2"])
        self.assertEqual(len(store.filtered_view("All")), 3)
        self.assertEqual(store.genre_options(), ["All", "Action", "Drama"])

    def test_cancel_fetch_stops_loading(self) -> None:
        store = CatalogStore()
        token = store.begin_fetch(FetchKind.SEARCH)
        store.cancel_fetch(FetchKind.SEARCH)
        self.assertFalse(store.is_loading(FetchKind.SEARCH))
        self.assertFalse(store.apply_fetch_result(token, SearchResult(movies=[], total=0, query="x")))
        self.assertIsNone(store.current_view)

    def test_unsubscribe_and_failing_observer(self) -> None:
        store = CatalogStore()
        seen: list[int] = []

        def _broken(_store):
            raise RuntimeError("render failed")

        store.subscribe(_broken)
        unsubscribe = store.subscribe(lambda s: seen.append(s.total))

        with self.assertLogs("application.catalog.catalog_store", level="ERROR"):
            store.apply_fetch_result(store.begin_fetch(FetchKind.PAGE), _page(_movie("1"), total=4))
        self.assertIn(4, seen)

        unsubscribe()
        seen.clear()
        store.set_rating_locally("1", 2)
        self.assertEqual(seen, [])


if __name__ == "__main__":
    unittest.main()
