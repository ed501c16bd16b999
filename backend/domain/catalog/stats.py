from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from domain.catalog.movie import Movie

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class Stats:
    movies_watched: int = 0
    # One decimal place, "0" when nothing is rated.
    average_rating: str = "0"
    genres_explored: int = 0
    # First distinct genre among rated movies in fetch order, not the most frequent one.
    favorite_genre: str = ""
    last_rated: str = ""


def format_average(total: int, count: int) -> str:
    """One-decimal average, halves rounded away from zero.

    The quotient is rounded from its exact float value, so 2.25 becomes "2.3"
    while 43/20 (stored as 2.1499...) stays "2.1".
    """
    if count <= 0:
        return "0"
    exact = Decimal(total / count)
    return str(exact.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def compute_stats(movies: Iterable[Movie]) -> Stats:
    """Aggregate viewing statistics over whatever collection the caller fetched.

    Pure: the input is only read. Callers currently pass the first catalog
    page, so users with ratings beyond that page are under-counted.
    """
    rated = [m for m in movies if m.user_rating is not None]
    if not rated:
        return Stats()

    genres: list[str] = []
    for movie in rated:
        if movie.genre not in genres:
            genres.append(movie.genre)

    return Stats(
        movies_watched=len(rated),
        average_rating=format_average(sum(int(m.user_rating or 0) for m in rated), len(rated)),
        genres_explored=len(genres),
        favorite_genre=genres[0] if genres else "",
        last_rated=rated[0].title,
    )
