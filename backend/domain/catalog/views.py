from __future__ import annotations

import math
from typing import Iterable, Sequence

from domain.catalog.movie import Movie

ALL_GENRES = "All"


def filter_by_genre(movies: Sequence[Movie], genre: str) -> list[Movie]:
    """Exact, case-sensitive genre projection. "All" keeps every movie."""
    if genre == ALL_GENRES:
        return list(movies)
    return [m for m in movies if m.genre == genre]


def genre_options(movies: Iterable[Movie]) -> list[str]:
    options = [ALL_GENRES]
    for movie in movies:
        if movie.genre not in options:
            options.append(movie.genre)
    return options


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0 or total <= 0:
        return 0
    return math.ceil(total / page_size)


def has_next_page(page: int, total: int, page_size: int) -> bool:
    return page < page_count(total, page_size)


def has_previous_page(page: int) -> bool:
    return page > 1
