from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass
class Movie:
    """A catalog entry as returned by the remote API.

    Only `user_rating` is expected to change after a fetch, and only through
    `CatalogStore.set_rating_locally` once a rating submission was acknowledged.
    """

    id: str
    title: str
    genre: str
    description: str = ""
    release_date: str = ""
    poster_url: Optional[str] = None
    # 1..5, None when the current user has not rated the movie.
    user_rating: Optional[int] = None

    @property
    def is_rated(self) -> bool:
        return self.user_rating is not None


@dataclass(frozen=True)
class NewMovie:
    """Fields accepted by the add-movie submission."""

    title: str
    genre: str
    description: Optional[str] = None
    release_date: Optional[str] = None
    poster_url: Optional[str] = None


@dataclass(frozen=True)
class CatalogPage:
    movies: list[Movie]
    total: int
    page: int
    page_size: int


@dataclass(frozen=True)
class SearchResult:
    """Search hits for a free-text query; `total` counts matches, not the catalog."""

    movies: list[Movie]
    total: int
    query: str
    page_size: int = 0


CatalogView = Union[CatalogPage, SearchResult]


@dataclass(frozen=True)
class RatingActivity:
    movie: str
    rating: Optional[int]
    date: str = ""


@dataclass(frozen=True)
class Recommendation:
    title: str
    genre: str = ""
    description: str = ""
    extra: dict = field(default_factory=dict)
