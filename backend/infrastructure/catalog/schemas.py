from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from domain.catalog import CatalogPage, Movie, NewMovie, RatingActivity, SearchResult


class _WireModel(BaseModel):
    # The API speaks camelCase and may add fields we do not use.
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


class MovieOut(_WireModel):
    id: str = Field(..., validation_alias=AliasChoices("id", "_id", "movieId"))
    title: str
    genre: str = ""
    description: Optional[str] = None
    release_date: Optional[str] = Field(default=None, alias="releaseDate")
    poster_url: Optional[str] = Field(default=None, alias="posterUrl")
    user_rating: Optional[int] = Field(default=None, alias="userRating")

    @field_validator("user_rating", mode="before")
    @classmethod
    def _drop_out_of_range_rating(cls, value):
        # Anything outside 1..5 means "not rated" for this client.
        if value is None or isinstance(value, bool):
            return None
        try:
            score = int(value)
        except (TypeError, ValueError):
            return None
        return score if 1 <= score <= 5 else None

    def to_domain(self) -> Movie:
        return Movie(
            id=self.id,
            title=self.title,
            genre=self.genre,
            description=self.description or "",
            release_date=self.release_date or "",
            poster_url=self.poster_url or None,
            user_rating=self.user_rating,
        )


class MovieListOut(_WireModel):
    movies: list[MovieOut] = Field(default_factory=list)
    total: Optional[int] = None

    def to_page(self, *, page: int, page_size: int) -> CatalogPage:
        movies = [m.to_domain() for m in self.movies]
        total = self.total if self.total is not None else len(movies)
        return CatalogPage(movies=movies, total=total, page=page, page_size=page_size)

    def to_search_result(self, *, query: str) -> SearchResult:
        movies = [m.to_domain() for m in self.movies]
        total = self.total if self.total is not None else len(movies)
        return SearchResult(movies=movies, total=total, query=query, page_size=len(movies))


class RatingActivityOut(_WireModel):
    movie: str
    rating: Optional[int] = None
    date: Optional[str] = None

    def to_domain(self) -> RatingActivity:
        return RatingActivity(movie=self.movie, rating=self.rating, date=self.date or "")


class RateRequest(_WireModel):
    movie_id: str = Field(..., alias="movieId", min_length=1)
    score: int = Field(..., ge=1, le=5)


class AddMovieRequest(_WireModel):
    title: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1)
    description: Optional[str] = None
    release_date: Optional[str] = Field(default=None, alias="releaseDate")
    poster_url: Optional[str] = Field(default=None, alias="posterUrl")

    @classmethod
    def from_domain(cls, movie: NewMovie) -> "AddMovieRequest":
        return cls(
            title=movie.title,
            genre=movie.genre,
            description=movie.description,
            release_date=movie.release_date,
            poster_url=movie.poster_url,
        )


class ImportRequest(_WireModel):
    title: str = Field(..., min_length=1)
