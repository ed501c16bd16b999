from __future__ import annotations

from domain.catalog.errors import (  # noqa: F401
    AuthenticationRequired,
    CatalogError,
    FeatureUnavailable,
    NetworkFailure,
    SubmissionInProgress,
    ValidationFailure,
    describe_error,
)
from domain.catalog.movie import (  # noqa: F401
    CatalogPage,
    CatalogView,
    Movie,
    NewMovie,
    RatingActivity,
    Recommendation,
    SearchResult,
)
from domain.catalog.requests import FetchKind, PendingRequest  # noqa: F401
from domain.catalog.stats import Stats, compute_stats  # noqa: F401
from domain.catalog.views import ALL_GENRES, filter_by_genre, genre_options, page_count  # noqa: F401

__all__ = [
    "ALL_GENRES",
    "AuthenticationRequired",
    "CatalogError",
    "CatalogPage",
    "CatalogView",
    "FeatureUnavailable",
    "FetchKind",
    "Movie",
    "NetworkFailure",
    "NewMovie",
    "PendingRequest",
    "RatingActivity",
    "Recommendation",
    "SearchResult",
    "Stats",
    "SubmissionInProgress",
    "ValidationFailure",
    "compute_stats",
    "describe_error",
    "filter_by_genre",
    "genre_options",
    "page_count",
]
