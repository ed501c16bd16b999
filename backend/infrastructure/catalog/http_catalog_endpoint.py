"""
aiohttp client for the remote movie catalog API.

Maps HTTP outcomes onto the catalog error taxonomy so the application layer
never sees transport details:

- transport errors, timeouts, 5xx and undecodable bodies -> NetworkFailure
- 401 -> AuthenticationRequired
- 404 on import-from-omdb -> FeatureUnavailable
- any other 4xx -> ValidationFailure carrying the server message verbatim
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional
from urllib.parse import urljoin

import aiohttp
from pydantic import ValidationError

from application.ports.catalog_endpoint_port import CatalogEndpointPort
from application.ports.credential_provider_port import CredentialProviderPort
from domain.catalog import (
    AuthenticationRequired,
    CatalogError,
    CatalogPage,
    FeatureUnavailable,
    Movie,
    NetworkFailure,
    NewMovie,
    RatingActivity,
    SearchResult,
    ValidationFailure,
)
from infrastructure.catalog.credentials import AnonymousCredentialProvider
from infrastructure.catalog.schemas import (
    AddMovieRequest,
    ImportRequest,
    MovieListOut,
    MovieOut,
    RateRequest,
    RatingActivityOut,
)
from infrastructure.config.settings import (
    CATALOG_API_BASE_URL,
    CATALOG_HTTP_TIMEOUT_S,
    CATALOG_LOG_PAYLOADS,
)
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)

MOVIES_PATH = "movies"
SEARCH_PATH = "movies/search"
RATE_PATH = "movies/rate"
ADD_PATH = "movies/add"
IMPORT_PATH = "movies/import-from-omdb"
RECENT_ACTIVITY_PATH = "movies/recent-activity"
AI_RECOMMENDATIONS_PATH = "movies/recommendations/ai"


def _join(base: str, path: str) -> str:
    base = (base or "").rstrip("/") + "/"
    path = (path or "").lstrip("/")
    return urljoin(base, path)


def _server_message(body: str) -> str:
    """Pull the human-readable message out of an error body (JSON or plain text)."""
    text = (body or "").strip()
    if not text:
        return ""
    try:
        data = json.loads(text)
    except ValueError:
        return text[:200]
    if isinstance(data, dict):
        for key in ("error", "message", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return text[:200]


def error_for_status(status: int, body: str, *, operation: str) -> CatalogError:
    message = _server_message(body)
    if status == 401:
        return AuthenticationRequired(message or "Authentication required", status=status)
    if status == 404 and operation == "import":
        return FeatureUnavailable(message or "Import is not available", status=status)
    if status >= 500:
        return NetworkFailure(message or f"Server error ({status})", status=status)
    return ValidationFailure(message or f"Request rejected ({status})", status=status)


class HttpCatalogEndpoint(CatalogEndpointPort):
    """Stateless catalog API client; one lazily created aiohttp session per instance."""

    def __init__(
        self,
        *,
        base_url: str = CATALOG_API_BASE_URL,
        credentials: Optional[CredentialProviderPort] = None,
        timeout_s: float = CATALOG_HTTP_TIMEOUT_S,
        log_payloads: bool = CATALOG_LOG_PAYLOADS,
    ) -> None:
        self._base_url = (base_url or "").strip()
        if not self._base_url:
            raise ValueError("CATALOG_API_BASE_URL is not set and no base_url passed")
        self._credentials = credentials or AnonymousCredentialProvider()
        self._timeout_s = float(timeout_s or 10.0)
        self._log_payloads = bool(log_payloads)
        self._session: aiohttp.ClientSession | None = None
        self._lock = asyncio.Lock()

    def _headers(self) -> dict[str, str]:
        headers = {"content-type": "application/json"}
        token = self._credentials.current_token()
        if token:
            headers["authorization"] = f"Bearer {token}"
        return headers

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is not None and not self._session.closed:
            return self._session

        async with self._lock:
            # Another coroutine may have created the session while we waited.
            if self._session is not None and not self._session.closed:
                return self._session
            timeout = aiohttp.ClientTimeout(total=self._timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout)
            return self._session

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        params: Optional[dict[str, str]] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> Any:
        session = await self._get_session()
        url = _join(self._base_url, path)
        try:
            async with session.request(method, url, params=params, json=payload, headers=self._headers()) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise error_for_status(resp.status, body, operation=operation)
                data = await resp.json(content_type=None)
        except CatalogError as exc:
            logger.warning(
                format_kv(event="catalog_http_error", operation=operation, status=exc.status, detail=exc.message)
            )
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning(format_kv(event="catalog_http_unreachable", operation=operation, error=type(exc).__name__))
            raise NetworkFailure(str(exc) or "Network error") from exc
        except ValueError as exc:
            raise NetworkFailure(f"Malformed response from {operation}") from exc

        if self._log_payloads:
            logger.debug(format_kv(event="catalog_http_payload", operation=operation, payload=data))
        return data

    @staticmethod
    def _parse(model, data: Any, *, operation: str):
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise NetworkFailure(f"Unexpected response shape from {operation}") from exc

    @staticmethod
    def _as_movie_list(data: Any) -> Any:
        # Some deployments return a bare array instead of {movies, total}.
        if isinstance(data, list):
            return {"movies": data, "total": len(data)}
        return data if data is not None else {}

    def _as_movie(self, data: Any, *, operation: str) -> Optional[Movie]:
        if isinstance(data, dict) and isinstance(data.get("movie"), dict):
            data = data["movie"]
        if not isinstance(data, dict) or "title" not in data:
            return None
        return self._parse(MovieOut, data, operation=operation).to_domain()

    async def fetch_page(self, *, page: int, page_size: int) -> CatalogPage:
        data = await self._request(
            "GET",
            MOVIES_PATH,
            operation="fetch_page",
            params={"page": str(int(page)), "pageSize": str(int(page_size))},
        )
        parsed = self._parse(MovieListOut, self._as_movie_list(data), operation="fetch_page")
        return parsed.to_page(page=page, page_size=page_size)

    async def fetch_by_query(self, *, query: str) -> SearchResult:
        data = await self._request("GET", SEARCH_PATH, operation="search", params={"q": query})
        parsed = self._parse(MovieListOut, self._as_movie_list(data), operation="search")
        return parsed.to_search_result(query=query)

    async def submit_rating(self, *, movie_id: str, score: int) -> None:
        try:
            body = RateRequest(movie_id=movie_id, score=score)
        except ValidationError as exc:
            raise ValidationFailure("Rating must be a whole number from 1 to 5") from exc
        await self._request("POST", RATE_PATH, operation="rate", payload=body.model_dump(by_alias=True))

    async def add_movie(self, *, movie: NewMovie) -> Optional[Movie]:
        try:
            body = AddMovieRequest.from_domain(movie)
        except ValidationError as exc:
            raise ValidationFailure("Title and genre are required") from exc
        data = await self._request(
            "POST",
            ADD_PATH,
            operation="add",
            payload=body.model_dump(by_alias=True, exclude_none=True),
        )
        return self._as_movie(data, operation="add")

    async def import_by_title(self, *, title: str) -> Optional[Movie]:
        try:
            body = ImportRequest(title=title)
        except ValidationError as exc:
            raise ValidationFailure("Title is required") from exc
        data = await self._request("POST", IMPORT_PATH, operation="import", payload=body.model_dump())
        return self._as_movie(data, operation="import")

    async def recent_activity(self) -> list[RatingActivity]:
        data = await self._request("GET", RECENT_ACTIVITY_PATH, operation="recent_activity")
        if not isinstance(data, list):
            raise NetworkFailure("Unexpected response shape from recent_activity")
        return [self._parse(RatingActivityOut, row, operation="recent_activity").to_domain() for row in data]

    async def ai_recommendations(self) -> list[Any]:
        data = await self._request("GET", AI_RECOMMENDATIONS_PATH, operation="recommendations")
        if isinstance(data, dict):
            data = data.get("recommendations") or []
        return list(data) if isinstance(data, list) else []

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
