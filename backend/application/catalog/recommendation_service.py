from __future__ import annotations

import logging
from typing import Any, Iterable

from application.ports.catalog_endpoint_port import CatalogEndpointPort
from domain.catalog import Recommendation
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)


def normalize_recommendations(entries: Iterable[Any]) -> list[Recommendation]:
    """Accept plain title strings or objects with a string `title`; skip anything else."""
    out: list[Recommendation] = []
    for raw in entries or []:
        if isinstance(raw, str):
            title = raw.strip()
            if title:
                out.append(Recommendation(title=title))
            continue
        if not isinstance(raw, dict):
            continue
        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            continue
        genre = raw.get("genre")
        description = raw.get("description")
        extra = {k: v for k, v in raw.items() if k not in ("title", "genre", "description")}
        out.append(
            Recommendation(
                title=title.strip(),
                genre=genre if isinstance(genre, str) else "",
                description=description if isinstance(description, str) else "",
                extra=extra,
            )
        )
    return out


class RecommendationService:
    """Reads server-generated recommendations. Nothing is ranked locally."""

    def __init__(self, *, endpoint: CatalogEndpointPort) -> None:
        self._endpoint = endpoint

    async def fetch_ai_recommendations(self) -> list[Recommendation]:
        raw = await self._endpoint.ai_recommendations()
        recs = normalize_recommendations(raw)
        logger.info(format_kv(event="recommendations_loaded", received=len(raw or []), kept=len(recs)))
        return recs
