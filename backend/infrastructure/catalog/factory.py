"""Builders that wire application services to the HTTP adapter using settings."""

from __future__ import annotations

import logging
from typing import Optional

from application.catalog import CatalogSession, DashboardService, RecommendationService
from application.ports.catalog_endpoint_port import CatalogEndpointPort
from application.ports.credential_provider_port import CredentialProviderPort
from application.ports.scheduler_port import SchedulerPort
from infrastructure.catalog.credentials import EnvCredentialProvider
from infrastructure.catalog.http_catalog_endpoint import HttpCatalogEndpoint
from infrastructure.config.settings import (
    CATALOG_API_BASE_URL,
    CATALOG_HTTP_TIMEOUT_S,
    CATALOG_PAGE_SIZE,
    CATALOG_RECENT_ACTIVITY_LIMIT,
    CATALOG_SEARCH_DEBOUNCE_S,
    CATALOG_STATS_PAGE_SIZE,
)
from infrastructure.timing import AsyncioScheduler
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)


def create_catalog_endpoint(
    credentials: Optional[CredentialProviderPort] = None,
    *,
    base_url: Optional[str] = None,
) -> HttpCatalogEndpoint:
    """Create the HTTP endpoint; without explicit credentials the env token is used."""
    url = base_url or CATALOG_API_BASE_URL
    logger.info(format_kv(event="catalog_endpoint_created", base_url=url, timeout_s=CATALOG_HTTP_TIMEOUT_S))
    return HttpCatalogEndpoint(
        base_url=url,
        credentials=credentials or EnvCredentialProvider(),
        timeout_s=CATALOG_HTTP_TIMEOUT_S,
    )


def create_catalog_session(
    *,
    endpoint: Optional[CatalogEndpointPort] = None,
    credentials: Optional[CredentialProviderPort] = None,
    scheduler: Optional[SchedulerPort] = None,
) -> CatalogSession:
    """Create a browsing session. The session closes the endpoint only if it built it."""
    owns_endpoint = endpoint is None
    return CatalogSession(
        endpoint=endpoint or create_catalog_endpoint(credentials),
        scheduler=scheduler or AsyncioScheduler(),
        page_size=CATALOG_PAGE_SIZE,
        search_debounce_s=CATALOG_SEARCH_DEBOUNCE_S,
        owns_endpoint=owns_endpoint,
    )


def create_dashboard_service(endpoint: CatalogEndpointPort) -> DashboardService:
    return DashboardService(
        endpoint=endpoint,
        stats_page_size=CATALOG_STATS_PAGE_SIZE,
        recent_limit=CATALOG_RECENT_ACTIVITY_LIMIT,
    )


def create_recommendation_service(endpoint: CatalogEndpointPort) -> RecommendationService:
    return RecommendationService(endpoint=endpoint)
