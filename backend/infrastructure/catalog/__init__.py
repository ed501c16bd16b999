from .credentials import AnonymousCredentialProvider, EnvCredentialProvider, StaticCredentialProvider
from .factory import (
    create_catalog_endpoint,
    create_catalog_session,
    create_dashboard_service,
    create_recommendation_service,
)
from .http_catalog_endpoint import HttpCatalogEndpoint

__all__ = [
    "AnonymousCredentialProvider",
    "EnvCredentialProvider",
    "HttpCatalogEndpoint",
    "StaticCredentialProvider",
    "create_catalog_endpoint",
    "create_catalog_session",
    "create_dashboard_service",
    "create_recommendation_service",
]
