from __future__ import annotations

from application.ports.catalog_endpoint_port import CatalogEndpointPort  # noqa: F401
from application.ports.credential_provider_port import CredentialProviderPort  # noqa: F401
from application.ports.scheduler_port import SchedulerPort, TimerHandle  # noqa: F401

__all__ = [
    "CatalogEndpointPort",
    "CredentialProviderPort",
    "SchedulerPort",
    "TimerHandle",
]
