from .catalog_session import CatalogSession
from .catalog_store import CatalogStore, FetchStatus
from .dashboard_service import DashboardService, DashboardSnapshot
from .mutation_coordinator import MutationCoordinator
from .recommendation_service import RecommendationService
from .request_arbiter import RequestArbiter
from .search_debouncer import SearchDebouncer

__all__ = [
    "CatalogSession",
    "CatalogStore",
    "DashboardService",
    "DashboardSnapshot",
    "FetchStatus",
    "MutationCoordinator",
    "RecommendationService",
    "RequestArbiter",
    "SearchDebouncer",
]
