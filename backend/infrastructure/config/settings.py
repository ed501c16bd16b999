import os
from typing import Optional

from dotenv import load_dotenv

# The project-root .env is the primary development config source and wins over
# values already exported in the shell.
load_dotenv(override=True)


def _get_env_int(key: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer, got {raw!r}") from exc


def _get_env_float(key: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be a number, got {raw!r}") from exc


def _get_env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    return raw.lower() in {"1", "true", "yes", "y", "on"}


# ===== Remote catalog API =====

CATALOG_API_BASE_URL = os.getenv("CATALOG_API_BASE_URL", "http://localhost:4000/api").strip()
# Used by EnvCredentialProvider only; interactive clients inject their own provider.
CATALOG_API_TOKEN = os.getenv("CATALOG_API_TOKEN", "").strip()
CATALOG_HTTP_TIMEOUT_S = _get_env_float("CATALOG_HTTP_TIMEOUT_S", 10.0) or 10.0
CATALOG_LOG_PAYLOADS = _get_env_bool("CATALOG_LOG_PAYLOADS", False)

# ===== Browsing behaviour =====

CATALOG_PAGE_SIZE = _get_env_int("CATALOG_PAGE_SIZE", 50) or 50
CATALOG_SEARCH_DEBOUNCE_S = _get_env_float("CATALOG_SEARCH_DEBOUNCE_S", 0.4)
if CATALOG_SEARCH_DEBOUNCE_S is None or CATALOG_SEARCH_DEBOUNCE_S < 0:
    raise ValueError(f"CATALOG_SEARCH_DEBOUNCE_S must be >= 0, got {CATALOG_SEARCH_DEBOUNCE_S}")

# ===== Dashboard =====

CATALOG_STATS_PAGE_SIZE = _get_env_int("CATALOG_STATS_PAGE_SIZE", 50) or 50
CATALOG_RECENT_ACTIVITY_LIMIT = _get_env_int("CATALOG_RECENT_ACTIVITY_LIMIT", 5) or 5
