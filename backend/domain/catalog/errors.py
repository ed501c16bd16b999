from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for failures reported by the catalog endpoint or the client core."""

    def __init__(self, message: str = "", *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class NetworkFailure(CatalogError):
    """Transport error, timeout or 5xx. Never retried automatically."""


class AuthenticationRequired(CatalogError):
    """401 from the API; the caller has to log in again."""


class ValidationFailure(CatalogError):
    """4xx carrying a server message, or input rejected before any request."""


class FeatureUnavailable(CatalogError):
    """404 on import-by-title: the backend has no import integration configured."""


class SubmissionInProgress(ValidationFailure):
    """A serialized mutation of the same kind is still outstanding."""


IMPORT_UNAVAILABLE_MESSAGE = (
    "Import from OMDb feature is not available yet. Please add movies manually."
)


def describe_error(exc: BaseException, action: str, *, login_action: Optional[str] = None) -> str:
    """Render the user-facing message for an error raised while doing `action`.

    `action` is the verb phrase of the "Failed to ..." fallback, e.g. "fetch movies".
    `login_action` is only set where a 401 gets its own "Please log in to ..."
    prompt; elsewhere the server's message is shown like any other rejection.
    """
    if login_action and isinstance(exc, AuthenticationRequired):
        return f"Please log in to {login_action}"
    if isinstance(exc, FeatureUnavailable):
        return IMPORT_UNAVAILABLE_MESSAGE
    message = getattr(exc, "message", None) or str(exc)
    return message or f"Failed to {action}"
