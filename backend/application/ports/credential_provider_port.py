from __future__ import annotations

from typing import Optional, Protocol


class CredentialProviderPort(Protocol):
    def current_token(self) -> Optional[str]:
        """Bearer token for the next request, or None when logged out."""
        ...
