from __future__ import annotations

from typing import Optional

from application.ports.credential_provider_port import CredentialProviderPort
from infrastructure.config.settings import CATALOG_API_TOKEN


class StaticCredentialProvider(CredentialProviderPort):
    """Holds a token handed over by whatever performed the login."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = (token or "").strip() or None

    def set_token(self, token: Optional[str]) -> None:
        self._token = (token or "").strip() or None

    def clear(self) -> None:
        self._token = None

    def current_token(self) -> Optional[str]:
        return self._token


class EnvCredentialProvider(CredentialProviderPort):
    def __init__(self, token: str = CATALOG_API_TOKEN) -> None:
        self._token = (token or "").strip() or None

    def current_token(self) -> Optional[str]:
        return self._token


class AnonymousCredentialProvider(CredentialProviderPort):
    def current_token(self) -> Optional[str]:
        return None
