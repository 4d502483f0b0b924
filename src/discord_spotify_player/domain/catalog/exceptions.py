"""Exceptions raised while talking to the external catalog."""

from __future__ import annotations

from discord_spotify_player.domain.shared.exceptions import DomainError


class CatalogError(DomainError):
    """Base class for catalog failures. Any of these aborts the whole request."""


class CatalogDisabledError(CatalogError):
    """Client credentials are not configured. Permanent until the bot is reconfigured."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CATALOG_DISABLED")


class CredentialUnavailableError(CatalogError):
    """The token exchange failed for this call. The next call retries."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CREDENTIAL_UNAVAILABLE")


class MalformedCatalogResponseError(CatalogError):
    """A catalog response was missing fields the client relies on."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message, code="CATALOG_MALFORMED")
        self.url = url


class CatalogUnauthorizedError(CatalogError):
    """The catalog rejected the bearer token (HTTP 401)."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message, code="CATALOG_UNAUTHORIZED")
        self.url = url


class CatalogNetworkError(CatalogError):
    """Transport failure or an unexpected HTTP status from the catalog."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message, code="CATALOG_NETWORK")
        self.status_code = status_code
