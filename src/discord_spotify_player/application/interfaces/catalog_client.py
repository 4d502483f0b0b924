"""Port interfaces for the external music catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod

from discord_spotify_player.domain.catalog.entities import (
    AccessCredential,
    CatalogItem,
    CatalogReference,
    PlaylistHeader,
)


class CredentialProvider(ABC):
    """Supplies a valid catalog access credential."""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """False when no client credentials are configured."""
        ...

    @abstractmethod
    async def get_valid_credential(self) -> AccessCredential:
        """Return a credential that has not expired, refreshing it if needed.

        Raises:
            CatalogDisabledError: If credentials are not configured.
            CredentialUnavailableError: If the token exchange failed.
        """
        ...


class CatalogClient(ABC):
    """Interface for fetching tracks and playlists from the catalog."""

    @abstractmethod
    async def fetch_item(self, ref: CatalogReference) -> CatalogItem:
        """Fetch a single track."""
        ...

    @abstractmethod
    async def fetch_playlist_header(self, ref: CatalogReference) -> PlaylistHeader:
        """Fetch a playlist's name and track count."""
        ...

    @abstractmethod
    async def fetch_collection(
        self, ref: CatalogReference, header: PlaylistHeader | None = None
    ) -> list[CatalogItem]:
        """Fetch every track of a playlist, page by page.

        Any failure on any page aborts the fetch; partial lists are never returned.
        """
        ...
