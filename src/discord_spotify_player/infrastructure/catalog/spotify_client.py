"""CatalogClient implementation over the Spotify Web API."""

from __future__ import annotations

import logging
from typing import Any, Final, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from discord_spotify_player.application.interfaces.catalog_client import (
    CatalogClient,
    CredentialProvider,
)
from discord_spotify_player.config.settings import SpotifySettings
from discord_spotify_player.domain.catalog.entities import (
    CatalogItem,
    CatalogReference,
    PlaylistHeader,
)
from discord_spotify_player.domain.catalog.exceptions import (
    CatalogNetworkError,
    CatalogUnauthorizedError,
    MalformedCatalogResponseError,
)
from discord_spotify_player.domain.shared.messages import ErrorMessages, LogTemplates
from discord_spotify_player.infrastructure.catalog.models import (
    PlaylistPagePayload,
    PlaylistPayload,
    TrackPayload,
)

logger = logging.getLogger(__name__)

PLAYLIST_HEADER_FIELDS: Final[str] = "name,tracks.total"

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class SpotifyCatalogClient(CatalogClient):
    """Reads tracks and playlists with a client-credentials bearer token.

    Every request asks the credential provider for a token, so a refresh that
    happens mid-playlist is picked up by the next page.
    """

    def __init__(
        self,
        settings: SpotifySettings,
        credentials: CredentialProvider,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._credentials = credentials
        self._client = http_client or httpx.AsyncClient(timeout=settings.request_timeout_s)
        self._owns_client = http_client is None
        self._base_url = settings.api_base_url.rstrip("/")

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        credential = await self._credentials.get_valid_credential()

        try:
            response = await self._client.get(
                url, params=params, headers={"Authorization": f"Bearer {credential.token}"}
            )
        except httpx.HTTPError as e:
            logger.warning(LogTemplates.CATALOG_REQUEST_FAILED, url, e)
            raise CatalogNetworkError(
                ErrorMessages.CATALOG_TRANSPORT_FAILED.format(detail=e)
            ) from e

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.warning(LogTemplates.CATALOG_REQUEST_FAILED, url, response.status_code)
            raise CatalogUnauthorizedError(ErrorMessages.CATALOG_UNAUTHORIZED.format(url=url), url)

        if not response.is_success:
            logger.warning(LogTemplates.CATALOG_REQUEST_FAILED, url, response.status_code)
            raise CatalogNetworkError(
                ErrorMessages.CATALOG_REQUEST_FAILED.format(status=response.status_code, url=url),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise self._malformed(url, e) from e

        if not isinstance(data, dict):
            raise self._malformed(url, "expected a JSON object")
        return data

    @staticmethod
    def _malformed(url: str, detail: object) -> MalformedCatalogResponseError:
        logger.error(LogTemplates.CATALOG_MALFORMED, url, detail)
        return MalformedCatalogResponseError(
            ErrorMessages.CATALOG_MALFORMED.format(url=url, detail=detail), url
        )

    def _parse(self, model: type[PayloadT], url: str, data: dict[str, Any]) -> PayloadT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise self._malformed(url, e) from e

    async def fetch_item(self, ref: CatalogReference) -> CatalogItem:
        logger.debug(LogTemplates.CATALOG_FETCH_TRACK, ref.id)

        url = f"{self._base_url}/tracks/{ref.id}"
        data = await self._get_json(url)
        return self._parse(TrackPayload, url, data).to_item()

    async def fetch_playlist_header(self, ref: CatalogReference) -> PlaylistHeader:
        logger.debug(LogTemplates.CATALOG_FETCH_PLAYLIST, ref.id)

        url = f"{self._base_url}/playlists/{ref.id}"
        data = await self._get_json(url, params={"fields": PLAYLIST_HEADER_FIELDS})
        return self._parse(PlaylistPayload, url, data).to_header()

    async def fetch_collection(
        self, ref: CatalogReference, header: PlaylistHeader | None = None
    ) -> list[CatalogItem]:
        """Page through a playlist's tracks in order.

        Pages are requested at offsets 0, page_size, 2 * page_size, ... while
        the offset is below the playlist total. Entries without a usable track
        object (removed tracks, podcast episodes) are skipped.
        """
        if header is None:
            header = await self.fetch_playlist_header(ref)

        url = f"{self._base_url}/playlists/{ref.id}/tracks"
        page_size = self._settings.page_size
        items: list[CatalogItem] = []

        for offset in range(0, header.total, page_size):
            logger.debug(LogTemplates.CATALOG_FETCH_PAGE, ref.id, offset, page_size)
            data = await self._get_json(url, params={"offset": offset, "limit": page_size})
            page = self._parse(PlaylistPagePayload, url, data)

            for index, entry in enumerate(page.items, start=offset):
                item = self._entry_to_item(ref, index, entry)
                if item is not None:
                    items.append(item)

        logger.info(LogTemplates.CATALOG_COLLECTION_FETCHED, len(items), header.total, ref.id)
        return items

    @staticmethod
    def _entry_to_item(ref: CatalogReference, index: int, entry: Any) -> CatalogItem | None:
        track = entry.get("track") if isinstance(entry, dict) else None
        if track is None:
            logger.debug(LogTemplates.CATALOG_SKIPPED_ITEM, ref.id, index, "no track")
            return None

        try:
            return TrackPayload.model_validate(track).to_item()
        except PydanticValidationError as e:
            logger.warning(
                LogTemplates.CATALOG_SKIPPED_ITEM, ref.id, index, e.errors()[0].get("msg")
            )
            return None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
            logger.debug(LogTemplates.CATALOG_CLIENT_CLOSED)
