"""Command and handler for queueing a Spotify track or playlist by URL."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, field_validator

from discord_spotify_player.domain.catalog.entities import CatalogReference
from discord_spotify_player.domain.catalog.exceptions import (
    CatalogDisabledError,
    CatalogError,
    CatalogUnauthorizedError,
    CredentialUnavailableError,
    MalformedCatalogResponseError,
)
from discord_spotify_player.domain.catalog.services import CatalogUrlParser, build_query
from discord_spotify_player.domain.music.entities import Requester
from discord_spotify_player.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_spotify_player.domain.shared.types import DiscordSnowflake, NonEmptyStr

from ..services.resolution_service import BatchSummary, LoadOutcome, LoadStatus

if TYPE_CHECKING:
    from ..interfaces.catalog_client import CatalogClient, CredentialProvider
    from ..interfaces.progress_sink import ProgressSink
    from ..services.resolution_service import BatchResolver, SingleResolver

logger = logging.getLogger(__name__)


class PlayCatalogUrlStatus(Enum):
    """Status codes for play catalog URL results."""

    ADDED = "added"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    LOAD_ERROR = "load_error"
    PLAYLIST_LOADED = "playlist_loaded"
    INVALID_INPUT = "invalid_input"
    DISABLED = "disabled"
    CREDENTIAL_UNAVAILABLE = "credential_unavailable"
    CATALOG_ERROR = "catalog_error"


_OUTCOME_STATUS = {
    LoadStatus.ADDED: PlayCatalogUrlStatus.ADDED,
    LoadStatus.REJECTED: PlayCatalogUrlStatus.REJECTED,
    LoadStatus.NOT_FOUND: PlayCatalogUrlStatus.NOT_FOUND,
    LoadStatus.LOAD_ERROR: PlayCatalogUrlStatus.LOAD_ERROR,
}


class PlayCatalogUrlCommand(BaseModel):
    """Request to resolve a catalog URL and queue what it points to."""

    model_config = ConfigDict(frozen=True, strict=True)

    guild_id: DiscordSnowflake
    user_id: DiscordSnowflake
    user_name: NonEmptyStr
    url: str

    @field_validator("url", mode="before")
    @classmethod
    def _strip_url(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def requester(self) -> Requester:
        return Requester(user_id=self.user_id, user_name=self.user_name)


class PlayCatalogUrlResult(BaseModel):
    """Result of a play catalog URL command; ``message`` is the last text shown."""

    model_config = ConfigDict(frozen=True)

    status: PlayCatalogUrlStatus
    message: str
    outcome: LoadOutcome | None = None
    summary: BatchSummary | None = None

    @property
    def is_success(self) -> bool:
        return self.status in {PlayCatalogUrlStatus.ADDED, PlayCatalogUrlStatus.PLAYLIST_LOADED}

    @classmethod
    def error(cls, status: PlayCatalogUrlStatus, message: str) -> PlayCatalogUrlResult:
        return cls(status=status, message=message)


def catalog_error_message(error: CatalogError) -> str:
    """Single user-facing line for a failure that aborted the whole request."""
    if isinstance(error, CatalogUnauthorizedError):
        return DiscordUIMessages.SPOTIFY_UNAUTHORIZED
    if isinstance(error, MalformedCatalogResponseError):
        return DiscordUIMessages.SPOTIFY_MALFORMED
    if isinstance(error, CredentialUnavailableError):
        return DiscordUIMessages.SPOTIFY_CREDENTIAL_UNAVAILABLE
    if isinstance(error, CatalogDisabledError):
        return DiscordUIMessages.SPOTIFY_DISABLED
    return DiscordUIMessages.SPOTIFY_NETWORK_ERROR.format(detail=error.message)


def _catalog_error_status(error: CatalogError) -> PlayCatalogUrlStatus:
    if isinstance(error, CredentialUnavailableError):
        return PlayCatalogUrlStatus.CREDENTIAL_UNAVAILABLE
    if isinstance(error, CatalogDisabledError):
        return PlayCatalogUrlStatus.DISABLED
    return PlayCatalogUrlStatus.CATALOG_ERROR


class PlayCatalogUrlHandler:
    """Parses the URL, reads the catalog, and hands queries to the resolvers.

    Every path ends with exactly one final message sent through the sink.
    Catalog failures abort the request before anything is queued.
    """

    def __init__(
        self,
        *,
        credentials: CredentialProvider,
        catalog_client: CatalogClient,
        url_parser: CatalogUrlParser,
        single_resolver: SingleResolver,
        batch_resolver: BatchResolver,
    ) -> None:
        self._credentials = credentials
        self._catalog = catalog_client
        self._parser = url_parser
        self._single = single_resolver
        self._batch = batch_resolver

    async def handle(
        self, command: PlayCatalogUrlCommand, sink: ProgressSink
    ) -> PlayCatalogUrlResult:
        result = await self._dispatch(command, sink)
        # Resolvers report their own final text; everything else is sent here
        if result.outcome is None:
            await sink.send(result.message)
        return result

    async def _dispatch(
        self, command: PlayCatalogUrlCommand, sink: ProgressSink
    ) -> PlayCatalogUrlResult:
        if not command.url:
            return PlayCatalogUrlResult.error(
                PlayCatalogUrlStatus.INVALID_INPUT, DiscordUIMessages.SPOTIFY_MISSING_URL
            )

        if not self._credentials.enabled:
            return PlayCatalogUrlResult.error(
                PlayCatalogUrlStatus.DISABLED, DiscordUIMessages.SPOTIFY_DISABLED
            )

        ref = self._parser.parse(command.url)
        if ref is None:
            return PlayCatalogUrlResult.error(
                PlayCatalogUrlStatus.INVALID_INPUT, DiscordUIMessages.SPOTIFY_INVALID_URL
            )

        try:
            if ref.is_track:
                return await self._play_track(command, ref, sink)
            return await self._play_playlist(command, ref, sink)
        except CatalogError as e:
            logger.warning(LogTemplates.COMMAND_CATALOG_FAILED, command.url, e.message)
            return PlayCatalogUrlResult.error(_catalog_error_status(e), catalog_error_message(e))

    async def _play_track(
        self, command: PlayCatalogUrlCommand, ref: CatalogReference, sink: ProgressSink
    ) -> PlayCatalogUrlResult:
        item = await self._catalog.fetch_item(ref)
        outcome = await self._single.resolve_one(
            command.guild_id, build_query(item), command.requester, sink
        )
        return PlayCatalogUrlResult(
            status=_OUTCOME_STATUS[outcome.status],
            message=self._single.describe(outcome),
            outcome=outcome,
        )

    async def _play_playlist(
        self, command: PlayCatalogUrlCommand, ref: CatalogReference, sink: ProgressSink
    ) -> PlayCatalogUrlResult:
        header = await self._catalog.fetch_playlist_header(ref)
        await sink.send(
            DiscordUIMessages.LOADING_PLAYLIST.format(name=header.name, total=header.total)
        )

        items = await self._catalog.fetch_collection(ref, header)
        summary = await self._batch.resolve_batch(
            command.guild_id, [build_query(item) for item in items], command.requester
        )
        return PlayCatalogUrlResult(
            status=PlayCatalogUrlStatus.PLAYLIST_LOADED,
            message=DiscordUIMessages.PLAYLIST_SUMMARY.format(
                success=summary.success_count, failed=summary.fail_count
            ),
            summary=summary,
        )
