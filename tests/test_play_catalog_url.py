"""Tests for PlayCatalogUrlHandler - the /spotify command flow."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from discord_spotify_player.application.commands.play_catalog_url import (
    PlayCatalogUrlCommand,
    PlayCatalogUrlHandler,
    PlayCatalogUrlStatus,
)
from discord_spotify_player.application.interfaces.audio_search import SearchResult
from discord_spotify_player.application.services.queue_service import QueueApplicationService
from discord_spotify_player.application.services.resolution_service import (
    BatchResolver,
    BatchSummary,
    SingleResolver,
)
from discord_spotify_player.domain.catalog.entities import CatalogItem, PlaylistHeader
from discord_spotify_player.domain.catalog.exceptions import (
    CatalogNetworkError,
    CatalogUnauthorizedError,
    CredentialUnavailableError,
    MalformedCatalogResponseError,
)
from discord_spotify_player.domain.catalog.services import CatalogUrlParser
from discord_spotify_player.domain.music.services import DurationPolicy
from discord_spotify_player.infrastructure.persistence.session_repository import (
    InMemorySessionRepository,
)

from conftest import ScriptedSearchBackend, make_track

GUILD_ID = 123456789
TRACK_URL = "https://open.example.com/track/abc123"
PLAYLIST_URL = "https://open.example.com/playlist/xyz?si=share"


@pytest.fixture
def credentials():
    provider = MagicMock()
    provider.enabled = True
    return provider


@pytest.fixture
def catalog():
    client = MagicMock()
    client.fetch_item = AsyncMock(
        return_value=CatalogItem(title="Song", primary_artist="Artist")
    )
    client.fetch_playlist_header = AsyncMock(return_value=PlaylistHeader(name="Mix", total=3))
    client.fetch_collection = AsyncMock(
        return_value=[
            CatalogItem(title="One", primary_artist="A"),
            CatalogItem(title="Two", primary_artist="B"),
            CatalogItem(title="Three", primary_artist="C"),
        ]
    )
    return client


@pytest.fixture
def backend():
    return ScriptedSearchBackend(
        results={
            "Song Artist": SearchResult.found(make_track(title="Song", duration=200)),
            "One A": SearchResult.found(make_track(title="One")),
            "Two B": SearchResult.empty(),
            "Three C": SearchResult.found(make_track(title="Three")),
        }
    )


@pytest.fixture
def queue_service():
    return QueueApplicationService(
        session_repository=InMemorySessionRepository(), max_queue_size=50
    )


@pytest.fixture
def handler(credentials, catalog, backend, queue_service):
    resolver_args = {
        "search_backend": backend,
        "playback_queue": queue_service,
        "duration_policy": DurationPolicy(max_seconds=0),
    }
    return PlayCatalogUrlHandler(
        credentials=credentials,
        catalog_client=catalog,
        url_parser=CatalogUrlParser("open.example.com"),
        single_resolver=SingleResolver(**resolver_args),
        batch_resolver=BatchResolver(**resolver_args),
    )


def _command(url: str) -> PlayCatalogUrlCommand:
    return PlayCatalogUrlCommand(
        guild_id=GUILD_ID, user_id=222222222, user_name="Listener", url=url
    )


class TestInputValidation:
    @pytest.mark.asyncio
    async def test_missing_url(self, handler, sink, catalog):
        result = await handler.handle(_command("   "), sink)

        assert result.status is PlayCatalogUrlStatus.INVALID_INPUT
        assert sink.messages == ["🚫 Please include a Spotify URL."]
        catalog.fetch_item.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_disabled_is_checked_before_parsing(self, handler, sink, credentials):
        credentials.enabled = False

        result = await handler.handle(_command("not a url"), sink)

        assert result.status is PlayCatalogUrlStatus.DISABLED
        assert sink.messages == [
            "This command is disabled and must be enabled by the bot owner."
        ]

    @pytest.mark.asyncio
    async def test_invalid_url(self, handler, sink, catalog):
        result = await handler.handle(_command("https://example.com/foo"), sink)

        assert result.status is PlayCatalogUrlStatus.INVALID_INPUT
        assert sink.messages == [
            "Error: The specified URL is not a valid Spotify track or playlist URL"
        ]
        catalog.fetch_item.assert_not_awaited()
        catalog.fetch_playlist_header.assert_not_awaited()

    def test_command_strips_url(self):
        assert _command(f"  {TRACK_URL}\n").url == TRACK_URL


class TestTrackUrl:
    @pytest.mark.asyncio
    async def test_track_is_resolved_and_queued(self, handler, sink, backend, queue_service):
        result = await handler.handle(_command(TRACK_URL), sink)

        assert result.status is PlayCatalogUrlStatus.ADDED
        assert result.is_success
        assert backend.queries == ["ytsearch:Song Artist"]
        assert sink.messages == [
            "Loading: Song Artist",
            "🎶 **Song** (3:20) has been added.",
        ]
        info = await queue_service.get_queue(GUILD_ID)
        assert info.current is not None
        assert info.current.request.user_name == "Listener"

    @pytest.mark.asyncio
    async def test_not_found(self, handler, sink, catalog):
        catalog.fetch_item.return_value = CatalogItem(title="Obscure", primary_artist="Nobody")

        result = await handler.handle(_command(TRACK_URL), sink)

        assert result.status is PlayCatalogUrlStatus.NOT_FOUND
        assert sink.last == "💡 No matches found."


class TestPlaylistUrl:
    @pytest.mark.asyncio
    async def test_playlist_summary(self, handler, sink, catalog, queue_service):
        result = await handler.handle(_command(PLAYLIST_URL), sink)

        assert result.status is PlayCatalogUrlStatus.PLAYLIST_LOADED
        assert result.summary == BatchSummary(success_count=2, fail_count=1)
        assert sink.messages == [
            "Loading playlist: Mix (3 tracks)",
            "Playlist loaded: 2 tracks added successfully, 1 failed to load.",
        ]
        header = catalog.fetch_playlist_header.return_value
        catalog.fetch_collection.assert_awaited_once()
        assert catalog.fetch_collection.await_args.args[1] == header

        info = await queue_service.get_queue(GUILD_ID)
        assert info.total_tracks == 2

    @pytest.mark.asyncio
    async def test_empty_playlist(self, handler, sink, catalog):
        catalog.fetch_playlist_header.return_value = PlaylistHeader(name="Empty", total=0)
        catalog.fetch_collection.return_value = []

        result = await handler.handle(_command(PLAYLIST_URL), sink)

        assert result.summary == BatchSummary()
        assert sink.last == "Playlist loaded: 0 tracks added successfully, 0 failed to load."


class TestCatalogFailures:
    """Any catalog failure aborts before anything is queued."""

    @pytest.mark.asyncio
    async def test_unauthorized_page_queues_nothing(self, handler, sink, catalog, queue_service):
        catalog.fetch_collection.side_effect = CatalogUnauthorizedError("401", "url")

        result = await handler.handle(_command(PLAYLIST_URL), sink)

        assert result.status is PlayCatalogUrlStatus.CATALOG_ERROR
        assert sink.last == "Error: Spotify rejected the access token. Try again in a moment."
        info = await queue_service.get_queue(GUILD_ID)
        assert info.total_tracks == 0

    @pytest.mark.asyncio
    async def test_malformed(self, handler, sink, catalog):
        catalog.fetch_item.side_effect = MalformedCatalogResponseError("bad", "url")

        result = await handler.handle(_command(TRACK_URL), sink)

        assert result.status is PlayCatalogUrlStatus.CATALOG_ERROR
        assert sink.messages == ["Error: Spotify returned an unexpected response."]

    @pytest.mark.asyncio
    async def test_network_error_shows_detail(self, handler, sink, catalog):
        catalog.fetch_item.side_effect = CatalogNetworkError(
            "Spotify request failed with status 503 (url)", status_code=503
        )

        await handler.handle(_command(TRACK_URL), sink)

        assert sink.last == "Error: Spotify request failed with status 503 (url)"

    @pytest.mark.asyncio
    async def test_credential_unavailable(self, handler, sink, catalog, backend):
        catalog.fetch_playlist_header.side_effect = CredentialUnavailableError("token failed")

        result = await handler.handle(_command(PLAYLIST_URL), sink)

        assert result.status is PlayCatalogUrlStatus.CREDENTIAL_UNAVAILABLE
        assert not result.is_success
        assert backend.queries == []
        assert len(sink.messages) == 1
