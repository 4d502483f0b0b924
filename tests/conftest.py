import asyncio
from datetime import UTC, datetime, timedelta

import httpx
import pytest
from pydantic import SecretStr

from discord_spotify_player.application.interfaces.audio_search import (
    AudioSearchBackend,
    SearchResult,
)
from discord_spotify_player.application.interfaces.progress_sink import ProgressSink
from discord_spotify_player.config.settings import SpotifySettings
from discord_spotify_player.domain.music.entities import Requester, Track
from discord_spotify_player.domain.music.value_objects import TrackId

# ============================================================================
# Test Doubles
# ============================================================================


class RecordingSink(ProgressSink):
    """ProgressSink that remembers every update."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    async def send(self, content: str) -> None:
        self.messages.append(content)

    @property
    def last(self) -> str | None:
        return self.messages[-1] if self.messages else None


class ScriptedSearchBackend(AudioSearchBackend):
    """Returns canned results per query text, optionally after a delay."""

    def __init__(
        self,
        results: dict[str, SearchResult] | None = None,
        delays: dict[str, float] | None = None,
        default: SearchResult | None = None,
    ) -> None:
        self.results = results or {}
        self.delays = delays or {}
        self.default = default or SearchResult.empty()
        self.queries: list[str] = []

    async def search(self, query: str) -> SearchResult:
        self.queries.append(query)
        text = query.split(":", 1)[1] if ":" in query else query
        delay = self.delays.get(text)
        if delay:
            await asyncio.sleep(delay)
        return self.results.get(text, self.default)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


def make_track(
    title: str = "Test Track",
    duration: int | None = 180,
    video_id: str = "dQw4w9WgXcQ",
) -> Track:
    return Track(
        id=TrackId(video_id),
        title=title,
        webpage_url=f"https://www.youtube.com/watch?v={video_id}",
        stream_url="https://stream.example.com/audio.m4a",
        duration_seconds=duration,
        artist="Test Artist",
        uploader="Test Uploader",
    )


@pytest.fixture
def sample_track():
    """Create a sample track for testing."""
    return make_track()


@pytest.fixture
def requester():
    return Requester(user_id=111111111, user_name="Listener")


@pytest.fixture
def sink():
    return RecordingSink()


# ============================================================================
# Spotify Fixtures
# ============================================================================


@pytest.fixture
def spotify_settings():
    return SpotifySettings(
        client_id=SecretStr("client-id"),
        client_secret=SecretStr("client-secret"),
        api_base_url="https://api.example.com/v1",
        auth_url="https://accounts.example.com/api/token",
    )


@pytest.fixture
def clock():
    return FakeClock()


def mock_http_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
