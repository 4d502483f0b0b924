"""
Unit Tests for Dependency Injection Container

Tests for:
- Bot instance management (set_bot, bot property, error when not set)
- Lazy initialization and caching of adapters, services and handlers
- Settings flowing into the components they configure
- Lifecycle methods (initialize, shutdown)
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from pydantic import SecretStr

from discord_spotify_player.application.commands.play_catalog_url import PlayCatalogUrlHandler
from discord_spotify_player.application.services.resolution_service import (
    BatchResolver,
    SingleResolver,
)
from discord_spotify_player.config.container import Container, create_container
from discord_spotify_player.config.settings import AudioSettings, Settings, SpotifySettings
from discord_spotify_player.domain.catalog.entities import CatalogKind
from discord_spotify_player.infrastructure.catalog.credential_manager import (
    SpotifyCredentialManager,
)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        audio=AudioSettings(max_queue_size=5, max_track_seconds=600),
        spotify=SpotifySettings(
            client_id=SecretStr("id"),
            client_secret=SecretStr("secret"),
            catalog_domain="open.example.com",
            request_timeout_s=7.5,
        ),
    )


@pytest.fixture
def container(settings):
    return create_container(settings)


class TestBotManagement:
    def test_get_bot_when_not_set_raises_error(self, container):
        with pytest.raises(RuntimeError, match="Bot not initialized"):
            _ = container.bot

    def test_set_bot(self, container):
        bot = MagicMock()
        container.set_bot(bot)
        assert container.bot is bot


class TestLazyComponents:
    def test_factory_returns_container(self, container, settings):
        assert isinstance(container, Container)
        assert container.settings is settings

    def test_components_are_cached(self, container):
        assert container.queue_service is container.queue_service
        assert container.credential_manager is container.credential_manager
        assert container.play_catalog_url_handler is container.play_catalog_url_handler

    def test_http_client_uses_configured_timeout(self, container):
        client = container.http_client
        assert isinstance(client, httpx.AsyncClient)
        assert client.timeout.read == 7.5

    def test_credential_manager_enabled(self, container):
        assert isinstance(container.credential_manager, SpotifyCredentialManager)
        assert container.credential_manager.enabled

    def test_duration_policy_from_audio_settings(self, container):
        assert container.duration_policy.max_seconds == 600

    def test_url_parser_uses_catalog_domain(self, container):
        ref = container.url_parser.parse("https://open.example.com/track/abc")
        assert ref is not None
        assert ref.kind is CatalogKind.TRACK

    def test_resolvers_share_queue_and_backend(self, container):
        assert isinstance(container.single_resolver, SingleResolver)
        assert isinstance(container.batch_resolver, BatchResolver)
        assert container.single_resolver.duration_policy is container.duration_policy
        assert container.batch_resolver.duration_policy is container.duration_policy

    def test_handler(self, container):
        assert isinstance(container.play_catalog_url_handler, PlayCatalogUrlHandler)


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_initialize_primes_credentials(self, container):
        with patch.object(
            SpotifyCredentialManager, "prime", new_callable=AsyncMock
        ) as mock_prime:
            await container.initialize()

        mock_prime.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_closes_http_client(self, container):
        client = container.http_client

        await container.shutdown()

        assert client.is_closed
        assert container.http_client is not client
        await container.shutdown()

    @pytest.mark.asyncio
    async def test_shutdown_without_client(self, container):
        await container.shutdown()
