"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for services, repositories, adapters, and handlers.
Components are created on-demand and cached for reuse throughout the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    import httpx
    from discord.ext.commands import Bot

    from ..application.commands.play_catalog_url import PlayCatalogUrlHandler
    from ..application.interfaces.audio_search import AudioSearchBackend
    from ..application.services.queue_service import QueueApplicationService
    from ..application.services.resolution_service import BatchResolver, SingleResolver
    from ..domain.catalog.services import CatalogUrlParser
    from ..domain.music.repository import SessionRepository
    from ..domain.music.services import DurationPolicy
    from ..infrastructure.catalog.credential_manager import SpotifyCredentialManager
    from ..infrastructure.catalog.spotify_client import SpotifyCatalogClient
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    This container manages all application dependencies and their lifecycle.
    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # Persistence layer
    _session_repository: SessionRepository | None = None

    # Infrastructure adapters
    _http_client: httpx.AsyncClient | None = None
    _credential_manager: SpotifyCredentialManager | None = None
    _catalog_client: SpotifyCatalogClient | None = None
    _search_backend: AudioSearchBackend | None = None

    # Domain services
    _duration_policy: DurationPolicy | None = None
    _url_parser: CatalogUrlParser | None = None

    # Application services
    _queue_service: QueueApplicationService | None = None
    _single_resolver: SingleResolver | None = None
    _batch_resolver: BatchResolver | None = None

    # Command handlers
    _play_catalog_url_handler: PlayCatalogUrlHandler | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Repositories ===

    @property
    def session_repository(self) -> SessionRepository:
        if self._session_repository is None:
            from ..infrastructure.persistence.session_repository import (
                InMemorySessionRepository,
            )

            self._session_repository = InMemorySessionRepository()
        return self._session_repository

    # === Infrastructure Adapters ===

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Shared HTTP client for the token endpoint and the Web API."""
        if self._http_client is None:
            import httpx

            self._http_client = httpx.AsyncClient(
                timeout=self.settings.spotify.request_timeout_s
            )
        return self._http_client

    @property
    def credential_manager(self) -> SpotifyCredentialManager:
        if self._credential_manager is None:
            from ..infrastructure.catalog.credential_manager import SpotifyCredentialManager

            self._credential_manager = SpotifyCredentialManager(
                self.settings.spotify, http_client=self.http_client
            )
        return self._credential_manager

    @property
    def catalog_client(self) -> SpotifyCatalogClient:
        if self._catalog_client is None:
            from ..infrastructure.catalog.spotify_client import SpotifyCatalogClient

            self._catalog_client = SpotifyCatalogClient(
                self.settings.spotify,
                self.credential_manager,
                http_client=self.http_client,
            )
        return self._catalog_client

    @property
    def search_backend(self) -> AudioSearchBackend:
        """Get the audio-search backend."""
        if self._search_backend is None:
            from ..infrastructure.audio.ytdlp_search import YtDlpSearchBackend

            self._search_backend = YtDlpSearchBackend(self.settings.audio)
        return self._search_backend

    # === Domain Services ===

    @property
    def duration_policy(self) -> DurationPolicy:
        if self._duration_policy is None:
            from ..domain.music.services import DurationPolicy

            self._duration_policy = DurationPolicy(
                max_seconds=self.settings.audio.max_track_seconds
            )
        return self._duration_policy

    @property
    def url_parser(self) -> CatalogUrlParser:
        if self._url_parser is None:
            from ..domain.catalog.services import CatalogUrlParser

            self._url_parser = CatalogUrlParser(self.settings.spotify.catalog_domain)
        return self._url_parser

    # === Application Services ===

    @property
    def queue_service(self) -> QueueApplicationService:
        """Get the queue application service."""
        if self._queue_service is None:
            from ..application.services.queue_service import QueueApplicationService

            self._queue_service = QueueApplicationService(
                session_repository=self.session_repository,
                max_queue_size=self.settings.audio.max_queue_size,
            )
        return self._queue_service

    @property
    def single_resolver(self) -> SingleResolver:
        if self._single_resolver is None:
            from ..application.services.resolution_service import SingleResolver

            self._single_resolver = SingleResolver(
                search_backend=self.search_backend,
                playback_queue=self.queue_service,
                duration_policy=self.duration_policy,
                search_prefix=self.settings.audio.search_prefix,
            )
        return self._single_resolver

    @property
    def batch_resolver(self) -> BatchResolver:
        if self._batch_resolver is None:
            from ..application.services.resolution_service import BatchResolver

            self._batch_resolver = BatchResolver(
                search_backend=self.search_backend,
                playback_queue=self.queue_service,
                duration_policy=self.duration_policy,
                search_prefix=self.settings.audio.search_prefix,
            )
        return self._batch_resolver

    # === Command Handlers ===

    @property
    def play_catalog_url_handler(self) -> PlayCatalogUrlHandler:
        """Get the /spotify command handler."""
        if self._play_catalog_url_handler is None:
            from ..application.commands.play_catalog_url import PlayCatalogUrlHandler

            self._play_catalog_url_handler = PlayCatalogUrlHandler(
                credentials=self.credential_manager,
                catalog_client=self.catalog_client,
                url_parser=self.url_parser,
                single_resolver=self.single_resolver,
                batch_resolver=self.batch_resolver,
            )
        return self._play_catalog_url_handler

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Warm up the catalog token; a failure here only disables the warm start."""
        await self.credential_manager.prime()

    async def shutdown(self) -> None:
        """Close network resources."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
