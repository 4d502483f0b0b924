"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from discord_spotify_player.application.interfaces.audio_search import (
    AudioSearchBackend,
    FailureSeverity,
    SearchResult,
    SearchStatus,
)
from discord_spotify_player.application.interfaces.catalog_client import (
    CatalogClient,
    CredentialProvider,
)
from discord_spotify_player.application.interfaces.playback_queue import PlaybackQueue
from discord_spotify_player.application.interfaces.progress_sink import ProgressSink

__all__ = [
    "AudioSearchBackend",
    "SearchResult",
    "SearchStatus",
    "FailureSeverity",
    "CatalogClient",
    "CredentialProvider",
    "PlaybackQueue",
    "ProgressSink",
]
