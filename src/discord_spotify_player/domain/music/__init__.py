"""
Music Bounded Context

Domain logic for tracks, queue management, and the duration policy.
"""

from discord_spotify_player.domain.music.entities import (
    GuildPlaybackSession,
    QueuedTrack,
    RequestMetadata,
    Requester,
    Track,
)
from discord_spotify_player.domain.music.repository import SessionRepository
from discord_spotify_player.domain.music.services import DurationPolicy
from discord_spotify_player.domain.music.value_objects import TrackId

__all__ = [
    # Entities
    "Track",
    "RequestMetadata",
    "QueuedTrack",
    "Requester",
    "GuildPlaybackSession",
    # Value Objects
    "TrackId",
    # Repository
    "SessionRepository",
    # Services
    "DurationPolicy",
]
