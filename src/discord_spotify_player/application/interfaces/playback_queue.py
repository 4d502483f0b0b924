"""Port interface for the per-guild playback queue."""

from __future__ import annotations

from abc import ABC, abstractmethod

from discord_spotify_player.domain.music.entities import RequestMetadata, Track


class PlaybackQueue(ABC):
    """Where resolved tracks end up."""

    @abstractmethod
    async def add_track(self, guild_id: int, track: Track, request: RequestMetadata) -> int:
        """Append a track to the guild's queue.

        Returns:
            -1 if the track took the immediate play slot, otherwise its 0-based
            position among upcoming tracks.

        Raises:
            BusinessRuleViolationError: If the queue is full.
        """
        ...
