"""
Music Domain Repository Interfaces

Abstract base classes defining the contracts for session storage.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from discord_spotify_player.domain.music.entities import GuildPlaybackSession


class SessionRepository(ABC):
    """Abstract repository for guild playback sessions."""

    @abstractmethod
    async def get(self, guild_id: int) -> GuildPlaybackSession | None:
        """Retrieve a session by guild ID, or None if there is none."""
        ...

    @abstractmethod
    async def get_or_create(self, guild_id: int) -> GuildPlaybackSession:
        """Get an existing session or create a new one.

        Args:
            guild_id: The Discord guild ID.

        Returns:
            The existing or newly created session.
        """
        ...

    @abstractmethod
    async def save(self, session: GuildPlaybackSession) -> None:
        ...
