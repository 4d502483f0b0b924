"""In-memory implementation of the session repository."""

from __future__ import annotations

import logging

from discord_spotify_player.domain.music.entities import GuildPlaybackSession
from discord_spotify_player.domain.music.repository import SessionRepository

logger = logging.getLogger(__name__)


class InMemorySessionRepository(SessionRepository):
    """Keeps sessions in a dict for the lifetime of the process.

    Sessions are returned by reference, so mutations made on the event loop
    between awaits are visible to every caller immediately.
    """

    def __init__(self) -> None:
        self._sessions: dict[int, GuildPlaybackSession] = {}

    async def get(self, guild_id: int) -> GuildPlaybackSession | None:
        return self._sessions.get(guild_id)

    async def get_or_create(self, guild_id: int) -> GuildPlaybackSession:
        session = self._sessions.get(guild_id)
        if session is None:
            session = GuildPlaybackSession(guild_id=guild_id)
            self._sessions[guild_id] = session
            logger.debug("Created session for guild %s", guild_id)
        return session

    async def save(self, session: GuildPlaybackSession) -> None:
        self._sessions[session.guild_id] = session
