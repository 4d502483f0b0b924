"""Queue Application Service - manages queue operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.music.entities import QueuedTrack, RequestMetadata, Track
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import DiscordSnowflake, MaxQueueSize
from ..interfaces.playback_queue import PlaybackQueue
from .queue_models import QueueInfo

if TYPE_CHECKING:
    from ...domain.music.repository import SessionRepository

logger = logging.getLogger(__name__)


class QueueApplicationService(PlaybackQueue):
    """Adds resolved tracks to guild sessions and reports queue contents."""

    def __init__(
        self,
        *,
        session_repository: SessionRepository,
        max_queue_size: MaxQueueSize,
    ) -> None:
        self._session_repo = session_repository
        self._max_queue_size = max_queue_size

    async def add_track(
        self, guild_id: DiscordSnowflake, track: Track, request: RequestMetadata
    ) -> int:
        session = await self._session_repo.get_or_create(guild_id)

        position = session.enqueue(
            QueuedTrack(track=track, request=request), max_size=self._max_queue_size
        )
        await self._session_repo.save(session)

        if position < 0:
            logger.info(LogTemplates.QUEUE_STARTED, track.title, guild_id)
        else:
            logger.info(LogTemplates.QUEUE_ENQUEUED, track.title, position, guild_id)
        return position

    async def get_queue(self, guild_id: DiscordSnowflake) -> QueueInfo:
        session = await self._session_repo.get(guild_id)
        if session is None:
            return QueueInfo(
                current=None,
                upcoming=[],
                total_length=0,
                total_duration_seconds=None,
            )

        entries = ([session.current] if session.current else []) + list(session.queue)
        durations = [entry.track.duration_seconds for entry in entries]
        has_all_durations = all(d is not None for d in durations)

        return QueueInfo(
            current=session.current,
            upcoming=list(session.queue),
            total_length=len(entries),
            total_duration_seconds=sum(d or 0 for d in durations) if has_all_durations else None,
        )
