"""Core domain entities for the music bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from discord_spotify_player.domain.music.value_objects import TrackIdField
from discord_spotify_player.domain.shared.datetime_utils import utcnow
from discord_spotify_player.domain.shared.exceptions import BusinessRuleViolationError
from discord_spotify_player.domain.shared.messages import ErrorMessages
from discord_spotify_player.domain.shared.types import (
    DiscordSnowflake,
    DurationSeconds,
    HttpUrlStr,
    MaxQueueSize,
    NonEmptyStr,
    NonNegativeInt,
    TrackTitleStr,
    UtcDatetimeField,
)


def format_duration(seconds: int | None) -> str:
    """Format a duration as M:SS or H:MM:SS."""
    if seconds is None:
        return "Unknown"

    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class Track(BaseModel):
    """Immutable value object representing a playable track found by audio search."""

    model_config = ConfigDict(frozen=True, strict=True)

    id: TrackIdField
    title: TrackTitleStr
    webpage_url: HttpUrlStr
    stream_url: HttpUrlStr | None = None
    duration_seconds: DurationSeconds | None = None
    thumbnail_url: HttpUrlStr | None = None

    artist: NonEmptyStr | None = None
    uploader: NonEmptyStr | None = None

    @property
    def duration_formatted(self) -> str:
        return format_duration(self.duration_seconds)


class RequestMetadata(BaseModel):
    """Who asked for a track, with which query, and what it resolved to."""

    model_config = ConfigDict(frozen=True, strict=True)

    user_id: DiscordSnowflake
    user_name: NonEmptyStr
    query: str
    track_uri: HttpUrlStr
    requested_at: UtcDatetimeField = Field(default_factory=utcnow)


class QueuedTrack(BaseModel):
    """A track paired with the request that put it in the queue."""

    model_config = ConfigDict(frozen=True, strict=True)

    track: Track
    request: RequestMetadata


class GuildPlaybackSession(BaseModel):
    """Aggregate root holding the current track and upcoming queue of one guild."""

    model_config = ConfigDict(strict=True)

    guild_id: DiscordSnowflake
    current: QueuedTrack | None = None
    queue: list[QueuedTrack] = Field(default_factory=list)
    created_at: UtcDatetimeField = Field(default_factory=utcnow)
    last_activity: UtcDatetimeField = Field(default_factory=utcnow)

    # Bumped on every mutation
    version: NonNegativeInt = 0

    @property
    def queue_length(self) -> int:
        return len(self.queue)

    def touch(self) -> None:
        """Update last activity timestamp and bump the version."""
        self.last_activity = utcnow()
        self.version += 1

    def enqueue(self, queued: QueuedTrack, max_size: MaxQueueSize) -> int:
        """Append a track and return where it landed.

        Returns -1 when nothing was current, in which case the track takes the
        immediate play slot. Otherwise returns the 0-based index in the upcoming
        queue.
        """
        if self.current is None:
            self.current = queued
            self.touch()
            return -1

        if self.queue_length >= max_size:
            raise BusinessRuleViolationError(
                rule="MAX_QUEUE_SIZE", message=ErrorMessages.QUEUE_FULL.format(limit=max_size)
            )

        position = len(self.queue)
        self.queue.append(queued)
        self.touch()
        return position


class Requester(BaseModel):
    """The Discord user on whose behalf tracks are resolved."""

    model_config = ConfigDict(frozen=True, strict=True)

    user_id: DiscordSnowflake
    user_name: NonEmptyStr

    def request_for(self, query: str, track: Track) -> RequestMetadata:
        """Build the request metadata attached to a queued track."""
        return RequestMetadata(
            user_id=self.user_id,
            user_name=self.user_name,
            query=query,
            track_uri=track.webpage_url,
        )
