"""Port interface for the audio-search provider."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel, ConfigDict

from discord_spotify_player.domain.music.entities import Track


class SearchStatus(Enum):
    FOUND = "found"
    EMPTY = "empty"
    FAILED = "failed"


class FailureSeverity(Enum):
    """How much of a failure's detail is safe to show to a user."""

    COMMON = "common"
    SUSPICIOUS = "suspicious"
    FAULT = "fault"


class SearchResult(BaseModel):
    """Outcome of one search: a track, nothing, or a failure."""

    model_config = ConfigDict(frozen=True)

    status: SearchStatus
    track: Track | None = None
    error: str | None = None
    severity: FailureSeverity | None = None

    @classmethod
    def found(cls, track: Track) -> SearchResult:
        return cls(status=SearchStatus.FOUND, track=track)

    @classmethod
    def empty(cls) -> SearchResult:
        return cls(status=SearchStatus.EMPTY)

    @classmethod
    def failed(cls, error: str, severity: FailureSeverity) -> SearchResult:
        return cls(status=SearchStatus.FAILED, error=error, severity=severity)


class AudioSearchBackend(ABC):
    """Interface for turning a free-text query into the best matching track."""

    @abstractmethod
    async def search(self, query: str) -> SearchResult:
        """Search for ``query``, which carries the provider marker (e.g. ``ytsearch:``).

        Implementations report failures through the result and do not raise.
        """
        ...
