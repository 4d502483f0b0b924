"""DTOs for the queue application service."""

from __future__ import annotations

from pydantic import BaseModel

from ...domain.music.entities import QueuedTrack
from ...domain.shared.types import NonNegativeInt


class QueueInfo(BaseModel):

    current: QueuedTrack | None
    upcoming: list[QueuedTrack]
    total_length: NonNegativeInt
    total_duration_seconds: NonNegativeInt | None

    @property
    def total_tracks(self) -> int:
        return self.total_length

    @property
    def total_duration(self) -> int | None:
        return self.total_duration_seconds
