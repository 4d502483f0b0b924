"""
Music Domain Services

Domain services containing business logic that doesn't naturally fit
within a single entity or value object.
"""

from __future__ import annotations

from dataclasses import dataclass

from discord_spotify_player.domain.music.entities import Track, format_duration


@dataclass(frozen=True)
class DurationPolicy:
    """Decides whether a track is too long to be queued.

    A ``max_seconds`` of zero or below means there is no limit.
    """

    max_seconds: int = 0

    @property
    def is_unlimited(self) -> bool:
        return self.max_seconds <= 0

    @property
    def max_formatted(self) -> str:
        return format_duration(self.max_seconds)

    def is_too_long(self, track: Track) -> bool:
        """Check a track against the limit.

        Args:
            track: The track to check.

        Returns:
            True if the track exceeds the limit. Unknown durations always pass.
        """
        if self.is_unlimited or track.duration_seconds is None:
            return False
        return track.duration_seconds > self.max_seconds
