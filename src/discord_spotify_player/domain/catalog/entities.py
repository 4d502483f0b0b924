"""Entities and value objects for the catalog bounded context."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from discord_spotify_player.domain.shared.types import (
    CatalogIdStr,
    NonEmptyStr,
    NonNegativeInt,
    UtcDatetimeField,
)


class CatalogKind(Enum):
    """Structural kind of a catalog reference."""

    TRACK = "track"
    PLAYLIST = "playlist"


class CatalogReference(BaseModel):
    """A parsed catalog URL: what kind of item it points to and its id."""

    model_config = ConfigDict(frozen=True, strict=True)

    kind: CatalogKind
    id: CatalogIdStr

    @property
    def is_track(self) -> bool:
        return self.kind is CatalogKind.TRACK

    @property
    def is_playlist(self) -> bool:
        return self.kind is CatalogKind.PLAYLIST


class CatalogItem(BaseModel):
    """Minimal description of one catalog track.

    Either field may be empty; the values are kept exactly as the catalog
    returned them.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    title: str
    primary_artist: str


class PlaylistHeader(BaseModel):
    """Playlist summary fetched before paging through its tracks."""

    model_config = ConfigDict(frozen=True, strict=True)

    name: str
    total: NonNegativeInt


class AccessCredential(BaseModel):
    """Short-lived bearer token for the catalog API."""

    model_config = ConfigDict(frozen=True, strict=True)

    token: NonEmptyStr
    expires_at: UtcDatetimeField

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at

    def __repr__(self) -> str:
        return f"AccessCredential(token='***', expires_at={self.expires_at!r})"


class SearchQuery(BaseModel):
    """Free-text query sent to the audio-search provider."""

    model_config = ConfigDict(frozen=True, strict=True)

    text: str

    def __str__(self) -> str:
        return self.text
