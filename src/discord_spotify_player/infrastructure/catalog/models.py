"""Pydantic models for Spotify Web API payloads.

Only the fields the bot reads are declared; everything else is ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from discord_spotify_player.domain.catalog.entities import CatalogItem, PlaylistHeader
from discord_spotify_player.domain.shared.types import NonEmptyStr, NonNegativeInt


class TokenPayload(BaseModel):
    """Response of the client-credentials token endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: NonEmptyStr
    expires_in: NonNegativeInt
    token_type: str = "Bearer"


class ArtistPayload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str


class TrackPayload(BaseModel):
    """A track object; the first listed artist is the primary one."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    artists: list[ArtistPayload] = Field(min_length=1)

    def to_item(self) -> CatalogItem:
        return CatalogItem(title=self.name, primary_artist=self.artists[0].name)


class PlaylistTracksRef(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    total: NonNegativeInt


class PlaylistPayload(BaseModel):
    """Playlist object as returned with ``fields=name,tracks.total``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    tracks: PlaylistTracksRef

    def to_header(self) -> PlaylistHeader:
        return PlaylistHeader(name=self.name, total=self.tracks.total)


class PlaylistPagePayload(BaseModel):
    """One page of playlist items.

    Items stay loosely typed so a single bad entry can be skipped without
    failing the page.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    items: list[Any]
