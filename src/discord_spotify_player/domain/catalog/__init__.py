"""
Catalog Bounded Context

References to external catalog items, access credentials, and query building.
"""

from discord_spotify_player.domain.catalog.entities import (
    AccessCredential,
    CatalogItem,
    CatalogKind,
    CatalogReference,
    PlaylistHeader,
    SearchQuery,
)
from discord_spotify_player.domain.catalog.services import CatalogUrlParser, build_query

__all__ = [
    "AccessCredential",
    "CatalogItem",
    "CatalogKind",
    "CatalogReference",
    "PlaylistHeader",
    "SearchQuery",
    "CatalogUrlParser",
    "build_query",
]
