"""
Catalog Domain Services

Pure helpers for classifying catalog URLs and turning catalog items into
audio-search queries.
"""

from __future__ import annotations

import re

from discord_spotify_player.domain.catalog.entities import (
    CatalogItem,
    CatalogKind,
    CatalogReference,
    SearchQuery,
)

DEFAULT_CATALOG_DOMAIN = "open.spotify.com"


def build_query(item: CatalogItem) -> SearchQuery:
    """Join title and primary artist with a single space.

    Empty fields are not collapsed, so an item with no title yields a query
    that starts with a space.
    """
    return SearchQuery(text=f"{item.title} {item.primary_artist}")


class CatalogUrlParser:
    """Classifies catalog URLs as track or playlist references.

    Accepted shapes:
        https://<domain>/track/<id>
        https://<domain>/intl/track/<id> and https://<domain>/intl-xx/track/<id>
        https://<domain>/playlist/<id> with an optional query string
    """

    def __init__(self, domain: str = DEFAULT_CATALOG_DOMAIN) -> None:
        host = re.escape(domain)
        self._track_pattern = re.compile(
            rf"https://{host}/(?:intl(?:-[a-z]{{2}})?/)?track/(?P<id>[A-Za-z0-9]+)"
        )
        self._playlist_pattern = re.compile(
            rf"https://{host}/playlist/(?P<id>[A-Za-z0-9]+)(?:\?.*)?"
        )

    def parse(self, url: str) -> CatalogReference | None:
        """Return the reference for ``url``, or None if it matches neither shape."""
        candidate = url.strip()

        match = self._track_pattern.fullmatch(candidate)
        if match:
            return CatalogReference(kind=CatalogKind.TRACK, id=match.group("id"))

        match = self._playlist_pattern.fullmatch(candidate)
        if match:
            return CatalogReference(kind=CatalogKind.PLAYLIST, id=match.group("id"))

        return None
