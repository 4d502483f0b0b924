"""
Application Commands

Command objects and their handlers for write operations.
Commands represent intent to change the system state.
"""

from discord_spotify_player.application.commands.play_catalog_url import (
    PlayCatalogUrlCommand,
    PlayCatalogUrlHandler,
    PlayCatalogUrlResult,
    PlayCatalogUrlStatus,
)

__all__ = [
    "PlayCatalogUrlCommand",
    "PlayCatalogUrlHandler",
    "PlayCatalogUrlResult",
    "PlayCatalogUrlStatus",
]
