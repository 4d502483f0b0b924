"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Constrained types, messages and exceptions
- music/: Track, queue session and duration policy
- catalog/: Catalog references, access credentials and query building
"""

from discord_spotify_player.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
