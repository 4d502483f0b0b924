"""
Shared Domain Kernel

Contains constrained types, messages and exceptions shared across all bounded contexts.
"""

from discord_spotify_player.domain.shared.exceptions import (
    BusinessRuleViolationError,
    DomainError,
)

__all__ = [
    "DomainError",
    "BusinessRuleViolationError",
]
