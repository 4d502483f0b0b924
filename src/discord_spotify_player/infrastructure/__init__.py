"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Catalog (Spotify Web API over httpx)
- Audio search (yt-dlp)
- Persistence (in-memory sessions)
- Discord (bot, cogs, progress messages)
"""
