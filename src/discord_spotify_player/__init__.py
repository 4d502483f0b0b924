"""Discord bot that resolves Spotify tracks and playlists into YouTube searches."""

__version__ = "1.0.0"
