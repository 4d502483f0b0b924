"""Audio-search infrastructure backed by yt-dlp."""
