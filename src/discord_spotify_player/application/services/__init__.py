"""Application services: the resolution pipeline and the playback queue."""
