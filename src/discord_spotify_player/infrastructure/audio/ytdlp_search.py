"""AudioSearchBackend implementation using yt-dlp search."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, cast

from pydantic import ValidationError as PydanticValidationError
from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError

from discord_spotify_player.application.interfaces.audio_search import (
    AudioSearchBackend,
    FailureSeverity,
    SearchResult,
)
from discord_spotify_player.config.settings import AudioSettings
from discord_spotify_player.domain.music.entities import Track
from discord_spotify_player.domain.music.value_objects import TrackId
from discord_spotify_player.domain.shared.messages import LogTemplates
from discord_spotify_player.infrastructure.audio.models import (
    AudioFormatInfo,
    YtDlpOpts,
    YtDlpTrackInfo,
)

logger = logging.getLogger(__name__)


class YtDlpSearchBackend(AudioSearchBackend):
    """Finds the first YouTube match for a query.

    Queries arrive as ``<prefix>:<text>``; the backend asks yt-dlp for a single
    result with ``<prefix>1:<text>``. Extraction runs in a worker thread.
    """

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._prefix = self._settings.search_prefix
        self._opts = YtDlpOpts(
            format=self._settings.ytdlp_format,
            default_search=self._prefix,
        )

    def _strip_marker(self, query: str) -> str:
        marker = f"{self._prefix}:"
        if query.startswith(marker):
            return query[len(marker):]
        return query

    def _search_sync(self, text: str) -> list[YtDlpTrackInfo]:
        with YoutubeDL(params=cast(Any, self._opts.model_dump())) as ydl:
            data = ydl.extract_info(f"{self._prefix}1:{text}", download=False)

        if not isinstance(data, dict):
            return []

        entries = data.get("entries", [])
        if not isinstance(entries, list):
            return []

        return [YtDlpTrackInfo.model_validate(dict(e)) for e in entries if e]

    async def search(self, query: str) -> SearchResult:
        text = self._strip_marker(query)
        logger.debug(LogTemplates.YTDLP_SEARCH, text)

        try:
            results = await asyncio.to_thread(self._search_sync, text)
        except DownloadError as e:
            logger.warning(LogTemplates.YTDLP_SEARCH_FAILED, text, e)
            return SearchResult.failed(_download_error_message(e), FailureSeverity.COMMON)
        except Exception as e:
            logger.exception(LogTemplates.YTDLP_SEARCH_CRASHED, text)
            return SearchResult.failed(str(e), FailureSeverity.FAULT)

        if not results:
            return SearchResult.empty()

        track = self._info_to_track(results[0])
        if track is None:
            return SearchResult.failed(
                LogTemplates.YTDLP_FAILED_INFO_TO_TRACK, FailureSeverity.SUSPICIOUS
            )
        return SearchResult.found(track)

    def _info_to_track(self, info: YtDlpTrackInfo) -> Track | None:
        url = info.webpage_url or info.url
        if not url:
            logger.warning(LogTemplates.YTDLP_NO_URL_IN_INFO_DICT)
            return None

        try:
            return Track(
                id=TrackId.from_url(url),
                title=info.title,
                webpage_url=url,
                stream_url=self._extract_stream_url(info),
                duration_seconds=info.duration,
                thumbnail_url=info.thumbnail,
                artist=info.artist or info.creator,
                uploader=info.uploader or info.channel,
            )
        except (PydanticValidationError, ValueError):
            logger.exception(LogTemplates.YTDLP_FAILED_INFO_TO_TRACK)
            return None

    def _extract_stream_url(self, info: YtDlpTrackInfo) -> str | None:
        if info.url and info.url.startswith(("http://", "https://")):
            return info.url
        return self._extract_stream_from_formats(info.formats)

    @staticmethod
    def _extract_stream_from_formats(formats: list[AudioFormatInfo]) -> str | None:
        audio_formats = [
            f for f in formats
            if f.acodec != "none" and f.url and f.url.startswith(("http://", "https://"))
        ]
        if audio_formats:
            return audio_formats[-1].url
        return None


def _download_error_message(error: DownloadError) -> str:
    """yt-dlp prefixes messages with 'ERROR: '; users don't need that."""
    message = str(error)
    return message.removeprefix("ERROR: ").strip() or "Download error"
