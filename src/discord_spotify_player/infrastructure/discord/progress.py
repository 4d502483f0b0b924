"""ProgressSink that keeps one Discord message up to date."""

from __future__ import annotations

import logging

import discord

from discord_spotify_player.application.interfaces.progress_sink import ProgressSink
from discord_spotify_player.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

# Playlist names and video titles are user-controlled
_NO_MENTIONS = discord.AllowedMentions.none()


class DiscordProgressSink(ProgressSink):
    """Posts the first update as a followup to a deferred interaction and edits it afterwards.

    Mentions in the text are never resolved into pings.

    If an edit fails (message deleted, webhook expired) the update is posted
    as a new followup, which later updates then edit.
    """

    def __init__(self, interaction: discord.Interaction) -> None:
        self._interaction = interaction
        self._message: discord.WebhookMessage | None = None

    async def send(self, content: str) -> None:
        if self._message is not None:
            try:
                await self._message.edit(content=content, allowed_mentions=_NO_MENTIONS)
                return
            except discord.HTTPException:
                logger.warning(LogTemplates.PROGRESS_EDIT_FAILED, self._message.id)

        self._message = await self._interaction.followup.send(
            content, wait=True, allowed_mentions=_NO_MENTIONS
        )
