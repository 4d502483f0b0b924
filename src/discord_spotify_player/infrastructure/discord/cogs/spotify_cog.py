"""Slash-command cog for queueing Spotify tracks and playlists."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from discord_spotify_player.application.commands.play_catalog_url import PlayCatalogUrlCommand
from discord_spotify_player.domain.shared.messages import (
    DiscordUIMessages,
    ErrorMessages,
    LogTemplates,
)
from discord_spotify_player.infrastructure.discord.progress import DiscordProgressSink
from discord_spotify_player.utils.reply import reply_ephemeral

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


class SpotifyCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @app_commands.command(
        name="spotify", description="Queue a Spotify track or playlist by searching YouTube."
    )
    @app_commands.describe(url="Spotify track or playlist URL")
    async def spotify(self, interaction: discord.Interaction, url: str = "") -> None:
        if interaction.guild is None:
            await reply_ephemeral(interaction, DiscordUIMessages.STATE_SERVER_ONLY)
            return

        await interaction.response.defer(thinking=True)

        command = PlayCatalogUrlCommand(
            guild_id=interaction.guild.id,
            user_id=interaction.user.id,
            user_name=interaction.user.display_name,
            url=url,
        )

        sink = DiscordProgressSink(interaction)
        result = await self.container.play_catalog_url_handler.handle(command, sink)
        logger.info(
            LogTemplates.COMMAND_SPOTIFY_FINISHED,
            interaction.guild.id,
            interaction.user.id,
            result.status.value,
        )


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(SpotifyCog(bot, container))
