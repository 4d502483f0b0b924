"""Slash-command cog for viewing the queue."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from discord_spotify_player.domain.music.entities import format_duration
from discord_spotify_player.domain.shared.messages import DiscordUIMessages, ErrorMessages
from discord_spotify_player.utils.reply import reply_ephemeral, truncate

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)

QUEUE_PER_PAGE = 10


class QueueCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @app_commands.command(name="queue", description="Show the current queue.")
    @app_commands.describe(page="Page number")
    async def queue(self, interaction: discord.Interaction, page: int = 1) -> None:
        if interaction.guild is None:
            await reply_ephemeral(interaction, DiscordUIMessages.STATE_SERVER_ONLY)
            return

        queue_info = await self.container.queue_service.get_queue(interaction.guild.id)

        if queue_info.total_tracks == 0:
            await interaction.response.send_message(
                DiscordUIMessages.STATE_QUEUE_EMPTY, ephemeral=True
            )
            return

        total_pages = max(1, math.ceil(len(queue_info.upcoming) / QUEUE_PER_PAGE))
        page = max(1, min(page, total_pages))
        start_idx = (page - 1) * QUEUE_PER_PAGE

        embed = discord.Embed(
            title=DiscordUIMessages.EMBED_QUEUE.format(
                total_tracks=queue_info.total_tracks, page=page, total_pages=total_pages
            ),
            color=discord.Color.green(),
        )

        if queue_info.current:
            current = queue_info.current
            embed.add_field(
                name=DiscordUIMessages.EMBED_NOW_PLAYING,
                value=f"**{truncate(current.track.title)}**\n"
                f"Duration: {current.track.duration_formatted} | "
                f"Requested by: {current.request.user_name}",
                inline=False,
            )

        entries = queue_info.upcoming[start_idx : start_idx + QUEUE_PER_PAGE]
        for idx, entry in enumerate(entries, start=start_idx + 1):
            embed.add_field(
                name=f"{idx}. {truncate(entry.track.title)}",
                value=f"Requested by: {entry.request.user_name}",
                inline=False,
            )

        if queue_info.total_duration:
            embed.set_footer(text=f"Total duration: {format_duration(queue_info.total_duration)}")

        await interaction.response.send_message(embed=embed, ephemeral=True)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(QueueCog(bot, container))
