"""Tests for SpotifyCog and the Discord progress message."""

from __future__ import annotations

from unittest.mock import ANY, AsyncMock, MagicMock

import discord
import pytest

from discord_spotify_player.application.commands.play_catalog_url import (
    PlayCatalogUrlResult,
    PlayCatalogUrlStatus,
)
from discord_spotify_player.domain.shared.messages import DiscordUIMessages
from discord_spotify_player.infrastructure.discord.cogs.spotify_cog import SpotifyCog
from discord_spotify_player.infrastructure.discord.progress import DiscordProgressSink

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_container():
    container = MagicMock()
    container.play_catalog_url_handler = MagicMock()
    container.play_catalog_url_handler.handle = AsyncMock(
        return_value=PlayCatalogUrlResult(
            status=PlayCatalogUrlStatus.PLAYLIST_LOADED, message="done"
        )
    )
    return container


@pytest.fixture
def cog(mock_container):
    return SpotifyCog(MagicMock(), mock_container)


@pytest.fixture
def interaction():
    i = MagicMock(spec=discord.Interaction)
    i.response = MagicMock()
    i.response.is_done.return_value = False
    i.response.send_message = AsyncMock()
    i.response.defer = AsyncMock()
    i.followup = MagicMock()
    i.followup.send = AsyncMock()

    i.guild = MagicMock()
    i.guild.id = 111

    member = MagicMock(spec=discord.Member)
    member.id = 222
    member.display_name = "TestUser"
    i.user = member
    return i


# =============================================================================
# /spotify
# =============================================================================


class TestSpotifyCommand:
    @pytest.mark.asyncio
    async def test_outside_guild(self, cog, interaction, mock_container):
        interaction.guild = None

        await cog.spotify.callback(cog, interaction, url="https://open.spotify.com/track/x")

        interaction.response.send_message.assert_awaited_once_with(
            DiscordUIMessages.STATE_SERVER_ONLY, ephemeral=True
        )
        mock_container.play_catalog_url_handler.handle.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_defers_and_dispatches(self, cog, interaction, mock_container):
        await cog.spotify.callback(
            cog, interaction, url="  https://open.spotify.com/playlist/abc  "
        )

        interaction.response.defer.assert_awaited_once_with(thinking=True)
        command, sink = mock_container.play_catalog_url_handler.handle.await_args.args
        assert command.guild_id == 111
        assert command.user_id == 222
        assert command.user_name == "TestUser"
        assert command.url == "https://open.spotify.com/playlist/abc"
        assert isinstance(sink, DiscordProgressSink)

    @pytest.mark.asyncio
    async def test_missing_url_still_reaches_handler(self, cog, interaction, mock_container):
        await cog.spotify.callback(cog, interaction)

        command, _ = mock_container.play_catalog_url_handler.handle.await_args.args
        assert command.url == ""


@pytest.mark.asyncio
async def test_setup_no_container():
    from discord_spotify_player.infrastructure.discord.cogs.spotify_cog import setup

    bot = MagicMock()
    del bot.container

    with pytest.raises(RuntimeError):
        await setup(bot)


# =============================================================================
# DiscordProgressSink
# =============================================================================


class TestDiscordProgressSink:
    @pytest.mark.asyncio
    async def test_first_send_posts_followup(self, interaction):
        sink = DiscordProgressSink(interaction)

        await sink.send("Loading: Song Artist")

        interaction.followup.send.assert_awaited_once_with(
            "Loading: Song Artist", wait=True, allowed_mentions=ANY
        )

    @pytest.mark.asyncio
    async def test_later_sends_edit_the_same_message(self, interaction):
        message = MagicMock()
        message.edit = AsyncMock()
        interaction.followup.send.return_value = message
        sink = DiscordProgressSink(interaction)

        await sink.send("Loading playlist: Mix (3 tracks)")
        await sink.send("Playlist loaded: 3 tracks added successfully, 0 failed to load.")

        interaction.followup.send.assert_awaited_once()
        message.edit.assert_awaited_once_with(
            content="Playlist loaded: 3 tracks added successfully, 0 failed to load.",
            allowed_mentions=ANY,
        )

    @pytest.mark.asyncio
    async def test_failed_edit_posts_new_message(self, interaction):
        broken = MagicMock()
        broken.id = 1
        broken.edit = AsyncMock(
            side_effect=discord.NotFound(MagicMock(status=404, reason="Not Found"), "gone")
        )
        replacement = MagicMock()
        interaction.followup.send.side_effect = [broken, replacement]
        sink = DiscordProgressSink(interaction)

        await sink.send("first")
        await sink.send("second")

        assert interaction.followup.send.await_count == 2
        interaction.followup.send.assert_awaited_with("second", wait=True, allowed_mentions=ANY)

    @pytest.mark.asyncio
    async def test_user_controlled_text_never_pings(self, interaction):
        message = MagicMock()
        message.edit = AsyncMock()
        interaction.followup.send.return_value = message
        sink = DiscordProgressSink(interaction)

        await sink.send("Loading playlist: @everyone party (3 tracks)")
        await sink.send("Now playing: <@&123> anthem")

        sent = interaction.followup.send.await_args.kwargs["allowed_mentions"]
        edited = message.edit.await_args.kwargs["allowed_mentions"]
        for mentions in (sent, edited):
            assert mentions.everyone is False
            assert mentions.users is False
            assert mentions.roles is False
