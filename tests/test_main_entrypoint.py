"""
Tests for main.py - Main Entry Point

Tests for the main entry point including:
- Logging configuration
- Token validation
- Container and bot creation
- Error handling
"""

import json
import logging
from unittest.mock import MagicMock, mock_open, patch

import pytest
from pydantic import SecretStr

from discord_spotify_player.main import cli, main, setup_logging


class TestLoggingSetup:
    """Tests for logging configuration."""

    def _make_valid_config(self) -> dict:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "handlers": {},
            "loggers": {
                "httpx": {"level": "WARNING"},
                "yt_dlp": {"level": "WARNING"},
            },
            "root": {"level": "INFO", "handlers": []},
        }

    def test_dictconfig_called_when_json_exists(self):
        """Should call dictConfig when logging_config.json exists."""
        config = self._make_valid_config()
        m = mock_open(read_data=json.dumps(config))
        with (
            patch("builtins.open", m),
            patch("logging.config.dictConfig") as mock_dc,
        ):
            setup_logging()

            mock_dc.assert_called_once_with(config)

    def test_fallback_to_basicconfig_when_json_missing(self):
        """Should fallback to basicConfig when logging_config.json is missing."""
        with (
            patch("builtins.open", side_effect=FileNotFoundError),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging()

            mock_bc.assert_called_once()
            assert mock_bc.call_args[1]["level"] == logging.INFO

    def test_fallback_to_basicconfig_when_json_malformed(self):
        """Should fallback to basicConfig when JSON is malformed."""
        m = mock_open(read_data="{invalid json")
        with (
            patch("builtins.open", m),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging()

            mock_bc.assert_called_once()

    def test_root_logger_level_overridden_by_settings(self):
        """Should override root logger level with the provided log_level."""
        config = self._make_valid_config()
        m = mock_open(read_data=json.dumps(config))
        with (
            patch("builtins.open", m),
            patch("logging.config.dictConfig"),
            patch("logging.getLogger") as mock_get_logger,
        ):
            mock_root = MagicMock()
            mock_get_logger.return_value = mock_root

            setup_logging("DEBUG")

            mock_root.setLevel.assert_called_once_with(logging.DEBUG)

    def test_shipped_config_masks_credentials(self):
        """The repository's logging_config.json attaches the masking filter."""
        from discord_spotify_player.main import _LOGGING_CONFIG_PATH

        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)

        assert "mask_secrets" in config["filters"]
        assert "mask_secrets" in config["handlers"]["console"]["filters"]
        assert config["loggers"]["httpx"]["level"] == "WARNING"


def _settings(token: str) -> MagicMock:
    mock_settings = MagicMock()
    mock_settings.discord.token = SecretStr(token)
    mock_settings.log_level = "INFO"
    mock_settings.environment = "test"
    return mock_settings


class TestMainFunction:
    """Tests for main entry point function."""

    def test_main_returns_error_without_token(self):
        """Should return error code when Discord token is missing."""
        with (
            patch(
                "discord_spotify_player.config.settings.get_settings",
                return_value=_settings(""),
            ),
            patch("discord_spotify_player.main.setup_logging"),
        ):
            exit_code = main()

        assert exit_code == 1

    def test_main_successful_run(self):
        """Should return 0 on successful bot run."""
        mock_bot = MagicMock()
        mock_settings = _settings("test_token_123")

        with (
            patch(
                "discord_spotify_player.config.settings.get_settings",
                return_value=mock_settings,
            ),
            patch("discord_spotify_player.main.setup_logging"),
            patch("discord_spotify_player.config.container.create_container") as mock_cc,
            patch(
                "discord_spotify_player.infrastructure.discord.bot.create_bot",
                return_value=mock_bot,
            ),
        ):
            exit_code = main()

        assert exit_code == 0
        mock_cc.assert_called_once_with(mock_settings)
        mock_bot.run_with_graceful_shutdown.assert_called_once_with("test_token_123")

    @pytest.mark.parametrize(
        ("error", "expected"),
        [(KeyboardInterrupt(), 0), (RuntimeError("Bot crashed!"), 1)],
    )
    def test_main_handles_run_errors(self, error, expected):
        mock_bot = MagicMock()
        mock_bot.run_with_graceful_shutdown.side_effect = error

        with (
            patch(
                "discord_spotify_player.config.settings.get_settings",
                return_value=_settings("test_token_123"),
            ),
            patch("discord_spotify_player.main.setup_logging"),
            patch("discord_spotify_player.config.container.create_container"),
            patch(
                "discord_spotify_player.infrastructure.discord.bot.create_bot",
                return_value=mock_bot,
            ),
        ):
            exit_code = main()

        assert exit_code == expected

    def test_cli_exits_with_main_status(self):
        with (
            patch("discord_spotify_player.main.main", return_value=3),
            pytest.raises(SystemExit) as exc_info,
        ):
            cli()

        assert exc_info.value.code == 3
