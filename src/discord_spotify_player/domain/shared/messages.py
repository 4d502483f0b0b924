"""Centralized message constants for error messages, validation, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Validation Errors
    EMPTY_TRACK_ID = "Track ID cannot be empty"

    # Catalog Errors
    CATALOG_NOT_CONFIGURED = "Spotify client credentials are not configured"
    CATALOG_TOKEN_EXCHANGE_FAILED = "Spotify token exchange failed: {detail}"
    CATALOG_TOKEN_EXCHANGE_INTERRUPTED = "Spotify token exchange was interrupted"
    CATALOG_UNAUTHORIZED = "Spotify rejected the access token ({url})"
    CATALOG_REQUEST_FAILED = "Spotify request failed with status {status} ({url})"
    CATALOG_TRANSPORT_FAILED = "Could not reach Spotify: {detail}"
    CATALOG_MALFORMED = "Unexpected Spotify response from {url}: {detail}"

    # Queue Errors
    QUEUE_FULL = "Queue is full (max {limit} tracks)"

    # Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID must fit in 64 bits"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Authentication/Security Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Credential Lifecycle
    CREDENTIAL_DISABLED = "Spotify client credentials not configured; /spotify is disabled"
    CREDENTIAL_REFRESHING = "Requesting new Spotify access token"
    CREDENTIAL_REFRESHED = "Spotify access token issued (expires in %ss)"
    CREDENTIAL_JOIN_INFLIGHT = "Joining in-flight Spotify token exchange"
    CREDENTIAL_EXCHANGE_FAILED = "Failed to get Spotify access token: %s"
    CREDENTIAL_EXCHANGE_INTERRUPTED = "Spotify token exchange interrupted (%s); failing joined callers"
    CREDENTIAL_PRIME_FAILED = "Initial Spotify token exchange failed; will retry on demand"

    # Catalog Fetching
    CATALOG_FETCH_TRACK = "Fetching Spotify track %s"
    CATALOG_FETCH_PLAYLIST = "Fetching Spotify playlist %s"
    CATALOG_FETCH_PAGE = "Fetching playlist %s page offset=%d limit=%d"
    CATALOG_SKIPPED_ITEM = "Skipping playlist %s item at offset %d: %s"
    CATALOG_COLLECTION_FETCHED = "Fetched %d of %d tracks from playlist %s"
    CATALOG_MALFORMED = "Malformed Spotify response from %s: %s"
    CATALOG_REQUEST_FAILED = "Spotify request to %s failed: %s"
    CATALOG_CLIENT_CLOSED = "Spotify catalog client closed"

    # Resolution
    RESOLVE_SINGLE = "Resolving single query %r in guild %s"
    RESOLVE_BATCH_STARTED = "Resolving %d queries in guild %s"
    RESOLVE_BATCH_FINISHED = "Batch in guild %s finished: %d added, %d failed"
    RESOLVE_REJECTED_DURATION = "Rejected %r: %ss exceeds limit of %ss"
    RESOLVE_NO_MATCHES = "No matches for %r"
    RESOLVE_LOAD_FAILED = "Load failed for %r (%s): %s"
    RESOLVE_QUEUE_REFUSED = "Queue refused %r: %s"
    RESOLVE_UNEXPECTED_ERROR = "Unexpected error resolving %r"

    # Command Handling
    COMMAND_CATALOG_FAILED = "Spotify command failed for %s: %s"
    COMMAND_SPOTIFY_FINISHED = "/spotify in guild %s by %s finished with %s"

    # Search Backend
    YTDLP_SEARCH = "Searching yt-dlp for %r"
    YTDLP_SEARCH_FAILED = "yt-dlp search failed for %r: %s"
    YTDLP_SEARCH_CRASHED = "yt-dlp search crashed for %r"
    YTDLP_NO_URL_IN_INFO_DICT = "No URL found in info dict"
    YTDLP_FAILED_INFO_TO_TRACK = "Failed to convert info to track"

    # Queue Operations
    QUEUE_ENQUEUED = "Enqueued track '%s' at position %s in guild %s"
    QUEUE_STARTED = "Track '%s' is now current in guild %s"

    # Application Lifecycle
    BOT_STARTING = "Starting Discord Spotify Player in {environment} mode"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized successfully"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"

    # Bot Cog Management
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Cogs loaded: %s success, %s failed"

    # Bot Command Sync
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %s commands globally"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync commands globally: %s"
    BOT_SYNC_ON_STARTUP_FAILED = "Failed to sync commands on startup: %s"

    # Bot Error Handling
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"
    PROGRESS_EDIT_FAILED = "Failed editing progress message %s"


class EmojiConstants:
    """Emoji constants for consistent visual feedback."""

    SUCCESS = "🎶"
    WARNING = "💡"
    ERROR = "🚫"
    LOADING = "⏳"
    MUSIC_NOTE = "🎵"
    QUEUE = "📋"


class DiscordUIMessages:
    """User-facing Discord messages and responses.

    These strings are shown directly to users in Discord interactions.
    Keep them concise, friendly, and include appropriate emoji.
    """

    # Spotify Command: input and configuration
    SPOTIFY_MISSING_URL = f"{EmojiConstants.ERROR} Please include a Spotify URL."
    SPOTIFY_DISABLED = "This command is disabled and must be enabled by the bot owner."
    SPOTIFY_INVALID_URL = "Error: The specified URL is not a valid Spotify track or playlist URL"
    SPOTIFY_CREDENTIAL_UNAVAILABLE = (
        f"{EmojiConstants.ERROR} Could not authenticate with Spotify right now. "
        "Please try again later."
    )

    # Spotify Command: catalog failures
    SPOTIFY_UNAUTHORIZED = "Error: Spotify rejected the access token. Try again in a moment."
    SPOTIFY_MALFORMED = "Error: Spotify returned an unexpected response."
    SPOTIFY_NETWORK_ERROR = "Error: {detail}"

    # Spotify Command: progress
    LOADING_QUERY = "Loading: {query}"
    LOADING_PLAYLIST = "Loading playlist: {name} ({total} tracks)"
    PLAYLIST_SUMMARY = (
        "Playlist loaded: {success} tracks added successfully, {failed} failed to load."
    )

    # Spotify Command: single track outcomes
    TRACK_TOO_LONG = (
        f"{EmojiConstants.WARNING} **{{title}}** is longer than the maximum allowed length: "
        "{duration} > {max_duration}"
    )
    TRACK_ADDED = f"{EmojiConstants.SUCCESS} **{{title}}** ({{duration}}) has been added."
    TRACK_ADDED_AT = (
        f"{EmojiConstants.SUCCESS} **{{title}}** ({{duration}}) has been added at position "
        "{position}."
    )
    TRACK_NO_MATCHES = f"{EmojiConstants.WARNING} No matches found."
    TRACK_LOAD_ERROR_DETAIL = f"{EmojiConstants.ERROR} Error loading track: {{detail}}"
    TRACK_LOAD_ERROR = f"{EmojiConstants.ERROR} Error loading track."

    # Generic
    ERROR_OCCURRED = "An error occurred: {error}"
    STATE_SERVER_ONLY = "This command can only be used in a server."
    STATE_QUEUE_EMPTY = "Queue is empty."

    # Embed Titles
    EMBED_QUEUE = f"{EmojiConstants.QUEUE} Queue ({{total_tracks}} tracks) - Page {{page}}/{{total_pages}}"
    EMBED_NOW_PLAYING = f"{EmojiConstants.MUSIC_NOTE} Now Playing"
