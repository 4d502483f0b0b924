"""Discord bot, slash-command cogs and message adapters."""
