"""Spotify Web API adapters: client-credentials tokens and catalog lookups."""
