"""Integration settings for external services."""

from infrastructure.configuration.integrations.plex import PlexSettings

__all__ = ["PlexSettings"]
