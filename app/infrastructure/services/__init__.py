"""
Dependency injection services.

Provides provider functions wiring the directory services from settings.
"""

from infrastructure.services.providers import (
    get_settings,
    get_http_gateway,
    get_users_directory,
    get_plex_context,
)

__all__ = [
    "get_settings",
    "get_http_gateway",
    "get_users_directory",
    "get_plex_context",
]
