"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for the directory services.
The core never calls these itself: every collaborator is a constructor
argument, these functions only wire the defaults.
"""

from functools import lru_cache

from infrastructure.clients.http import HttpGateway
from infrastructure.configuration import Settings
from modules.plex_users import PlexContext, PlexEndpoints, UsersDirectory


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_http_gateway() -> HttpGateway:
    """
    Get application-scoped HTTP gateway singleton.

    Returns:
        HttpGateway: Pooled gateway using the configured timeout.
    """
    settings = get_settings()
    return HttpGateway(timeout=settings.plex.HTTP_TIMEOUT)


@lru_cache
def get_users_directory() -> UsersDirectory:
    """
    Get application-scoped users directory singleton.

    Returns:
        UsersDirectory: Directory wired to the shared gateway and the
        configured endpoint base URLs.
    """
    settings = get_settings()
    return UsersDirectory(
        gateway=get_http_gateway(),
        endpoints=PlexEndpoints.from_settings(settings.plex),
    )


def get_plex_context() -> PlexContext:
    """
    Build the backend context from settings.

    Raises:
        ValueError: If PLEX_SERVER_ID or PLEX_TOKEN is not configured
    """
    settings = get_settings()
    if not settings.plex.SERVER_ID:
        raise ValueError("PLEX_SERVER_ID is not configured")
    if not settings.plex.TOKEN:
        raise ValueError("PLEX_TOKEN is not configured")
    return PlexContext.from_settings(settings)
