"""Remote user directory resolver and token enricher.

Usage:
    from modules.plex_users import UsersDirectory, PlexContext

    directory = UsersDirectory(gateway=gateway)
    result = directory.resolve(context, {"externalUsersMode": True})
"""

from modules.plex_users.directory import UsersDirectory
from modules.plex_users.enricher import (
    EnrichmentOutcome,
    EnrichmentResult,
    TokenEnricher,
)
from modules.plex_users.endpoints import PlexEndpoints
from modules.plex_users.fetchers import ExternalUsersFetcher, HomeUsersFetcher
from modules.plex_users.models import (
    CanonicalUser,
    DirectoryOptions,
    PlexContext,
    ServerResource,
    SharedGrant,
    UserOrigin,
)
from modules.plex_users.normalize import normalize_name

__all__ = [
    "UsersDirectory",
    "TokenEnricher",
    "EnrichmentOutcome",
    "EnrichmentResult",
    "PlexEndpoints",
    "ExternalUsersFetcher",
    "HomeUsersFetcher",
    "CanonicalUser",
    "DirectoryOptions",
    "PlexContext",
    "ServerResource",
    "SharedGrant",
    "UserOrigin",
    "normalize_name",
]
