"""Remote endpoints and request headers for the user directory."""

from typing import Dict, Optional

from infrastructure.configuration import PlexSettings
from modules.plex_users.models import PlexContext

ACCEPT_XML = "application/xml"
ACCEPT_JSON = "application/json"


class PlexEndpoints:
    """Builds the URLs of the directory calls from the configured base URLs."""

    def __init__(
        self,
        tv_url: str = "https://plex.tv",
        clients_url: str = "https://clients.plex.tv",
    ) -> None:
        self.tv_url = tv_url.rstrip("/")
        self.clients_url = clients_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: PlexSettings) -> "PlexEndpoints":
        return cls(tv_url=settings.TV_URL, clients_url=settings.CLIENTS_URL)

    def external_users(self) -> str:
        return f"{self.tv_url}/api/users/"

    def shared_servers(self, server_id: str) -> str:
        return f"{self.tv_url}/api/servers/{server_id}/shared_servers"

    def home_users(self) -> str:
        return f"{self.clients_url}/api/v2/home/users/"

    def switch_user(self, uuid: str) -> str:
        return f"{self.clients_url}/api/v2/home/users/{uuid}/switch"

    def resources(self) -> str:
        return (
            f"{self.clients_url}/api/v2/resources"
            "?includeHttps=1&includeRelay=1&includeIPv6=1"
        )


def build_headers(
    context: PlexContext, accept: str, token: Optional[str] = None
) -> Dict[str, str]:
    """Headers for one call; ``token`` overrides the context's owner token."""
    return {
        "Accept": accept,
        "X-Plex-Token": token or context.token,
        "X-Plex-Client-Identifier": context.client_identifier,
        "X-Plex-Product": context.product,
    }
