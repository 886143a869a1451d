"""Plex integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class PlexSettings(IntegrationSettings):
    """Plex account and server configuration.

    Environment Variables:
        PLEX_TV_URL: Base URL of the account service hosting the user and
            shared-server listings (default: https://plex.tv)
        PLEX_CLIENTS_URL: Base URL of the v2 API hosting home users, user
            switching and resources (default: https://clients.plex.tv)
        PLEX_TOKEN: Owner token used to authenticate directory calls
        PLEX_SERVER_ID: Client identifier of the configured media server
        PLEX_CLIENT_IDENTIFIER: Identifier sent as X-Plex-Client-Identifier
        PLEX_PRODUCT: Product name sent as X-Plex-Product
        PLEX_HTTP_TIMEOUT: Timeout in seconds for each remote call

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        server_id = settings.plex.SERVER_ID
        ```
    """

    TV_URL: str = Field(default="https://plex.tv", alias="PLEX_TV_URL")
    CLIENTS_URL: str = Field(
        default="https://clients.plex.tv", alias="PLEX_CLIENTS_URL"
    )
    TOKEN: str = Field(default="", alias="PLEX_TOKEN")
    SERVER_ID: str = Field(default="", alias="PLEX_SERVER_ID")
    CLIENT_IDENTIFIER: str = Field(
        default="plex-user-directory", alias="PLEX_CLIENT_IDENTIFIER"
    )
    PRODUCT: str = Field(default="Plex User Directory", alias="PLEX_PRODUCT")
    HTTP_TIMEOUT: int = Field(default=30, alias="PLEX_HTTP_TIMEOUT")
