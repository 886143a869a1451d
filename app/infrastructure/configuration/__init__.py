"""Configuration module - public API.

Centralized configuration management using pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    PlexSettings: Plex integration settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    token = settings.plex.TOKEN
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.integrations import PlexSettings

__all__ = ["Settings", "PlexSettings", "settings"]
