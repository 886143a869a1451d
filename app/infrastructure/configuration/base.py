"""Shared base class for integration settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class IntegrationSettings(BaseSettings):
    """Base class for remote service settings.

    Values load from the environment and ``.env``. Fields declare the
    environment variable as alias; passing either the alias or the field
    name to the constructor works, which keeps overrides in tests short.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )
