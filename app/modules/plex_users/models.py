"""User directory models.

Two structurally different remote listings (external/shared users as XML,
home users as JSON) are parsed into the single ``CanonicalUser`` model
before any downstream logic runs. The ``origin`` tag is the only place the
source survives, and only the token enricher reads it.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from infrastructure.configuration import Settings


class UserOrigin(str, Enum):
    """Listing a user was read from."""

    EXTERNAL = "external"
    HOME = "home"


class CanonicalUser(BaseModel):
    """Normalized user across both directory listings.

    Serialized with camelCase keys; ``token`` is only present in the payload
    when enrichment attached one.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)

    id: str = Field(..., description="Remote account id")
    uuid: str = Field(..., description="Remote account uuid")
    name: str = Field(..., description="Normalized user name")
    display_name: str = Field(..., alias="displayName")
    is_admin: bool = Field(default=False, alias="isAdmin")
    is_guest: bool = Field(default=False, alias="isGuest")
    is_restricted: bool = Field(default=False, alias="isRestricted")
    is_protected: bool = Field(default=False, alias="isProtected")
    updated_at: Optional[Union[int, float, str]] = Field(default=None, alias="updatedAt")
    token: Optional[str] = Field(default=None)
    origin: UserOrigin = Field(..., exclude=True)

    def with_token(self, token: Optional[str]) -> "CanonicalUser":
        """Return a copy carrying ``token`` (unchanged when token is None)."""
        if token is None:
            return self
        return self.model_copy(update={"token": token})

    def to_payload(self) -> Dict[str, Any]:
        """JSON-serializable dict; the ``token`` key is omitted when unset."""
        exclude = {"token"} if self.token is None else None
        return self.model_dump(by_alias=True, exclude=exclude)


class SharedGrant(BaseModel):
    """Pre-issued server access token for an external user."""

    user_id: str
    access_token: str
    invited_at: Optional[str] = None


class ServerResource(BaseModel):
    """One entry of the resource catalog visible to a switched-in session."""

    client_identifier: str
    access_token: Optional[str] = None
    provides: str = ""
    name: str = ""

    @property
    def is_server(self) -> bool:
        return "server" in [part.strip() for part in self.provides.split(",")]


class DirectoryOptions(BaseModel):
    """Caller options for one listing.

    Accepts the camelCase keys (``externalUsersMode``, ``fetchTokens``,
    ``targetUser``, ``bypassCache``) as well as the field names. Unknown
    keys are ignored. A numeric ``targetUser`` is read as a string.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    external_users_mode: bool = Field(default=False, alias="externalUsersMode")
    fetch_tokens: bool = Field(default=False, alias="fetchTokens")
    target_user: Optional[str] = Field(default=None, alias="targetUser")
    bypass_cache: bool = Field(default=False, alias="bypassCache")

    @classmethod
    def from_value(
        cls, value: Union["DirectoryOptions", Mapping[str, Any], None]
    ) -> "DirectoryOptions":
        """Build options from an instance, a mapping or None.

        Raises:
            pydantic.ValidationError: If a recognized key has an unusable value
        """
        if value is None:
            return cls()
        if isinstance(value, DirectoryOptions):
            return value
        return cls.model_validate(dict(value))

    def is_eligible(self, user: CanonicalUser) -> bool:
        """Whether ``user`` may be enriched under the target-user filter."""
        if not self.target_user:
            return True
        return user.uuid == self.target_user


class PlexContext(BaseModel):
    """Backend the directory is resolved for.

    Attributes:
        server_id: Client identifier of the configured media server, used to
            pick the server entry out of a resource catalog
        token: Owner token authenticating the listing and switch calls
        client_identifier: Value sent as X-Plex-Client-Identifier
        name: Display name used in logs
    """

    model_config = ConfigDict(frozen=True)

    server_id: str
    token: str
    client_identifier: str = "plex-user-directory"
    product: str = "Plex User Directory"
    name: str = "plex"

    @classmethod
    def from_settings(cls, settings: Settings, name: str = "plex") -> "PlexContext":
        return cls(
            server_id=settings.plex.SERVER_ID,
            token=settings.plex.TOKEN,
            client_identifier=settings.plex.CLIENT_IDENTIFIER,
            product=settings.plex.PRODUCT,
            name=name,
        )
