"""Parsers turning remote payloads into directory models.

Each parser accepts the raw response body and either returns models or
raises ``MalformedPayloadError``. Nothing here performs I/O.
"""

import json
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from modules.plex_users.errors import MalformedPayloadError
from modules.plex_users.models import (
    CanonicalUser,
    ServerResource,
    SharedGrant,
    UserOrigin,
)
from modules.plex_users.normalize import normalize_name

_AVATAR_UUID = re.compile(r"/users/([^/]+)/avatar")
_TRUE_VALUES = {"1", "true", "yes"}


def _xml_root(text: str) -> ET.Element:
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        raise MalformedPayloadError(f"Failed to parse XML: {exc}") from exc


def _json_body(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise MalformedPayloadError(f"Failed to parse JSON: {exc}") from exc


def _xml_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUE_VALUES


def _uuid_from_thumb(thumb: Optional[str]) -> Optional[str]:
    if not thumb:
        return None
    match = _AVATAR_UUID.search(thumb)
    return match.group(1) if match else None


def parse_external_users(text: str) -> List[CanonicalUser]:
    """Parse the external/shared users XML listing.

    Every ``User`` element becomes one user with ``is_admin=False``; users
    outside the home are guests.
    """
    root = _xml_root(text)
    users: List[CanonicalUser] = []

    for element in root.findall("User"):
        user_id = element.get("id")
        if not user_id:
            raise MalformedPayloadError("External user element without an id")

        display_name = (
            element.get("username") or element.get("title") or element.get("email") or ""
        )
        users.append(
            CanonicalUser(
                id=user_id,
                uuid=_uuid_from_thumb(element.get("thumb")) or user_id,
                name=normalize_name(display_name, user_id),
                display_name=display_name,
                is_admin=False,
                is_guest=not _xml_bool(element.get("home")),
                is_restricted=_xml_bool(element.get("restricted")),
                is_protected=_xml_bool(element.get("protected")),
                origin=UserOrigin.EXTERNAL,
            )
        )

    return users


def parse_shared_grants(text: str) -> Dict[str, SharedGrant]:
    """Parse the shared-servers XML into a grant table keyed by user id.

    Entries without a user id or access token grant nothing and are
    skipped. The first grant for a user wins.
    """
    root = _xml_root(text)
    grants: Dict[str, SharedGrant] = {}

    for element in root.findall("SharedServer"):
        user_id = element.get("userID")
        access_token = element.get("accessToken")
        if not user_id or not access_token or user_id in grants:
            continue
        grants[user_id] = SharedGrant(
            user_id=user_id,
            access_token=access_token,
            invited_at=element.get("invitedAt"),
        )

    return grants


def parse_home_users(text: str) -> List[CanonicalUser]:
    """Parse the home users JSON object (``{"users": [...]}``)."""
    body = _json_body(text)
    if not isinstance(body, dict) or not isinstance(body.get("users"), list):
        raise MalformedPayloadError("Home users payload has no 'users' list")

    users: List[CanonicalUser] = []
    for item in body["users"]:
        if not isinstance(item, dict) or item.get("id") is None or not item.get("uuid"):
            raise MalformedPayloadError("Home user entry without id or uuid")

        user_id = str(item["id"])
        display_name = (
            item.get("friendlyName") or item.get("title") or item.get("username") or ""
        )
        try:
            users.append(
                CanonicalUser(
                    id=user_id,
                    uuid=str(item["uuid"]),
                    name=normalize_name(display_name, user_id),
                    display_name=display_name,
                    is_admin=bool(item.get("admin")),
                    is_guest=bool(item.get("guest")),
                    is_restricted=bool(item.get("restricted")),
                    is_protected=bool(item.get("protected")),
                    updated_at=item.get("updatedAt"),
                    origin=UserOrigin.HOME,
                )
            )
        except ValidationError as exc:
            raise MalformedPayloadError(f"Invalid home user entry: {exc}") from exc

    return users


def parse_switch_token(text: str) -> str:
    """Extract the temporary ``authToken`` from a switch response."""
    body = _json_body(text)
    token = body.get("authToken") if isinstance(body, dict) else None
    if not token or not isinstance(token, str):
        raise MalformedPayloadError("Switch response has no authToken")
    return token


def parse_resources(text: str) -> List[ServerResource]:
    """Parse the resources JSON list.

    Entries without a ``clientIdentifier`` cannot be matched and are skipped.
    """
    body = _json_body(text)
    if not isinstance(body, list):
        raise MalformedPayloadError("Resources payload is not a list")

    resources: List[ServerResource] = []
    for item in body:
        if not isinstance(item, dict) or not item.get("clientIdentifier"):
            continue
        try:
            resources.append(
                ServerResource(
                    client_identifier=item["clientIdentifier"],
                    access_token=item.get("accessToken"),
                    provides=item.get("provides") or "",
                    name=item.get("name") or "",
                )
            )
        except ValidationError as exc:
            raise MalformedPayloadError(f"Invalid resource entry: {exc}") from exc

    return resources


def select_server_token(
    resources: List[ServerResource], server_id: str
) -> Optional[str]:
    """Access token of the server resource matching ``server_id``, if any."""
    for resource in resources:
        if (
            resource.client_identifier == server_id
            and resource.is_server
            and resource.access_token
        ):
            return resource.access_token
    return None
