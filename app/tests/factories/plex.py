"""Payload factories for the remote user directory."""

import json
from typing import Any, Dict, List, Optional


def make_external_user_xml(
    user_id: str = "1",
    username: str = "TestUser",
    uuid: Optional[str] = "uuid-1",
    home: str = "0",
    restricted: str = "0",
    protected: str = "0",
    **attributes: str,
) -> str:
    attrs = {
        "id": user_id,
        "username": username,
        "home": home,
        "restricted": restricted,
        "protected": protected,
        **attributes,
    }
    if uuid is not None:
        attrs["thumb"] = f"https://plex.tv/users/{uuid}/avatar?c=1"
    rendered = " ".join(f'{key}="{value}"' for key, value in attrs.items())
    return f"<User {rendered} />"


def make_external_users_payload(users: Optional[List[str]] = None) -> str:
    if users is None:
        users = [make_external_user_xml()]
    return f"<MediaContainer>{''.join(users)}</MediaContainer>"


def make_shared_servers_payload(grants: Dict[str, Optional[str]]) -> str:
    entries = []
    for user_id, token in grants.items():
        token_attr = f' accessToken="{token}"' if token is not None else ""
        entries.append(
            f'<SharedServer userID="{user_id}"{token_attr} '
            'invitedAt="2024-01-01T00:00:00Z" />'
        )
    return f"<MediaContainer>{''.join(entries)}</MediaContainer>"


def make_home_user(index: int = 1, **overrides: Any) -> Dict[str, Any]:
    user = {
        "id": index,
        "uuid": f"uuid-{index}",
        "friendlyName": f"Test User {index}",
        "admin": index == 1,
        "guest": False,
        "restricted": False,
        "protected": False,
        "updatedAt": f"2024-01-0{index}T00:00:00Z",
    }
    user.update(overrides)
    return user


def make_home_users_payload(count: int = 2) -> str:
    return json.dumps({"users": [make_home_user(i) for i in range(1, count + 1)]})


def make_switch_payload(token: str = "temp-token") -> str:
    return json.dumps({"authToken": token})


def make_resources_payload(
    server_id: str = "plex-server-1",
    token: Optional[str] = "token-uuid-2",
    provides: str = "server",
    extra: Optional[List[Dict[str, Any]]] = None,
) -> str:
    resources = list(extra or [])
    resources.append(
        {
            "clientIdentifier": server_id,
            "accessToken": token,
            "provides": provides,
            "name": "Plex Server",
        }
    )
    return json.dumps(resources)
