"""Tests for modules.plex_users.models module."""

import pytest
from pydantic import ValidationError
from unittest.mock import Mock

from infrastructure.configuration import Settings
from modules.plex_users.models import (
    CanonicalUser,
    DirectoryOptions,
    PlexContext,
    ServerResource,
    UserOrigin,
)


def make_user(**overrides):
    values = {
        "id": "1",
        "uuid": "uuid-1",
        "name": "test_user",
        "display_name": "Test User",
        "origin": UserOrigin.HOME,
    }
    values.update(overrides)
    return CanonicalUser(**values)


@pytest.mark.unit
class TestCanonicalUser:
    def test_payload_uses_camel_case_keys(self):
        payload = make_user(is_admin=True, updated_at="2024-01-01").to_payload()

        assert payload == {
            "id": "1",
            "uuid": "uuid-1",
            "name": "test_user",
            "displayName": "Test User",
            "isAdmin": True,
            "isGuest": False,
            "isRestricted": False,
            "isProtected": False,
            "updatedAt": "2024-01-01",
        }

    def test_payload_includes_token_when_set(self):
        payload = make_user().with_token("abc").to_payload()

        assert payload["token"] == "abc"
        assert "origin" not in payload

    def test_with_none_token_returns_same_user(self):
        user = make_user()

        assert user.with_token(None) is user

    def test_with_token_does_not_mutate_original(self):
        user = make_user()

        user.with_token("abc")

        assert user.token is None


@pytest.mark.unit
class TestDirectoryOptions:
    def test_defaults(self):
        options = DirectoryOptions.from_value(None)

        assert options.external_users_mode is False
        assert options.fetch_tokens is False
        assert options.target_user is None
        assert options.bypass_cache is False

    def test_accepts_camel_case_mapping(self):
        options = DirectoryOptions.from_value(
            {
                "externalUsersMode": True,
                "fetchTokens": True,
                "targetUser": "uuid-2",
                "bypassCache": True,
                "unknown": "ignored",
            }
        )

        assert options.external_users_mode is True
        assert options.fetch_tokens is True
        assert options.target_user == "uuid-2"
        assert options.bypass_cache is True

    def test_accepts_field_names(self):
        options = DirectoryOptions.from_value({"fetch_tokens": True})

        assert options.fetch_tokens is True

    def test_instance_passes_through(self):
        options = DirectoryOptions(fetch_tokens=True)

        assert DirectoryOptions.from_value(options) is options

    def test_numeric_target_user_is_read_as_string(self):
        options = DirectoryOptions.from_value({"targetUser": 5})

        assert options.target_user == "5"
        assert options.is_eligible(make_user(uuid="5"))

    def test_unusable_flag_value_raises(self):
        with pytest.raises(ValidationError):
            DirectoryOptions.from_value({"fetchTokens": "maybe"})

    def test_every_user_eligible_without_target(self):
        assert DirectoryOptions().is_eligible(make_user(uuid="any"))

    def test_only_target_eligible(self):
        options = DirectoryOptions(target_user="uuid-2")

        assert options.is_eligible(make_user(uuid="uuid-2"))
        assert not options.is_eligible(make_user(uuid="uuid-1"))


@pytest.mark.unit
class TestServerResource:
    @pytest.mark.parametrize(
        "provides, expected",
        [("server", True), ("client,server", True), ("player", False), ("", False)],
    )
    def test_is_server(self, provides, expected):
        resource = ServerResource(client_identifier="x", provides=provides)

        assert resource.is_server is expected


@pytest.mark.unit
def test_context_from_settings():
    settings = Mock(spec=Settings)
    settings.plex = Mock(
        SERVER_ID="srv-1",
        TOKEN="owner",
        CLIENT_IDENTIFIER="client-1",
        PRODUCT="Product",
    )

    context = PlexContext.from_settings(settings, name="home")

    assert context.server_id == "srv-1"
    assert context.token == "owner"
    assert context.client_identifier == "client-1"
    assert context.name == "home"
