"""Test data factories for deterministic test data generation."""

from tests.factories.plex import (
    make_external_user_xml,
    make_external_users_payload,
    make_home_user,
    make_home_users_payload,
    make_resources_payload,
    make_shared_servers_payload,
    make_switch_payload,
)

__all__ = [
    "make_external_user_xml",
    "make_external_users_payload",
    "make_home_user",
    "make_home_users_payload",
    "make_resources_payload",
    "make_shared_servers_payload",
    "make_switch_payload",
]
