"""Tests for modules.plex_users.enricher module."""

import pytest
import requests

from modules.plex_users.enricher import EnrichmentOutcome, TokenEnricher
from modules.plex_users.models import CanonicalUser, SharedGrant, UserOrigin
from tests.factories.plex import make_resources_payload, make_switch_payload
from tests.fixtures.plex_gateway import route


def make_user(origin=UserOrigin.HOME, user_id="2", uuid="uuid-2"):
    return CanonicalUser(
        id=user_id,
        uuid=uuid,
        name="test_user",
        display_name="Test User",
        origin=origin,
    )


@pytest.fixture
def enrich(make_gateway, endpoints, plex_context):
    """Run one home-user enrichment against the given routes."""

    def _enrich(routes):
        gateway = make_gateway(route(routes))
        enricher = TokenEnricher(gateway, endpoints)
        return enricher.enrich(make_user(), plex_context), gateway

    return _enrich


@pytest.mark.unit
class TestExternalEnrichment:
    def test_grant_lookup(self, make_gateway, endpoints, plex_context):
        gateway = make_gateway(route([]))
        enricher = TokenEnricher(gateway, endpoints)
        grants = {"2": SharedGrant(user_id="2", access_token="grant-token")}

        result = enricher.enrich(
            make_user(UserOrigin.EXTERNAL), plex_context, grants=grants
        )

        assert result.outcome == EnrichmentOutcome.TOKEN_FOUND
        assert result.token == "grant-token"
        assert gateway.requests == []

    def test_missing_grant_is_no_match(self, make_gateway, endpoints, plex_context):
        enricher = TokenEnricher(make_gateway(route([])), endpoints)

        result = enricher.enrich(make_user(UserOrigin.EXTERNAL), plex_context, grants={})

        assert result.outcome == EnrichmentOutcome.NO_MATCH
        assert result.token is None

    def test_no_grant_table(self, make_gateway, endpoints, plex_context):
        enricher = TokenEnricher(make_gateway(route([])), endpoints)

        result = enricher.enrich(make_user(UserOrigin.EXTERNAL), plex_context)

        assert result.outcome == EnrichmentOutcome.NO_MATCH


@pytest.mark.unit
class TestHomeEnrichment:
    @pytest.mark.parametrize("status", [200, 201])
    def test_switch_then_resource_match(self, enrich, status):
        result, gateway = enrich(
            [
                ("/switch", (status, make_switch_payload())),
                ("/api/v2/resources", (200, make_resources_payload())),
            ]
        )

        assert result.outcome == EnrichmentOutcome.TOKEN_FOUND
        assert result.token == "token-uuid-2"
        assert gateway.urls()[0].endswith("/api/v2/home/users/uuid-2/switch")

    @pytest.mark.parametrize("status", [401, 403])
    def test_denied_switch(self, enrich, status):
        result, gateway = enrich([("/switch", (status, "denied"))])

        assert result.outcome == EnrichmentOutcome.DENIED
        assert result.token is None
        assert len(gateway.requests) == 1

    def test_unexpected_switch_status_fails_softly(self, enrich):
        result, _ = enrich([("/switch", (500, "boom"))])

        assert result.outcome == EnrichmentOutcome.FAILED
        assert result.token is None

    def test_switch_transport_error_fails_softly(self, enrich):
        result, _ = enrich([("/switch", requests.ConnectionError("reset"))])

        assert result.outcome == EnrichmentOutcome.FAILED

    def test_switch_without_auth_token(self, enrich):
        result, gateway = enrich([("/switch", (201, "{}"))])

        assert result.outcome == EnrichmentOutcome.FAILED
        assert len(gateway.requests) == 1

    def test_resources_error_status(self, enrich):
        result, _ = enrich(
            [
                ("/switch", (201, make_switch_payload())),
                ("/api/v2/resources", (401, "nope")),
            ]
        )

        assert result.outcome == EnrichmentOutcome.FAILED

    def test_resources_malformed(self, enrich):
        result, _ = enrich(
            [
                ("/switch", (201, make_switch_payload())),
                ("/api/v2/resources", (200, "not json")),
            ]
        )

        assert result.outcome == EnrichmentOutcome.FAILED

    def test_no_matching_server(self, enrich):
        result, _ = enrich(
            [
                ("/switch", (201, make_switch_payload())),
                ("/api/v2/resources", (200, make_resources_payload(server_id="other"))),
            ]
        )

        assert result.outcome == EnrichmentOutcome.NO_MATCH
        assert result.token is None

    def test_matching_entry_that_is_not_a_server(self, enrich):
        result, _ = enrich(
            [
                ("/switch", (201, make_switch_payload())),
                ("/api/v2/resources", (200, make_resources_payload(provides="player"))),
            ]
        )

        assert result.outcome == EnrichmentOutcome.NO_MATCH
