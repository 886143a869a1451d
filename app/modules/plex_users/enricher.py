"""Per-user token enrichment.

External users get their token from the pre-fetched shared-server grant
table. Home users need a chained exchange: switch into the user to obtain a
temporary token, then list the resources visible to that session and pick
the configured server's access token.

Every failure here is soft: the user simply ends up without a token.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import structlog

from infrastructure.clients.http import Gateway, HttpResponse
from modules.plex_users.endpoints import ACCEPT_JSON, PlexEndpoints, build_headers
from modules.plex_users.errors import MalformedPayloadError
from modules.plex_users.fetchers import request_ok
from modules.plex_users.models import (
    CanonicalUser,
    PlexContext,
    SharedGrant,
    UserOrigin,
)
from modules.plex_users.parsers import (
    parse_resources,
    parse_switch_token,
    select_server_token,
)

logger = structlog.get_logger()

SWITCH_STATUSES = frozenset({200, 201})
DENIAL_STATUSES = frozenset({401, 403})


class EnrichmentOutcome(str, Enum):
    """Terminal state of one enrichment attempt."""

    TOKEN_FOUND = "token_found"
    DENIED = "denied"
    NO_MATCH = "no_match"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class EnrichmentResult:
    """Outcome of one enrichment attempt; only TOKEN_FOUND carries a token."""

    outcome: EnrichmentOutcome
    token: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def found(cls, token: str) -> "EnrichmentResult":
        return cls(outcome=EnrichmentOutcome.TOKEN_FOUND, token=token)

    @classmethod
    def skipped(cls) -> "EnrichmentResult":
        return cls(outcome=EnrichmentOutcome.SKIPPED)


class TokenEnricher:
    """Obtains a server-scoped access token for one user.

    Args:
        gateway: HTTP gateway used for the switch and resources calls
        endpoints: URL builder
    """

    def __init__(self, gateway: Gateway, endpoints: PlexEndpoints) -> None:
        self._gateway = gateway
        self._endpoints = endpoints
        self._logger = logger.bind(component="token_enricher")

    def enrich(
        self,
        user: CanonicalUser,
        context: PlexContext,
        grants: Optional[Dict[str, SharedGrant]] = None,
        bypass_cache: bool = False,
    ) -> EnrichmentResult:
        """Look up the token of ``user``.

        Args:
            user: User to enrich
            context: Backend whose server token is wanted
            grants: Shared-server grant table (external users only)
            bypass_cache: Passed through to the gateway

        Returns:
            EnrichmentResult; never raises for remote failures
        """
        if user.origin == UserOrigin.EXTERNAL:
            return self._from_grants(user, grants or {})
        return self._switch_and_match(user, context, bypass_cache)

    def _from_grants(
        self, user: CanonicalUser, grants: Dict[str, SharedGrant]
    ) -> EnrichmentResult:
        grant = grants.get(user.id)
        if grant is None:
            self._logger.debug("shared_grant_missing", user_id=user.id)
            return EnrichmentResult(
                outcome=EnrichmentOutcome.NO_MATCH,
                message=f"No shared grant for user {user.id}",
            )
        return EnrichmentResult.found(grant.access_token)

    def _switch_and_match(
        self, user: CanonicalUser, context: PlexContext, bypass_cache: bool
    ) -> EnrichmentResult:
        log = self._logger.bind(user_uuid=user.uuid, backend=context.name)

        switch_url = self._endpoints.switch_user(user.uuid)
        result = self._gateway.request(
            "POST", switch_url, headers=build_headers(context, ACCEPT_JSON)
        )
        if not result.is_success:
            log.warning("user_switch_failed", error=result.message)
            return EnrichmentResult(
                outcome=EnrichmentOutcome.FAILED, message=result.message
            )

        response: HttpResponse = result.data
        if response.status_code in DENIAL_STATUSES:
            log.info("user_switch_denied", status_code=response.status_code)
            return EnrichmentResult(
                outcome=EnrichmentOutcome.DENIED,
                message=f"Switch to user {user.uuid} denied ({response.status_code})",
            )
        if response.status_code not in SWITCH_STATUSES:
            log.warning("user_switch_unexpected_status", status_code=response.status_code)
            return EnrichmentResult(
                outcome=EnrichmentOutcome.FAILED,
                message=f"Switch to user {user.uuid} returned {response.status_code}",
            )

        try:
            temporary_token = parse_switch_token(response.text)
        except MalformedPayloadError as exc:
            log.warning("user_switch_malformed", error=str(exc))
            return EnrichmentResult(outcome=EnrichmentOutcome.FAILED, message=str(exc))

        result = request_ok(
            self._gateway,
            "GET",
            self._endpoints.resources(),
            build_headers(context, ACCEPT_JSON, token=temporary_token),
            "resources",
            bypass_cache=bypass_cache,
        )
        if not result.is_success:
            log.warning("user_resources_failed", error=result.message)
            return EnrichmentResult(
                outcome=EnrichmentOutcome.FAILED, message=result.message
            )

        try:
            resources = parse_resources(result.data.text)
        except MalformedPayloadError as exc:
            log.warning("user_resources_malformed", error=str(exc))
            return EnrichmentResult(outcome=EnrichmentOutcome.FAILED, message=str(exc))

        token = select_server_token(resources, context.server_id)
        if token is None:
            log.info("user_server_not_found", resources=len(resources))
            return EnrichmentResult(
                outcome=EnrichmentOutcome.NO_MATCH,
                message=f"No resource matches server {context.server_id}",
            )

        log.debug("user_token_found")
        return EnrichmentResult.found(token)
