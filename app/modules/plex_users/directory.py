"""User directory orchestrator.

Entry point of the resolver: picks the listing to read, optionally loads
the shared-server grant table, enriches eligible users with a server token
and returns the users in fetch order.

Usage:
    from modules.plex_users import UsersDirectory, PlexContext

    directory = UsersDirectory(gateway=HttpGateway())
    result = directory.resolve(context, {"fetchTokens": True, "targetUser": uuid})
    if result.is_success:
        payload = [user.to_payload() for user in result.data]
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from infrastructure.clients.http import Gateway
from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.operations import OperationResult, classify_input_error
from modules.plex_users.endpoints import PlexEndpoints
from modules.plex_users.enricher import (
    EnrichmentOutcome,
    EnrichmentResult,
    TokenEnricher,
)
from modules.plex_users.fetchers import ExternalUsersFetcher, HomeUsersFetcher
from modules.plex_users.models import (
    CanonicalUser,
    DirectoryOptions,
    PlexContext,
    SharedGrant,
)

logger = get_module_logger()


class UsersDirectory:
    """Resolve the user list of a media server.

    All collaborators are injected; only the gateway is required.

    Args:
        gateway: HTTP gateway shared by fetchers and enricher
        endpoints: URL builder (defaults to the public service URLs)
        enricher: Token enricher
        external_fetcher: Reader of the external/shared listing
        home_fetcher: Reader of the home listing
    """

    def __init__(
        self,
        gateway: Gateway,
        endpoints: Optional[PlexEndpoints] = None,
        enricher: Optional[TokenEnricher] = None,
        external_fetcher: Optional[ExternalUsersFetcher] = None,
        home_fetcher: Optional[HomeUsersFetcher] = None,
    ) -> None:
        endpoints = endpoints or PlexEndpoints()
        self._enricher = enricher or TokenEnricher(gateway, endpoints)
        self._external_fetcher = external_fetcher or ExternalUsersFetcher(
            gateway, endpoints
        )
        self._home_fetcher = home_fetcher or HomeUsersFetcher(gateway, endpoints)
        self._logger = logger

    def resolve(
        self,
        context: PlexContext,
        options: Union[DirectoryOptions, Mapping[str, Any], None] = None,
        correlation_id: Optional[str] = None,
    ) -> OperationResult:
        """List users, optionally with their server tokens.

        Args:
            context: Backend to resolve users for
            options: DirectoryOptions or a mapping of option keys
            correlation_id: Bound to every log entry of this call; generated
                when omitted

        Returns:
            OperationResult with list[CanonicalUser] in data on success. A
            failed listing or grant fetch fails the whole operation; a failed
            per-user enrichment only leaves that user without a token. Options
            that fail validation return an INVALID_INPUT error.
        """
        try:
            opts = DirectoryOptions.from_value(options)
        except ValidationError as exc:
            self._logger.error("invalid_directory_options", error=str(exc))
            return classify_input_error(exc, "directory options")

        with bind_request_context(correlation_id=correlation_id, backend=context.name):
            log = self._logger.bind(
                external=opts.external_users_mode,
                fetch_tokens=opts.fetch_tokens,
                target_user=opts.target_user,
            )
            log.info("resolving_users")

            fetcher = (
                self._external_fetcher
                if opts.external_users_mode
                else self._home_fetcher
            )
            listing = fetcher.fetch_users(context, opts)
            if not listing.is_success:
                log.error(
                    "users_fetch_failed",
                    error=listing.message,
                    error_code=listing.error_code,
                )
                return listing.with_context("Failed to fetch users")

            grants: Optional[Dict[str, SharedGrant]] = None
            if opts.fetch_tokens and opts.external_users_mode:
                grants_result = self._external_fetcher.fetch_grants(context, opts)
                if not grants_result.is_success:
                    log.error(
                        "shared_grants_fetch_failed",
                        error=grants_result.message,
                        error_code=grants_result.error_code,
                    )
                    return grants_result.with_context("Failed to fetch shared grants")
                grants = grants_result.data

            users: List[CanonicalUser] = []
            outcomes: Dict[str, int] = {}
            for user in listing.data:
                enrichment = self._enrich(user, context, opts, grants)
                outcomes[enrichment.outcome.value] = (
                    outcomes.get(enrichment.outcome.value, 0) + 1
                )
                users.append(user.with_token(enrichment.token))

            log.info("users_resolved", count=len(users), enrichment=outcomes)
            return OperationResult.success(
                data=users, message=f"Resolved {len(users)} users"
            )

    def _enrich(
        self,
        user: CanonicalUser,
        context: PlexContext,
        opts: DirectoryOptions,
        grants: Optional[Dict[str, SharedGrant]],
    ) -> EnrichmentResult:
        if not opts.fetch_tokens or not opts.is_eligible(user):
            return EnrichmentResult.skipped()

        enrichment = self._enricher.enrich(
            user, context, grants=grants, bypass_cache=opts.bypass_cache
        )
        if enrichment.outcome != EnrichmentOutcome.TOKEN_FOUND:
            self._logger.debug(
                "user_without_token",
                user_id=user.id,
                outcome=enrichment.outcome.value,
                reason=enrichment.message,
            )
        return enrichment
