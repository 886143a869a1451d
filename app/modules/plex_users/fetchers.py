"""Directory fetchers.

Two independent readers of the remote user registry. Both return
OperationResult: SUCCESS with parsed models in ``data``, or the classified
failure. A failed fetch never carries partial results.
"""

from typing import Callable, Dict, Optional, TypeVar

import structlog

from infrastructure.clients.http import Gateway, HttpResponse
from infrastructure.operations import (
    OperationResult,
    classify_http_status,
    classify_payload_error,
)
from modules.plex_users.endpoints import (
    ACCEPT_JSON,
    ACCEPT_XML,
    PlexEndpoints,
    build_headers,
)
from modules.plex_users.errors import MalformedPayloadError, UnexpectedStatusError
from modules.plex_users.models import DirectoryOptions, PlexContext
from modules.plex_users.parsers import (
    parse_external_users,
    parse_home_users,
    parse_shared_grants,
)

logger = structlog.get_logger()

T = TypeVar("T")


def request_ok(
    gateway: Gateway,
    method: str,
    url: str,
    headers: Dict[str, str],
    operation: str,
    accepted: Optional[set[int]] = None,
    bypass_cache: bool = False,
) -> OperationResult:
    """Perform one call and check its status.

    Args:
        gateway: HTTP gateway
        method: HTTP method
        url: Absolute URL
        headers: Request headers
        operation: Label used in error messages
        accepted: Accepted statuses; any 2xx when None
        bypass_cache: Passed through to the gateway

    Returns:
        OperationResult with the HttpResponse in data, a transport failure
        from the gateway, or a classified UNEXPECTED_STATUS error
    """
    result = gateway.request(method, url, headers=headers, bypass_cache=bypass_cache)
    if not result.is_success:
        return result

    response: HttpResponse = result.data
    ok = (
        response.status_code in accepted
        if accepted is not None
        else response.is_success
    )
    if ok:
        return result

    return classify_http_status(
        response.status_code,
        operation,
        headers=response.headers,
        cause=UnexpectedStatusError(response.status_code, url, response.text[:200]),
    )


def parse_response(
    result: OperationResult, parser: Callable[[str], T], operation: str
) -> OperationResult:
    """Run ``parser`` over the body of a successful response result."""
    if not result.is_success:
        return result
    try:
        parsed = parser(result.data.text)
    except MalformedPayloadError as exc:
        return classify_payload_error(exc, operation)
    return OperationResult.success(data=parsed, message=f"{operation} fetched")


class ExternalUsersFetcher:
    """Reads the external/shared users listing and the shared-server grants.

    Args:
        gateway: HTTP gateway
        endpoints: URL builder
    """

    def __init__(self, gateway: Gateway, endpoints: PlexEndpoints) -> None:
        self._gateway = gateway
        self._endpoints = endpoints
        self._logger = logger.bind(component="external_users_fetcher")

    def fetch_users(
        self, context: PlexContext, options: DirectoryOptions
    ) -> OperationResult:
        """Fetch external users.

        Returns:
            OperationResult with list[CanonicalUser] in data
        """
        url = self._endpoints.external_users()
        self._logger.debug("fetching_external_users", backend=context.name, url=url)

        result = request_ok(
            self._gateway,
            "GET",
            url,
            build_headers(context, ACCEPT_XML),
            "external users",
            bypass_cache=options.bypass_cache,
        )
        return parse_response(result, parse_external_users, "external users")

    def fetch_grants(
        self, context: PlexContext, options: DirectoryOptions
    ) -> OperationResult:
        """Fetch the shared-server grant table of the configured server.

        Returns:
            OperationResult with dict[str, SharedGrant] keyed by user id in data
        """
        url = self._endpoints.shared_servers(context.server_id)
        self._logger.debug("fetching_shared_grants", backend=context.name, url=url)

        result = request_ok(
            self._gateway,
            "GET",
            url,
            build_headers(context, ACCEPT_XML),
            "shared servers",
            bypass_cache=options.bypass_cache,
        )
        return parse_response(result, parse_shared_grants, "shared servers")


class HomeUsersFetcher:
    """Reads the home-managed users listing.

    Args:
        gateway: HTTP gateway
        endpoints: URL builder
    """

    def __init__(self, gateway: Gateway, endpoints: PlexEndpoints) -> None:
        self._gateway = gateway
        self._endpoints = endpoints
        self._logger = logger.bind(component="home_users_fetcher")

    def fetch_users(
        self, context: PlexContext, options: DirectoryOptions
    ) -> OperationResult:
        """Fetch home users.

        Returns:
            OperationResult with list[CanonicalUser] in data
        """
        url = self._endpoints.home_users()
        self._logger.debug("fetching_home_users", backend=context.name, url=url)

        result = request_ok(
            self._gateway,
            "GET",
            url,
            build_headers(context, ACCEPT_JSON),
            "home users",
            bypass_cache=options.bypass_cache,
        )
        return parse_response(result, parse_home_users, "home users")
