"""HTTP gateway used by the user directory to talk to the remote service.

The directory core depends on the narrow ``Gateway`` protocol only:

    result = gateway.request("GET", url, headers={...})
    if result.is_success:
        response: HttpResponse = result.data
        response.status_code, response.text

A successful result means a response was received, whatever its status.
Interpreting the status belongs to the caller. Transport failures
(timeouts, refused connections) come back as transient error results
whose ``cause`` is the original exception. The gateway never retries.

Usage:
    from infrastructure.clients.http import HttpGateway

    gateway = HttpGateway(timeout=30)
    result = gateway.request("GET", "https://plex.tv/api/users/")
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, runtime_checkable

import requests
import structlog

from infrastructure.operations import OperationResult, classify_transport_error

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Status, body and headers of a received HTTP response."""

    status_code: int
    text: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Gateway(Protocol):
    """Capability to perform one HTTP request."""

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        bypass_cache: bool = False,
    ) -> OperationResult: ...


class HttpGateway:
    """Gateway implementation backed by a pooled ``requests.Session``.

    Attributes:
        timeout: Default timeout in seconds
        user_agent: User-Agent sent with every request
    """

    def __init__(
        self,
        timeout: int = 30,
        user_agent: str = "Plex-User-Directory/1.0",
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": user_agent})
        self._logger = logger.bind(component="http_gateway")

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        bypass_cache: bool = False,
    ) -> OperationResult:
        """Send one HTTP request.

        Args:
            method: HTTP method (GET, POST, ...)
            url: Absolute URL
            headers: Additional headers for this request
            bypass_cache: Ask intermediaries for a fresh response

        Returns:
            OperationResult with an HttpResponse in data, or a transient
            error when no response was received
        """
        request_headers: Dict[str, str] = dict(headers or {})
        if bypass_cache:
            request_headers["Cache-Control"] = "no-cache"

        log = self._logger.bind(method=method, url=url)
        log.debug("http_request")

        try:
            response = self._session.request(
                method=method,
                url=url,
                headers=request_headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.warning("http_transport_error", error=str(exc))
            return classify_transport_error(exc)

        log.debug("http_response", status_code=response.status_code)
        return OperationResult.success(
            data=HttpResponse(
                status_code=response.status_code,
                text=response.text,
                headers=dict(response.headers),
            ),
            message=f"{method} {url} returned {response.status_code}",
        )

    def close(self) -> None:
        """Close HTTP session and release connections."""
        self._session.close()
        self._logger.debug("http_gateway_closed")


__all__ = ["Gateway", "HttpGateway", "HttpResponse"]
