"""Error classifiers for remote call failures.

Converts HTTP statuses and client exceptions into standardized
OperationResult objects. Centralizes error classification logic so the
directory fetchers never decide retryability on their own.

Key Functions:
- classify_http_status(): non-2xx HTTP status -> OperationResult
- classify_transport_error(): requests exceptions -> OperationResult
- classify_payload_error(): body parse failures -> OperationResult
- classify_input_error(): rejected caller input -> OperationResult

Usage:
    from infrastructure.operations.classifiers import classify_http_status

    if not 200 <= response.status_code < 300:
        return classify_http_status(response.status_code, "home users")
"""

from typing import Mapping, Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER = 60

ERROR_CODE_TRANSPORT = "TRANSPORT_ERROR"
ERROR_CODE_UNEXPECTED_STATUS = "UNEXPECTED_STATUS"
ERROR_CODE_MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
ERROR_CODE_INVALID_INPUT = "INVALID_INPUT"


def _retry_after(headers: Optional[Mapping[str, str]]) -> int:
    if not headers:
        return DEFAULT_RETRY_AFTER
    header_value = headers.get("Retry-After") or headers.get("retry-after")
    if not header_value:
        return DEFAULT_RETRY_AFTER
    try:
        return int(header_value)
    except (ValueError, TypeError):
        return DEFAULT_RETRY_AFTER


def classify_http_status(
    status_code: int,
    operation: str,
    headers: Optional[Mapping[str, str]] = None,
    cause: Optional[BaseException] = None,
) -> OperationResult:
    """Classify a non-2xx HTTP status into OperationResult.

    Status Code Mapping:
    - 429: Rate limiting -> TRANSIENT_ERROR with retry_after
    - 401/403: Refused credentials -> UNAUTHORIZED
    - 404: Not found -> NOT_FOUND
    - 5xx: Server error -> TRANSIENT_ERROR
    - Other: -> PERMANENT_ERROR

    Args:
        status_code: HTTP status returned by the remote
        operation: Short label of the call, used in the message
        headers: Response headers (Retry-After is honoured for 429)
        cause: Exception to attach to the result

    Returns:
        OperationResult with error_code UNEXPECTED_STATUS
    """
    if status_code == 429:
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            f"{operation} rate limited (429)",
            error_code=ERROR_CODE_UNEXPECTED_STATUS,
            retry_after=_retry_after(headers),
            cause=cause,
        )

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"{operation} authorization denied ({status_code})",
            error_code=ERROR_CODE_UNEXPECTED_STATUS,
            cause=cause,
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            f"{operation} not found (404)",
            error_code=ERROR_CODE_UNEXPECTED_STATUS,
            cause=cause,
        )

    if 500 <= status_code < 600:
        return OperationResult.transient_error(
            f"{operation} server error ({status_code})",
            error_code=ERROR_CODE_UNEXPECTED_STATUS,
            cause=cause,
        )

    return OperationResult.permanent_error(
        f"{operation} unexpected status ({status_code})",
        error_code=ERROR_CODE_UNEXPECTED_STATUS,
        cause=cause,
    )


def classify_transport_error(exc: BaseException) -> OperationResult:
    """Classify an exception raised while performing an HTTP call.

    Timeouts and connection errors are transient; anything else raised by
    the client is still reported as a transport failure, since no response
    was received.

    Args:
        exc: Exception raised by the HTTP client

    Returns:
        OperationResult with TRANSIENT_ERROR status and the exception as cause
    """
    if isinstance(exc, requests.Timeout):
        message = f"Request timed out: {exc}"
    elif isinstance(exc, requests.ConnectionError):
        message = f"Connection error: {exc}"
    else:
        message = f"Transport error: {type(exc).__name__}: {exc}"

    return OperationResult.transient_error(
        message,
        error_code=ERROR_CODE_TRANSPORT,
        cause=exc,
    )


def classify_payload_error(exc: BaseException, operation: str) -> OperationResult:
    """Classify a failure to parse an expected-shape response body.

    Args:
        exc: Exception raised by the parser
        operation: Short label of the call, used in the message

    Returns:
        OperationResult with PERMANENT_ERROR status
    """
    return OperationResult.permanent_error(
        f"{operation} returned a malformed payload: {exc}",
        error_code=ERROR_CODE_MALFORMED_PAYLOAD,
        cause=exc,
    )


def classify_input_error(exc: BaseException, operation: str) -> OperationResult:
    """Classify caller input that failed validation before any remote call."""
    return OperationResult.permanent_error(
        f"Invalid {operation}: {exc}",
        error_code=ERROR_CODE_INVALID_INPUT,
        cause=exc,
    )
