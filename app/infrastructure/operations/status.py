"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of remote
directory calls for appropriate error handling.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, rate limit, 5xx)
        PERMANENT_ERROR: Non-retryable error (bad request, malformed payload)
        UNAUTHORIZED: Remote refused the credentials (401/403)
        NOT_FOUND: Remote resource not found
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
