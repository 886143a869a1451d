"""Operation result types and status enums.

This module contains standardized result types for remote directory
operations, including status enums, the result dataclass, and error
classifiers for HTTP statuses and client exceptions.
"""

from infrastructure.operations.classifiers import (
    ERROR_CODE_INVALID_INPUT,
    ERROR_CODE_MALFORMED_PAYLOAD,
    ERROR_CODE_TRANSPORT,
    ERROR_CODE_UNEXPECTED_STATUS,
    classify_http_status,
    classify_input_error,
    classify_payload_error,
    classify_transport_error,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_http_status",
    "classify_input_error",
    "classify_payload_error",
    "classify_transport_error",
    "ERROR_CODE_TRANSPORT",
    "ERROR_CODE_UNEXPECTED_STATUS",
    "ERROR_CODE_MALFORMED_PAYLOAD",
    "ERROR_CODE_INVALID_INPUT",
]
