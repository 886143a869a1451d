"""Operation result dataclass.

Uniform result returned from directory operations: either SUCCESS with a
payload, or an error status with a message, a machine error code and the
exception that triggered it.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from operations.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        data: Optional[Any] -- optional payload (can be dict, list, or object)
        error_code: Optional[str] -- optional machine error code
        retry_after: Optional[int] -- seconds until retry when rate-limited
        cause: Optional[BaseException] -- exception that produced the error
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None
    cause: Optional[BaseException] = None

    @property
    def is_success(self) -> bool:
        """True if status is SUCCESS, False otherwise."""
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult with optional data.

        Args:
            data: Optional payload to include with the result
            message: Human-friendly success message

        Returns:
            OperationResult with SUCCESS status
        """
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
        cause: Optional[BaseException] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Human-friendly error message
            error_code: Optional machine error code
            retry_after: Optional seconds until retry (for rate limiting)
            data: Optional payload to include with the error
            cause: Optional exception that triggered the error

        Returns:
            OperationResult with specified error status
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
            data=data,
            cause=cause,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> "OperationResult":
        """Create a transient (retryable) error result.

        Use for errors that may succeed on retry, such as network timeouts,
        rate limiting or a remote 5xx.
        """
        return cls.error(
            OperationStatus.TRANSIENT_ERROR,
            message,
            error_code,
            retry_after,
            cause=cause,
        )

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> "OperationResult":
        """Create a permanent (non-retryable) error result.

        Use for errors that will not succeed on retry, such as a payload that
        cannot be parsed or a rejected request.
        """
        return cls.error(
            OperationStatus.PERMANENT_ERROR, message, error_code, cause=cause
        )

    def with_context(self, prefix: str) -> "OperationResult":
        """Return a copy of an error result with its message prefixed.

        Success results are returned unchanged.
        """
        if self.is_success:
            return self
        return OperationResult.error(
            self.status,
            f"{prefix}: {self.message}",
            error_code=self.error_code,
            retry_after=self.retry_after,
            data=self.data,
            cause=self.cause,
        )
