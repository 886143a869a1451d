"""Directory error types.

Fetchers and the orchestrator never raise these to callers; they are the
``cause`` attached to failed OperationResults.
"""

from typing import Optional


class DirectoryError(Exception):
    """Base class for user directory failures."""


class UnexpectedStatusError(DirectoryError):
    """The remote answered with a status the call does not accept."""

    def __init__(self, status_code: int, url: str, body: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        self.body = body
        super().__init__(f"Unexpected status {status_code} from {url}")


class MalformedPayloadError(DirectoryError):
    """A response body did not have the expected shape."""
