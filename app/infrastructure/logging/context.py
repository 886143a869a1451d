"""Request context binding for structured logging.

Binds a correlation id (and any extra keys) to every log entry emitted
while one directory listing is being resolved.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(backend="home-server"):
        logger.info("resolving_users")
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind request-scoped context to all logs within the block.

    Args:
        correlation_id: Unique identifier. Auto-generated if not provided.
        **extra_context: Additional key-value pairs; None values are dropped.

    Yields:
        The correlation id in effect.
    """
    context: dict[str, Any] = {
        key: value for key, value in extra_context.items() if value is not None
    }
    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
