"""Fixtures for infrastructure.logging tests."""

import pytest
import structlog


@pytest.fixture
def clean_context():
    """Clear structlog context vars before and after a test."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
