import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules works during pytest collection regardless of invocation directory.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest
from modules.plex_users import PlexContext, PlexEndpoints
from tests.fixtures.plex_gateway import FakeGateway


@pytest.fixture
def plex_context():
    return PlexContext(
        server_id="plex-server-1",
        token="owner-token",
        client_identifier="test-client",
        name="test_plex",
    )


@pytest.fixture
def endpoints():
    return PlexEndpoints()


@pytest.fixture
def make_gateway():
    """Factory building a FakeGateway from a ``(method, url) -> reply`` handler."""

    def _make(handler):
        return FakeGateway(handler)

    return _make
