"""Pytest fixtures."""

import pytest
from fastapi.testclient import TestClient

from guardian_sos.core.deps import get_notifier, get_store
from guardian_sos.main import app
from guardian_sos.services.session_store import SessionStore


class RecordingNotifier:
    """Stands in for SmsService; remembers every broadcast."""

    enabled = True

    def __init__(self) -> None:
        self.broadcasts: list[tuple[list[str], str]] = []

    async def broadcast(self, recipients: list[str], body: str) -> dict[str, bool]:
        self.broadcasts.append((list(recipients), body))
        return {to: True for to in recipients}


@pytest.fixture
def store():
    """Fresh, empty session store per test."""
    return SessionStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(store, notifier):
    """Test client with overridden store and SMS notifier."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def start_payload():
    return {
        "displayName": "Alice",
        "startedAt": "2024-01-01T00:00:00Z",
        "latitude": 51.5,
        "longitude": -0.1,
        "contacts": [{"phone": "+447000000001"}],
    }
