"""Shared fixtures: a recording sender, a fixed token registry and a TestClient wired to both."""

import pytest
from fastapi.testclient import TestClient

from locrelay.core.settings import Settings
from locrelay.main import app
from locrelay.routes.location import get_intake_handler
from locrelay.services.location_intake import LocationIntakeHandler
from locrelay.services.notifications.base import NotificationSender, delivered, failed
from locrelay.services.token_registry import StaticTokenRegistry, get_token_registry
from locrelay.core.errors import DeliverySendError


class RecordingSender(NotificationSender):
    """Collects messages instead of sending them."""

    name = "recording"

    def __init__(self, status_code: int = 202, body: str = ""):
        self.status_code = status_code
        self.body = body
        self.messages = []

    def send(self, message):
        self.messages.append(message)
        if 200 <= self.status_code < 300:
            return delivered(self.name, self.status_code)
        return failed(self.name, DeliverySendError(self.status_code, self.body))


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        SENDGRID_API_KEY="SG.test-key",
        FROM_EMAIL="relay@example.com",
        FROM_NAME="Location Relay",
        REPLY_TO="owner@example.com",
        TO_EMAIL="owner@example.com",
        VALID_TOKENS="ABC123",
    )


@pytest.fixture
def registry():
    return StaticTokenRegistry(["ABC123"])


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def client(registry, sender, test_settings):
    app.dependency_overrides[get_token_registry] = lambda: registry
    app.dependency_overrides[get_intake_handler] = lambda: LocationIntakeHandler(
        registry=registry, sender=sender, config=test_settings
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sender_factory():
    return RecordingSender
