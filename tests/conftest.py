from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from portfolio_api.core.container import Container
from portfolio_api.main import create_app
from portfolio_api.shared.config import Settings


class RecordingEmailSender:
    def __init__(self):
        self.sent: list[tuple[str, str, str]] = []

    def send(self, *, to: str, subject: str, body: str) -> None:
        self.sent.append((to, subject, body))


def _make_settings(**overrides) -> Settings:
    values = {
        "storage_backend": "memory",
        "session_secret": "test-session-secret",
        "password_hash_rounds": 4,
        "public_base_url": "http://portfolio.test",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def container(email_sender) -> Container:
    return Container(_make_settings(), email_sender=email_sender)


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container=container))


@pytest.fixture
def admin_client(client) -> TestClient:
    response = client.post(
        "/api/auth/register",
        json={"name": "Admin", "email": "admin@example.com", "password": "admin-pass-1"},
    )
    assert response.status_code == 201
    return client


@pytest.fixture
def settings_factory():
    return _make_settings
