from typing import Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.api.v1.contact import get_delivery_settings, get_email_sender
from app.core.config import DeliverySettings
from app.main import app
from app.services.resend_client import DeliveryConfig, OutboundEmail, SendResult

DELIVERY_ENV_VARS = (
    "RESEND_API_KEY",
    "CONTACT_TO_EMAIL",
    "CONTACT_EMAIL",
    "CONTACT_FROM_EMAIL",
    "RESEND_API_URL",
    "RESEND_TIMEOUT",
)


class FakeEmailSender:
    """In-memory stand-in for the Resend sender."""

    def __init__(self, result: Optional[SendResult] = None):
        self.result = result or SendResult(ok=True, status_code=200)
        self.sent: List[OutboundEmail] = []
        self.configs: List[DeliveryConfig] = []

    def factory(self, config: DeliveryConfig) -> "FakeEmailSender":
        self.configs.append(config)
        return self

    def send(self, message: OutboundEmail) -> SendResult:
        self.sent.append(message)
        return self.result


def make_delivery_settings(**overrides) -> DeliverySettings:
    values = {
        "RESEND_API_KEY": "re_test_key_123456",
        "CONTACT_TO_EMAIL": "equipo@example.org",
    }
    values.update(overrides)
    return DeliverySettings(_env_file=None, **values)


# -----------------------------------------------------------------------------
# Environment Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_delivery_env(monkeypatch):
    """Keep the developer's shell environment out of the tests."""
    for name in DELIVERY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def fake_sender() -> Generator[FakeEmailSender, None, None]:
    sender = FakeEmailSender()
    app.dependency_overrides[get_email_sender] = lambda: sender.factory
    yield sender
    app.dependency_overrides.pop(get_email_sender, None)


@pytest.fixture()
def delivery_settings():
    """Configured delivery settings; tests may mutate ``holder`` before posting."""
    holder = {"settings": make_delivery_settings()}
    app.dependency_overrides[get_delivery_settings] = lambda: (
        lambda: holder["settings"]
    )
    yield holder
    app.dependency_overrides.pop(get_delivery_settings, None)


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
