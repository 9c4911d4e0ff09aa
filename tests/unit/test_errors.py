"""Tests for the global exception handlers."""
import pytest
from fastapi.testclient import TestClient

from app.api.v1.contact import get_contact_service
from app.core.config import settings
from app.core.errors import error_response
from app.main import app

VALID_PAYLOAD = {
    "name": "Ana",
    "email": "ana@x.com",
    "organization": "ONG X",
    "message": "Hola",
}


class ExplodingContactService:
    def build_email_message(self, payload, config):
        raise RuntimeError("template exploded with secret details")


@pytest.fixture()
def raising_client(fake_sender, delivery_settings):
    app.dependency_overrides[get_contact_service] = lambda: ExplodingContactService()
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


def test_unknown_path_uses_contract_shape(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": "Not Found"}


def test_unhandled_exception_returns_generic_500(raising_client, fake_sender):
    response = raising_client.post("/api/contact", json=VALID_PAYLOAD)

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Internal server error"}
    assert "secret details" not in response.text
    assert fake_sender.sent == []


def test_debug_mode_exposes_exception_type_only(raising_client, monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", True)

    response = raising_client.post("/api/contact", json=VALID_PAYLOAD)

    assert response.status_code == 500
    assert response.json() == {
        "ok": False,
        "error": "Internal server error",
        "details": "RuntimeError",
    }


def test_error_response_omits_unset_details_and_headers():
    response = error_response(400, "Invalid JSON body")

    assert response.body == b'{"ok":false,"error":"Invalid JSON body"}'
    assert "allow" not in response.headers


def test_error_response_with_details_and_headers():
    response = error_response(
        502, "Resend request failed", details="upstream down", headers={"Allow": "POST"}
    )

    assert response.status_code == 502
    assert response.body == (
        b'{"ok":false,"error":"Resend request failed","details":"upstream down"}'
    )
    assert response.headers["allow"] == "POST"
