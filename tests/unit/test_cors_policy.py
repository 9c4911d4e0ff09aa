"""Tests for the CORS policy on the contact endpoint."""
from app.core.config import settings


def _preflight(client, origin: str, method: str = "POST"):
    return client.request(
        "OPTIONS",
        "/api/contact",
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": method,
            "Access-Control-Request-Headers": "Content-Type",
        },
    )


class TestCorsPolicy:
    def test_preflight_from_allowed_origin(self, client):
        origin = settings.ALLOWED_ORIGINS[0]

        resp = _preflight(client, origin)

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == origin

    def test_preflight_from_unknown_origin_answers_json(self, client):
        resp = _preflight(client, "https://attacker.example")

        assert resp.status_code == 400
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json() == {"ok": False, "error": "Disallowed CORS origin"}
        assert "access-control-allow-origin" not in resp.headers

    def test_preflight_for_disallowed_method_answers_json(self, client):
        resp = _preflight(client, settings.ALLOWED_ORIGINS[0], method="DELETE")

        assert resp.status_code == 400
        body = resp.json()
        assert body["ok"] is False
        assert "method" in body["error"]
