"""
tests/test_health.py -- Integration tests for GET /health and error envelopes.

Covers:
  - 200 response with status, version, and components fields
  - No authentication required
  - Unknown routes and unexpected failures still answer with the envelope,
    and a 500 never leaks internal detail
"""

from __future__ import annotations

from fastapi.testclient import TestClient


def test_health_returns_200_with_components(client):
    """Health endpoint returns 200 with status, version, and components."""
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "healthy"
    assert "version" in data
    assert data["components"]["app"] == "ok"
    assert data["components"]["database"] == "ok"


def test_health_no_auth_required(login_as):
    resp = login_as(None).get("/health")
    assert resp.status_code == 200


def test_unknown_route_uses_envelope(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    body = resp.json()
    assert body["status_code"] == 404
    assert body["data"] == {}


def test_unexpected_failure_is_generic_500(api_client, monkeypatch):
    """A store blowing up yields the generic 500 message only."""
    store = api_client.app.state.project_store

    def explode(query):
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(store, "list_projects", explode)
    quiet = TestClient(api_client.app, raise_server_exceptions=False)
    resp = quiet.get("/projects")
    assert resp.status_code == 500
    assert resp.json() == {"status_code": 500, "message": "Internal server error", "data": {}}
    assert "hunter2" not in resp.text
