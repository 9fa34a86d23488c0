"""
tests/test_end_to_end.py -- Full user journey through the real ASGI stack.

register -> login (cookie) -> create project -> read it back -> delete ->
delete again returns not-found. The session here travels purely through the
cookie the login response sets; no token is injected by hand.
"""

from __future__ import annotations


def test_register_login_create_read_delete(client) -> None:
    resp = client.post("/users", json={"username": "alice", "email": "a@x.com", "password": "password1"})
    assert resp.status_code == 200, resp.text
    user_id = resp.json()["data"]["user"]["id"]
    client.cookies.clear()

    resp = client.post("/users/login", json={"email": "a@x.com", "password": "password1"})
    assert resp.status_code == 200, resp.text
    assert client.cookies.get("token") == resp.json()["data"]["token"]

    body = {
        "name": "Recipe planner",
        "description": "Plan weekly meals from what is in the fridge",
        "difficulty": "medium",
        "user": user_id,
        "stack": [{"frontend": "Next.js", "backend": "FastAPI", "api": "REST"}],
    }
    resp = client.post("/projects", json=body)
    assert resp.status_code == 201, resp.text
    created = resp.json()["data"]["project"]

    resp = client.get(f"/projects/{created['id']}")
    assert resp.status_code == 200
    fetched = resp.json()["data"]["project"]
    for key in ("name", "description", "difficulty", "user", "stack"):
        assert fetched[key] == body[key]
    assert fetched == created

    resp = client.delete(f"/projects/{created['id']}")
    assert resp.status_code == 200

    resp = client.delete(f"/projects/{created['id']}")
    assert resp.status_code == 404
    assert resp.json() == {"status_code": 404, "message": "Project idea not found", "data": {}}
