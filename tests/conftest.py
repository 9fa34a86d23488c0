"""
tests/conftest.py -- Shared test fixtures for IdeaBoard integration tests.

This module provides:
  - _make_test_stores(): isolated in-memory DB shared by UserStore + ProjectStore
  - _patch_lifespan(): wires test settings and stores into app.state
  - api_client: module-scoped TestClient over the real FastAPI app
  - client: the same client with an empty cookie jar for every test
  - register_user / login_as: helpers for creating and acting as accounts

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker
thread. The named URI format shares one in-memory instance across all
connections -- and across both stores, which must see the same users table.

SECRET_KEY is set before any app import so get_settings() (read at import
time by the rate limiter and logging setup) does not fall back to the
development key.
"""

from __future__ import annotations

import itertools
import os
from collections.abc import Callable, Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass

os.environ.setdefault("SECRET_KEY", "ideaboard-test-secret-key-0123456789abcdef")

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from api.main import app
from auth.store import UserStore
from core.config import Settings
from projects.store import ProjectStore

TEST_SETTINGS = Settings(secret_key="ideaboard-test-secret-key-0123456789abcdef")

# Login is rate-limited in production; tests log in far more often than a human.
limiter.enabled = False

# Usernames must not repeat within a module's database.
_SEQUENCE = itertools.count(1)


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _make_test_stores(db_suffix: str) -> tuple[UserStore, ProjectStore]:
    """Create stores over one isolated named shared-memory SQLite database.

    Args:
        db_suffix: Unique string appended to the DB name so test modules
                   don't share state.
    """
    url = f"sqlite:///file:test_ideaboard_{db_suffix}?mode=memory&cache=shared&uri=true"
    return UserStore(url), ProjectStore(url)


def _patch_lifespan(user_store: UserStore, project_store: ProjectStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.settings = TEST_SETTINGS
        app.state.user_store = user_store
        app.state.project_store = project_store
        yield

    return test_lifespan


@dataclass
class Registered:
    id: str
    username: str
    email: str
    password: str
    token: str


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client(request) -> Generator[TestClient, None, None]:
    """Yield a TestClient backed by a fresh database for each test module."""
    user_store, project_store = _make_test_stores(request.module.__name__.replace(".", "_"))
    app.router.lifespan_context = _patch_lifespan(user_store, project_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client

    project_store.close()
    user_store.close()


@pytest.fixture
def client(api_client: TestClient) -> TestClient:
    """The module client with no cookies left over from earlier tests."""
    api_client.cookies.clear()
    return api_client


@pytest.fixture
def login_as(client: TestClient) -> Callable[[str | None], TestClient]:
    """Return a function that swaps the session cookie on the client.

    login_as(None) leaves the client unauthenticated.
    """

    def _login_as(token: str | None) -> TestClient:
        client.cookies.clear()
        if token:
            client.cookies.set("token", token)
        return client

    return _login_as


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., Registered]:
    """Return a factory that registers an account through POST /users."""

    def _register(
        username: str | None = None,
        email: str | None = None,
        password: str = "password1",
    ) -> Registered:
        suffix = next(_SEQUENCE)
        username = username or f"user_{suffix}"
        email = email or f"{username}@example.com"
        resp = client.post("/users", json={"username": username, "email": email, "password": password})
        assert resp.status_code == 200, resp.text
        data = resp.json()["data"]
        client.cookies.clear()
        return Registered(
            id=data["user"]["id"],
            username=username,
            email=email,
            password=password,
            token=data["token"],
        )

    return _register


def stack_entry(frontend: str = "React", backend: str = "FastAPI", api: str = "REST") -> dict:
    return {"frontend": frontend, "backend": backend, "api": api}


@pytest.fixture
def project_body() -> Callable[..., dict]:
    """Return a factory for a valid POST /projects body owned by user_id."""

    def _body(user_id: str, **overrides) -> dict:
        body = {
            "name": "Habit tracker",
            "description": "Track daily habits with streaks",
            "difficulty": "easy",
            "user": user_id,
            "stack": [stack_entry()],
        }
        body.update(overrides)
        return body

    return _body


@pytest.fixture
def settings() -> Settings:
    """The Settings object the test app signs and verifies tokens with."""
    return TEST_SETTINGS
