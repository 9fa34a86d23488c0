"""
api/routes/users.py -- Account and session routes for the IdeaBoard REST API.

Routes (in registration order to avoid FastAPI path capture conflicts):
  GET    /users           -- filtered, paginated listing (requires auth)
  POST   /users           -- register; returns a token and the new user
  POST   /users/login     -- email/password login; sets the "token" cookie
  POST   /users/logout    -- clears the "token" cookie
  PUT    /users/update    -- update the caller's own profile (requires auth)
  DELETE /users/delete    -- delete the caller's own account (requires auth)
  GET    /users/{id}      -- single user (requires auth)

Security:
  POST /users/login is rate-limited per client IP (Settings.login_rate_limit).
  authenticate_user() provides timing equalization -- use it, never inline.
  Login failures share one generic message regardless of which part was wrong.
  Cache-Control: no-store on login responses.
  Password salt and hash never appear in any response.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import UserLogin, UserRegister, UserUpdate
from api.responses import http_response, user_out
from auth.dependencies import get_current_user_id
from auth.models import User
from auth.store import UserStore
from auth.tokens import (
    authenticate_user,
    clear_auth_cookie,
    create_access_token,
    set_auth_cookie,
    set_password,
)
from core.config import get_settings
from core.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from core.query import build_user_query

logger = logging.getLogger("ideaboard.users")

_MIN_PASSWORD_LENGTH = 8

# Auth policy:
# - POST   /users, /users/login, /users/logout: public
# - GET    /users, /users/{id}:                 requires auth
# - PUT    /users/update, DELETE /users/delete: requires auth; always the caller's own record
router = APIRouter()


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


@router.get("/users")
def list_users(
    request: Request,
    page: Optional[str] = None,
    username: Optional[str] = None,
    email: Optional[str] = None,
    ideas_from: Optional[str] = Query(default=None, alias="ideasFrom"),
    ideas_to: Optional[str] = Query(default=None, alias="ideasTo"),
    user_id: str = Depends(get_current_user_id),
) -> JSONResponse:
    """Return one page (10) of users. Credentials are stripped from every row."""
    store: UserStore = request.app.state.user_store
    query = build_user_query(
        page=page,
        username=username,
        email=email,
        ideas_from=ideas_from,
        ideas_to=ideas_to,
    )
    found = store.list_users(query)
    return http_response(200, "User data was fetched successfully", {"users": [user_out(u) for u in found]})


# ---------------------------------------------------------------------------
# Registration and session
# ---------------------------------------------------------------------------


@router.post("/users")
def register(request: Request, body: UserRegister) -> JSONResponse:
    """Create an account and return a session token for it.

    The username and email checks run before the insert and are not atomic
    with it; the UNIQUE constraint on email still catches a concurrent
    duplicate (surfaced by the store as Conflict).
    """
    if not body.username or not body.email or not body.password:
        raise ValidationError("Missing required fields")
    if len(body.password) < _MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 8 characters long")

    store: UserStore = request.app.state.user_store
    if store.field_in_use("username", body.username):
        raise Conflict("username is already in use")
    if store.field_in_use("email", body.email):
        raise Conflict("email is already in use")

    salt, hashed = set_password(body.password)
    user_id = store.create_user(
        User(
            username=body.username,
            email=body.email,
            password_salt=salt,
            password_hash=hashed,
        )
    )
    created = store.get_by_id(user_id)
    token = create_access_token(user_id, request.app.state.settings)
    logger.info("User %s registered", user_id)
    return http_response(200, "User created successfully", {"token": token, "user": user_out(created)})


@limiter.limit(get_settings().login_rate_limit)  # must be ABOVE @router to preserve FastAPI introspection
@router.post("/users/login")
def login(request: Request, body: UserLogin) -> JSONResponse:
    """Authenticate with email and password; set the session cookie.

    The token is also echoed in the response body.
    """
    if not body.email or not body.password:
        raise ValidationError("Missing email or password")

    store: UserStore = request.app.state.user_store
    user = authenticate_user(store, body.email, body.password)
    if user is None:
        raise InvalidCredentials()

    settings = request.app.state.settings
    token = create_access_token(user.id, settings)
    resp = http_response(
        200,
        f"Login successful, Welcome {user.username}!",
        {"token": token, "user": user_out(user)},
    )
    set_auth_cookie(resp, token, settings)
    resp.headers["Cache-Control"] = "no-store"
    logger.info("User %s logged in", user.id)
    return resp


@router.post("/users/logout")
def logout() -> JSONResponse:
    """Clear the session cookie."""
    resp = http_response(200, "Logged out successfully")
    clear_auth_cookie(resp)
    return resp


# ---------------------------------------------------------------------------
# Caller's own account
# ---------------------------------------------------------------------------


@router.put("/users/update")
def update_user(
    request: Request,
    body: UserUpdate,
    user_id: str = Depends(get_current_user_id),
) -> JSONResponse:
    """Update the caller's username, email, and/or imageUrl.

    Uniqueness is checked only for supplied fields and ignores the caller's
    own record, so resubmitting an unchanged value is accepted.
    """
    store: UserStore = request.app.state.user_store
    changes: dict = {}
    if body.username:
        if store.field_in_use("username", body.username, exclude_id=user_id):
            raise Conflict("username is already in use")
        changes["username"] = body.username
    if body.email:
        if store.field_in_use("email", body.email, exclude_id=user_id):
            raise Conflict("email is already in use")
        changes["email"] = body.email
    if body.image_url is not None:
        changes["image_url"] = body.image_url

    updated = store.update_user(user_id, **changes)
    if updated is None:
        raise NotFound("User not found")
    return http_response(200, "User updated successfully", {"user": user_out(updated)})


@router.delete("/users/delete")
def delete_user(request: Request, user_id: str = Depends(get_current_user_id)) -> JSONResponse:
    """Delete the caller's account and end the session."""
    store: UserStore = request.app.state.user_store
    if not store.delete_user(user_id):
        raise NotFound("User not found")
    logger.info("User %s deleted their account", user_id)
    resp = http_response(200, "User account deleted successfully")
    clear_auth_cookie(resp)
    return resp


# ---------------------------------------------------------------------------
# Single user -- registered last so the literal paths above win
# ---------------------------------------------------------------------------


@router.get("/users/{target_id}")
def get_user(
    request: Request,
    target_id: str,
    user_id: str = Depends(get_current_user_id),
) -> JSONResponse:
    store: UserStore = request.app.state.user_store
    user = store.get_by_id(target_id)
    if user is None:
        raise NotFound("User not found")
    return http_response(200, "User fetched successfully", {"user": user_out(user)})
