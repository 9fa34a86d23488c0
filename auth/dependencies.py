"""
auth/dependencies.py -- FastAPI Depends() helper that gates protected routes.

The session token travels in the "token" cookie set by POST /users/login.
get_current_user_id() is the gate: it either attaches the verified user id to
request.state.user_id and returns it, or raises Unauthenticated and the
request goes no further.

Failure messages, in check order:
  - no cookie                         -> "Unauthorized: Missing token"
  - bad signature / malformed/expired -> "Unauthorized: Invalid or expired token"
  - verified but no user id in it     -> "Unauthorized: Invalid token"

The identity is attached only after the payload has been fully validated.

Layer rule: no imports from api/ or projects/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.tokens import COOKIE_NAME, decode_access_token
from core.errors import InvalidToken, MissingIdentity, Unauthenticated


def get_current_user_id(request: Request) -> str:
    """Require a valid session cookie. Raises Unauthenticated (401) otherwise.

    Use as a FastAPI dependency:
        @router.put("/projects/{project_id}")
        def route(user_id: str = Depends(get_current_user_id)): ...
    """
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        raise Unauthenticated("Unauthorized: Missing token")

    try:
        user_id = decode_access_token(token, request.app.state.settings)
    except MissingIdentity:
        raise Unauthenticated("Unauthorized: Invalid token") from None
    except InvalidToken:
        raise Unauthenticated("Unauthorized: Invalid or expired token") from None

    request.state.user_id = user_id
    return user_id
