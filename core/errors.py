"""
core/errors.py -- Error taxonomy shared by the auth, projects, and api layers.

Stores and validators raise these; api/main.py owns the single exception
handler that turns any ApiError into the response envelope. Anything that is
not an ApiError is an unexpected failure and becomes a generic 500.

Layer rule: core/ is the kernel. No imports from api/, auth/, or projects/.
"""

from __future__ import annotations


class ApiError(Exception):
    """Base class for failures that map to a user-safe HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """Malformed or missing input."""

    status_code = 400


class Unauthenticated(ApiError):
    status_code = 401


class Forbidden(ApiError):
    """Authenticated, but not the owner of the addressed resource."""

    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    """Uniqueness violation (username or email already in use)."""

    status_code = 400


class InvalidCredentials(ApiError):
    status_code = 400

    def __init__(self) -> None:
        # Deliberately generic: never reveal whether the email exists.
        super().__init__("Invalid email or password")


class InvalidToken(Exception):
    """Token signature, structure, or expiry did not verify."""


class MissingIdentity(Exception):
    """Token verified but carries no user identifier."""
