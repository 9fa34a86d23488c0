"""
auth/tokens.py -- Password derivation, JWT issue/verify, and cookie utilities.

Security design decisions:
  Passwords: PBKDF2-HMAC-SHA512, 1000 iterations, 64-byte output, keyed by a
       fresh 128-bit random salt per user. The salt is stored as 32 hex chars
       and fed to the KDF as its text form, so existing hashes stay valid.
       Comparison uses hmac.compare_digest (constant time).

  Timing equalization: authenticate_user() always runs the KDF, even when
       no account matches the email, so response time does not reveal which
       emails are registered.

  JWT: python-jose with HS256. Tokens carry the user id ("id") and an expiry.
       decode_access_token() raises InvalidToken for any signature, structure,
       or expiry failure and MissingIdentity for a verified token without an id.

  SECRET_KEY: passed in explicitly via the Settings object. Nothing here
       reads configuration on its own.

Layer rule: no imports from api/ or projects/. Import from core/ is allowed.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from jose import JWTError, jwt

from core.config import Settings
from core.errors import InvalidToken, MissingIdentity

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("ideaboard.auth")

_ALGORITHM = "HS256"

COOKIE_NAME = "token"

# ---------------------------------------------------------------------------
# Password derivation
# ---------------------------------------------------------------------------

_KDF_DIGEST = "sha512"
_KDF_ITERATIONS = 1000
_KDF_LENGTH = 64
_SALT_BYTES = 16


def _derive(plain: str, salt: str) -> str:
    return hashlib.pbkdf2_hmac(
        _KDF_DIGEST,
        plain.encode("utf-8"),
        salt.encode("utf-8"),
        _KDF_ITERATIONS,
        dklen=_KDF_LENGTH,
    ).hex()


def set_password(plain: str) -> tuple[str, str]:
    """Return a fresh (salt, hash) pair for the given plaintext password."""
    salt = secrets.token_hex(_SALT_BYTES)
    return salt, _derive(plain, salt)


def verify_password(plain: str, salt: str, hashed: str) -> bool:
    """Return True if the plaintext password derives to the stored hash."""
    return hmac.compare_digest(_derive(plain, salt), hashed)


# Computed once at module load so the first unknown-email login is not
# measurably slower than subsequent ones.
_DUMMY_SALT, _DUMMY_HASH = set_password("ideaboard_timing_dummy")


def authenticate_user(store: UserStore, email: str, password: str) -> User | None:
    """Authenticate an email/password login with timing equalization.

    Returns the User on success, None on any failure. The caller turns None
    into the generic InvalidCredentials error.
    """
    user = store.get_by_email(email)
    if user is None:
        verify_password(password, _DUMMY_SALT, _DUMMY_HASH)
        return None
    if not verify_password(password, user.password_salt, user.password_hash):
        return None
    return user


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(user_id: str, settings: Settings, expires_delta: timedelta | None = None) -> str:
    """Encode a signed JWT for user_id.

    expires_delta defaults to Settings.token_expire_seconds (7 days), the same
    window the session cookie uses.
    """
    lifetime = expires_delta if expires_delta is not None else timedelta(seconds=settings.token_expire_seconds)
    payload = {
        "id": user_id,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> str:
    """Verify a JWT and return the embedded user id.

    Raises:
        InvalidToken:    bad signature, malformed token, or expired.
        MissingIdentity: the token verified but has no user id.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc
    user_id = payload.get("id")
    if not user_id:
        raise MissingIdentity("token carries no user id")
    return str(user_id)


# ---------------------------------------------------------------------------
# Cookie helpers
# ---------------------------------------------------------------------------


def set_auth_cookie(response, token: str, settings: Settings) -> None:
    """Write the JWT as the httpOnly, SameSite=Strict session cookie.

    max_age matches the JWT expiry so both expire together.
    """
    response.set_cookie(
        COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="strict",
        secure=settings.secure_cookies,
        max_age=settings.token_expire_seconds,
    )


def clear_auth_cookie(response) -> None:
    response.delete_cookie(COOKIE_NAME, httponly=True, samesite="strict")
