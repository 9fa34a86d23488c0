"""
auth/models.py -- Domain dataclass for the user (credential store) entity.

Pattern: Data class (pure data container, zero logic). Mirrors
projects/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/ or projects/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered account.

    username is not unique; email is unique across all users.
    password_salt / password_hash never leave the server -- route handlers
    build responses from public_fields(), not from this object directly.
    ideas is a denormalized count of authored project ideas.
    """

    username: str
    email: str
    password_salt: str
    password_hash: str
    id: str | None = None
    image_url: str = ""
    ideas: int = 0
    created_at: str | None = None

    def public_fields(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "imageUrl": self.image_url,
            "ideas": self.ideas,
        }
