"""
projects/models.py -- Domain dataclasses for project ideas.

These are pure data containers with zero logic beyond serialization. Input
rules live in projects/validation.py; persistence lives in projects/store.py.
"""

from dataclasses import dataclass, field
from typing import Optional

# Closed set -- a project idea's difficulty is always one of these.
DIFFICULTIES = ("easy", "medium", "hard")


@dataclass
class StackEntry:
    """One technology-stack suggestion. All three fields are required."""

    frontend: str
    backend: str
    api: str

    def to_dict(self) -> dict:
        return {"frontend": self.frontend, "backend": self.backend, "api": self.api}


@dataclass
class Project:
    """A project idea owned by a single user.

    user is the owning user's id (a reference, not an embedded document).
    date is the server-assigned creation time and never changes afterwards.
    id is None before the record is written to the database.
    """

    name: str
    description: str
    difficulty: str
    user: str
    stack: list[StackEntry] = field(default_factory=list)
    id: Optional[str] = None
    date: str = ""  # ISO 8601 UTC, set by store on insert
    likes: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "difficulty": self.difficulty,
            "date": self.date,
            "likes": self.likes,
            "user": self.user,
            "stack": [entry.to_dict() for entry in self.stack],
        }
