"""
API request and response models for the IdeaBoard REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
projects/models.py, which own the internal domain representation. Route
handlers map between the two.

Request fields are Optional on purpose: presence and business rules are
checked in the handlers (and projects/validation.py) so that each failure
carries its own message. Pydantic only rejects wrong JSON types here.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class Envelope(BaseModel):
    """Uniform response body for every endpoint, success or failure."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Payload of GET /health (inside the envelope's data field)."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class StackItem(BaseModel):
    frontend: str
    backend: str
    api: str


class ProjectCreate(BaseModel):
    """Request body for POST /projects.

    stack is typed loosely so a non-array value reaches the handler and gets
    the specific "must be in an array format" message.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    difficulty: Optional[str] = None
    user: Optional[str] = None
    stack: Any = None


class ProjectUpdate(BaseModel):
    """Request body for PUT /projects/{id}. Every field is optional."""

    name: Optional[str] = None
    description: Optional[str] = None
    difficulty: Optional[str] = None
    user: Optional[str] = None
    stack: Any = None


class ProjectOut(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    difficulty: str
    date: str
    likes: int
    user: str
    stack: list[StackItem]


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserRegister(BaseModel):
    """Request body for POST /users."""

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    """Request body for POST /users/login."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(BaseModel):
    """Request body for PUT /users/update. Only supplied fields are written."""

    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    email: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class UserOut(BaseModel):
    """Public view of a user. Password salt and hash are never included."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    username: str
    email: str
    image_url: str = Field(default="", alias="imageUrl")
    ideas: int = 0
