"""
api/responses.py -- Envelope builder and domain -> wire mappers.

Every endpoint answers with the same shape:

    {"status_code": 200, "message": "...", "data": {...}}

Handlers and exception handlers both go through http_response() so clients
parse one schema regardless of outcome.
"""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

from api.models import Envelope, ProjectOut, UserOut
from auth.models import User
from projects.models import Project


def http_response(status_code: int, message: str, data: dict[str, Any] | None = None) -> JSONResponse:
    body = Envelope(status_code=status_code, message=message, data=data or {})
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def project_out(project: Project) -> dict[str, Any]:
    return ProjectOut.model_validate(project.to_dict()).model_dump()


def user_out(user: User) -> dict[str, Any]:
    return UserOut.model_validate(user.public_fields()).model_dump(by_alias=True)
