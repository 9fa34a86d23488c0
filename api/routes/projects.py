"""
api/routes/projects.py -- Project idea routes for the IdeaBoard REST API.

Routes:
  GET    /projects        -- filtered, paginated listing (public)
  GET    /projects/{id}   -- single project idea (public)
  POST   /projects        -- create (requires auth)
  PUT    /projects/{id}   -- partial update (requires auth + ownership)
  DELETE /projects/{id}   -- delete (requires auth + ownership)

Listing query parameters: page, user, difficulty, likesFrom, likesTo,
dateFrom, dateTo. They are accepted as raw strings and handed to the query
builder, which never rejects them -- unusable values simply impose no
constraint.

Ownership is always checked before anything is written or deleted.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from api.models import ProjectCreate, ProjectUpdate
from api.responses import http_response, project_out
from auth.dependencies import get_current_user_id
from auth.store import UserStore
from core.errors import Forbidden, NotFound, ValidationError
from core.query import build_project_query
from projects.models import Project
from projects.store import ProjectStore
from projects.validation import project_changes, validate_new_project

logger = logging.getLogger("ideaboard.projects")

# Auth policy:
# - GET    /projects, /projects/{id}: public
# - POST   /projects:                 requires auth; body.user must be the caller
# - PUT    /projects/{id}:            requires auth + ownership
# - DELETE /projects/{id}:            requires auth + ownership
router = APIRouter()

_NOT_FOUND = "Project idea not found"
_NOT_OWNER = "Forbidden: You do not own this project idea"


def _load_owned(store: ProjectStore, project_id: str, user_id: str) -> Project:
    project = store.get_project(project_id)
    if project is None:
        raise NotFound(_NOT_FOUND)
    if project.user != user_id:
        raise Forbidden(_NOT_OWNER)
    return project


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------


@router.get("/projects")
def list_projects(
    request: Request,
    page: Optional[str] = None,
    user: Optional[str] = None,
    difficulty: Optional[str] = None,
    likes_from: Optional[str] = Query(default=None, alias="likesFrom"),
    likes_to: Optional[str] = Query(default=None, alias="likesTo"),
    date_from: Optional[str] = Query(default=None, alias="dateFrom"),
    date_to: Optional[str] = Query(default=None, alias="dateTo"),
) -> JSONResponse:
    """Return one page (10) of project ideas, newest first."""
    store: ProjectStore = request.app.state.project_store
    query = build_project_query(
        page=page,
        user=user,
        difficulty=difficulty,
        likes_from=likes_from,
        likes_to=likes_to,
        date_from=date_from,
        date_to=date_to,
    )
    found = store.list_projects(query)
    return http_response(
        200,
        "Project ideas retrieved successfully",
        {"projects": [project_out(p) for p in found]},
    )


@router.get("/projects/{project_id}")
def get_project(request: Request, project_id: str) -> JSONResponse:
    store: ProjectStore = request.app.state.project_store
    project = store.get_project(project_id)
    if project is None:
        raise NotFound(_NOT_FOUND)
    return http_response(200, "Project idea fetched successfully", {"project": project_out(project)})


# ---------------------------------------------------------------------------
# Authenticated endpoints
# ---------------------------------------------------------------------------


@router.post("/projects", status_code=201)
def create_project(
    request: Request,
    body: ProjectCreate,
    user_id: str = Depends(get_current_user_id),
) -> JSONResponse:
    """Create a project idea and count it against its owner.

    The owner must exist and must be the authenticated caller.
    """
    stack = validate_new_project(body.name, body.description, body.difficulty, body.user, body.stack)

    user_store: UserStore = request.app.state.user_store
    if user_store.get_by_id(body.user) is None:
        raise ValidationError("User not found")
    if body.user != user_id:
        raise Forbidden("Forbidden: You can only create project ideas for your own account")

    store: ProjectStore = request.app.state.project_store
    project_id = store.create_project(
        Project(
            name=body.name,
            description=body.description,
            difficulty=body.difficulty,
            user=body.user,
            stack=stack,
        )
    )
    created = store.get_project(project_id)
    return http_response(201, "Project idea created successfully", {"project": project_out(created)})


@router.put("/projects/{project_id}")
def update_project(
    request: Request,
    project_id: str,
    body: ProjectUpdate,
    user_id: str = Depends(get_current_user_id),
) -> JSONResponse:
    """Apply a partial update. Only supplied fields change."""
    store: ProjectStore = request.app.state.project_store
    _load_owned(store, project_id, user_id)

    changes = project_changes(
        name=body.name,
        description=body.description,
        difficulty=body.difficulty,
        user=body.user,
        stack=body.stack,
    )
    if "user" in changes:
        user_store: UserStore = request.app.state.user_store
        if user_store.get_by_id(changes["user"]) is None:
            raise ValidationError("User not found")

    updated = store.update_project(project_id, **changes)
    if updated is None:
        raise NotFound(_NOT_FOUND)
    return http_response(200, "Project idea updated successfully", {"project": project_out(updated)})


@router.delete("/projects/{project_id}")
def delete_project(
    request: Request,
    project_id: str,
    user_id: str = Depends(get_current_user_id),
) -> JSONResponse:
    store: ProjectStore = request.app.state.project_store
    _load_owned(store, project_id, user_id)
    if not store.delete_project(project_id):
        raise NotFound(_NOT_FOUND)
    logger.info("Project %s deleted by user %s", project_id, user_id)
    return http_response(200, "Project idea deleted successfully")
