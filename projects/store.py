"""
projects/store.py -- SQLAlchemy-backed persistence layer for project ideas.

Uses SQLAlchemy Core (not ORM) so the dataclasses in projects/models.py remain
the authoritative domain representation. The stack sequence is stored as a
JSON document in a text column.

Pattern: Repository + Data Mapper. ProjectStore is the repository; _row_to_project
is the mapper. Route handlers never touch SQL directly.

Owner counter:
  create_project() inserts the project and bumps users.ideas in a single
  transaction with an in-place "ideas = ideas + 1", so a saved project is
  always reflected in its owner's count. The owner table must live in the same
  database as the projects table.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = ProjectStore("sqlite:///ideaboard.db")
    project_id = store.create_project(project)
    page = store.list_projects(build_project_query(page=2))
    store.close()
"""

import json
import logging
from typing import Any, Optional

from sqlalchemy import Column, Integer, MetaData, String, Table, Text
from sqlalchemy.engine import Engine

from auth.store import apply_list_query, make_engine, new_id, now_iso, users
from core.errors import ValidationError
from core.query import ListQuery
from projects.models import Project, StackEntry

logger = logging.getLogger("ideaboard.projects")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

projects = Table(
    "projects",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False),
    Column("difficulty", String(10), nullable=False),
    Column("date", String(32), nullable=False, index=True),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column("user", String(32), nullable=False, index=True),
    Column("stack", Text, nullable=False),  # JSON array of {frontend, backend, api}
)

_MUTABLE_FIELDS = {"name", "description", "difficulty", "user", "stack"}


def _dump_stack(stack: list[StackEntry]) -> str:
    return json.dumps([entry.to_dict() for entry in stack])


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ProjectStore:
    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        metadata.create_all(self.engine)

    def create_project(self, project: Project) -> str:
        """Insert a project idea, bump the owner's idea count, and return the new id.

        Raises ValidationError if the owning user does not exist; nothing is
        written in that case.
        """
        project_id = new_id()
        with self.engine.begin() as conn:
            bumped = conn.execute(users.update().where(users.c.id == project.user).values(ideas=users.c.ideas + 1))
            if bumped.rowcount == 0:
                raise ValidationError("User not found")
            conn.execute(
                projects.insert().values(
                    id=project_id,
                    name=project.name,
                    description=project.description,
                    difficulty=project.difficulty,
                    date=now_iso(),
                    likes=0,
                    user=project.user,
                    stack=_dump_stack(project.stack),
                )
            )
        logger.info("Project %s created by user %s", project_id, project.user)
        return project_id

    def get_project(self, project_id: str) -> Optional[Project]:
        """Fetch a single project idea by id. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(projects.select().where(projects.c.id == project_id)).fetchone()
        return _row_to_project(row) if row is not None else None

    def list_projects(self, query: ListQuery) -> list[Project]:
        """Return one page of project ideas matching the query filter."""
        stmt = apply_list_query(projects.select(), projects, query)
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [_row_to_project(r) for r in rows]

    def update_project(self, project_id: str, **fields: Any) -> Optional[Project]:
        """Apply a partial update and return the updated project idea.

        Accepts any subset of: name, description, difficulty, user, stack.
        stack must be passed as list[StackEntry]; this method serializes it.
        date and likes are not writable here. Returns None if not found.
        """
        unknown = set(fields) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown project fields: {unknown!r}")
        if "stack" in fields:
            fields["stack"] = _dump_stack(fields["stack"])
        if fields:
            with self.engine.begin() as conn:
                conn.execute(projects.update().where(projects.c.id == project_id).values(**fields))
        return self.get_project(project_id)

    def delete_project(self, project_id: str) -> bool:
        """Delete a project idea. Returns True if deleted, False if not found."""
        with self.engine.begin() as conn:
            result = conn.execute(projects.delete().where(projects.c.id == project_id))
        return result.rowcount > 0

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern -- DB row -> domain dataclass)
# ---------------------------------------------------------------------------


def _row_to_project(row) -> Project:
    stack = [StackEntry(**item) for item in json.loads(row.stack)] if row.stack else []
    return Project(
        id=row.id,
        name=row.name,
        description=row.description,
        difficulty=row.difficulty,
        date=row.date,
        likes=row.likes,
        user=row.user,
        stack=stack,
    )
