"""
auth/store.py -- SQLAlchemy Core persistence layer for user accounts.

Pattern: Repository + Data Mapper (same as projects/store.py).
UserStore is the repository; _row_to_user is the mapper. Route and dependency
code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

Uniqueness:
  email carries a UNIQUE constraint, so two concurrent registrations that both
  pass the route's existence check cannot both commit -- the loser gets an
  IntegrityError, which create_user() turns into Conflict. username is not
  unique at the storage level; its uniqueness is a check-then-act in the
  route layer and therefore not atomic.

Layer rule: no imports from api/ or projects/.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, create_engine, event, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from auth.models import User
from core.errors import Conflict
from core.query import ListQuery, format_timestamp

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("username", String(255), nullable=False, index=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("image_url", Text, nullable=False, server_default=""),
    Column("ideas", Integer, nullable=False, server_default="0"),
    Column("password_salt", String(64), nullable=False),
    Column("password_hash", String(128), nullable=False),
    Column("created_at", String(32), nullable=False),
)

# Fields a caller may change through update_user().
_MUTABLE_FIELDS = {"username", "email", "image_url"}


# ---------------------------------------------------------------------------
# Shared helpers (also used by projects/store.py)
# ---------------------------------------------------------------------------


def new_id() -> str:
    return uuid.uuid4().hex


def now_iso() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def make_engine(db_url: str) -> Engine:
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        # FastAPI runs sync handlers in a thread pool.
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", set_wal_mode)
    return engine


def apply_list_query(stmt, table: Table, query: ListQuery):
    """Translate a ListQuery filter expression, sort, and page onto a SELECT."""
    for key, condition in query.filter.items():
        column = table.c[key]
        if isinstance(condition, dict):
            if "gte" in condition:
                stmt = stmt.where(column >= condition["gte"])
            if "lte" in condition:
                stmt = stmt.where(column <= condition["lte"])
        else:
            stmt = stmt.where(column == condition)
    if query.sort is not None:
        name, descending = query.sort
        column = table.c[name]
        # id breaks ties so consecutive pages never overlap.
        if descending:
            stmt = stmt.order_by(column.desc(), table.c.id.desc())
        else:
            stmt = stmt.order_by(column.asc(), table.c.id.asc())
    else:
        stmt = stmt.order_by(table.c.created_at.asc(), table.c.id.asc())
    return stmt.offset(query.skip).limit(query.limit)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User entities.

    Usage:
        store = UserStore("sqlite:///ideaboard.db")
        salt, hashed = set_password("password1")
        user_id = store.create_user(User("ada", "ada@example.com", salt, hashed))
        user = store.get_by_email("ada@example.com")
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        metadata.create_all(self.engine)

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, user_id: str) -> User | None:
        with self.engine.connect() as conn:
            row = conn.execute(users.select().where(users.c.id == user_id)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by exact email (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(users.select().where(users.c.email == email)).fetchone()
        return _row_to_user(row) if row is not None else None

    def field_in_use(self, field: str, value: str, exclude_id: str | None = None) -> bool:
        """Return True if another user already has this username or email.

        exclude_id leaves the caller's own record out of the check, so a user
        resubmitting their current username/email is not a conflict.
        """
        column = users.c[field]
        stmt = select(users.c.id).where(column == value)
        if exclude_id is not None:
            stmt = stmt.where(users.c.id != exclude_id)
        with self.engine.connect() as conn:
            row = conn.execute(stmt.limit(1)).fetchone()
        return row is not None

    def list_users(self, query: ListQuery) -> list[User]:
        """Return one page of users matching the query filter."""
        stmt = apply_list_query(users.select(), users, query)
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [_row_to_user(r) for r in rows]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_user(self, user: User) -> str:
        """Insert a new user and return its assigned id.

        Raises Conflict if the email is already taken (UNIQUE constraint).
        """
        user_id = new_id()
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    users.insert().values(
                        id=user_id,
                        username=user.username,
                        email=user.email,
                        image_url=user.image_url or "",
                        ideas=0,
                        password_salt=user.password_salt,
                        password_hash=user.password_hash,
                        created_at=now_iso(),
                    )
                )
        except IntegrityError as exc:
            raise Conflict("email is already in use") from exc
        return user_id

    def update_user(self, user_id: str, **fields: Any) -> User | None:
        """Apply a partial update and return the updated user.

        Accepted fields: username, email, image_url. Returns None if user_id
        was not found. Raises Conflict if the new email collides.
        """
        unknown = set(fields) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown user fields: {unknown!r}")
        if fields:
            try:
                with self.engine.begin() as conn:
                    conn.execute(users.update().where(users.c.id == user_id).values(**fields))
            except IntegrityError as exc:
                raise Conflict("email is already in use") from exc
        return self.get_by_id(user_id)

    def delete_user(self, user_id: str) -> bool:
        """Delete a user record. Returns True if deleted, False if not found.

        Project ideas owned by the user are left in place.
        """
        with self.engine.begin() as conn:
            result = conn.execute(users.delete().where(users.c.id == user_id))
        return result.rowcount > 0

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        image_url=row.image_url or "",
        ideas=row.ideas,
        password_salt=row.password_salt,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )
