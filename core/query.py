"""
core/query.py -- Query Builder for the project and user listing endpoints.

Translates the flat, optional query-string parameters of a listing request
into a ListQuery: a filter expression plus a pagination window and an optional
sort. The filter expression is a plain dict the stores translate into SQL:

    {"difficulty": "easy", "likes": {"gte": 5, "lte": 10}}

Exact-match keys map to a string; range keys map to a dict holding "gte"
and/or "lte". A range key exists only when at least one bound was usable.

Building never fails. Absent, empty, or unparseable input degrades to
"no constraint" (filters) or page 1 (pagination) rather than an error.

Layer rule: core/ is the kernel. No imports from api/, auth/, or projects/.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

PAGE_SIZE = 10

# Bound parameters must fit a signed 64-bit INTEGER column.
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1
_MAX_PAGE = _INT_MAX // PAGE_SIZE


@dataclass(frozen=True)
class ListQuery:
    """A fully-resolved listing request.

    sort is (field, descending) or None for store order.
    """

    filter: dict[str, Any] = field(default_factory=dict)
    page: int = 1
    sort: Optional[tuple[str, bool]] = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * PAGE_SIZE

    @property
    def limit(self) -> int:
        return PAGE_SIZE


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as fixed-width UTC ISO 8601.

    Stored creation dates and date-range bounds both go through here, so
    string comparison in the database orders them chronologically. Naive
    datetimes are treated as UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


def _number(value: Any) -> Optional[float | int]:
    text = _text(value)
    if text is None:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if not number.is_integer():
        return number
    return min(max(int(number), _INT_MIN), _INT_MAX)


def _timestamp(value: Any) -> Optional[str]:
    text = _text(value)
    if text is None:
        return None
    try:
        # Offsets near year 1 or 9999 push the UTC conversion out of range.
        return format_timestamp(datetime.fromisoformat(text.strip()))
    except (ValueError, OverflowError):
        return None


def parse_page(value: Any) -> int:
    """Return a 1-based page number.

    Missing, invalid, < 1, or too large to offset into a table means page 1.
    """
    number = _number(value)
    if number is None:
        return 1
    page = int(number)
    return page if 1 <= page <= _MAX_PAGE else 1


def _range(low: Any, high: Any, coerce: Callable[[Any], Any]) -> Optional[dict[str, Any]]:
    bounds: dict[str, Any] = {}
    gte = coerce(low)
    if gte is not None:
        bounds["gte"] = gte
    lte = coerce(high)
    if lte is not None:
        bounds["lte"] = lte
    return bounds or None


def _exact(filter_: dict[str, Any], key: str, value: Any) -> None:
    text = _text(value)
    if text is not None:
        filter_[key] = text


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_project_query(
    page: Any = None,
    user: Any = None,
    difficulty: Any = None,
    likes_from: Any = None,
    likes_to: Any = None,
    date_from: Any = None,
    date_to: Any = None,
) -> ListQuery:
    """Build the filter for GET /projects. Newest project ideas first."""
    filter_: dict[str, Any] = {}
    _exact(filter_, "user", user)
    _exact(filter_, "difficulty", difficulty)

    likes = _range(likes_from, likes_to, _number)
    if likes:
        filter_["likes"] = likes

    date = _range(date_from, date_to, _timestamp)
    if date:
        filter_["date"] = date

    return ListQuery(filter=filter_, page=parse_page(page), sort=("date", True))


def build_user_query(
    page: Any = None,
    username: Any = None,
    email: Any = None,
    ideas_from: Any = None,
    ideas_to: Any = None,
) -> ListQuery:
    """Build the filter for GET /users."""
    filter_: dict[str, Any] = {}
    _exact(filter_, "username", username)
    _exact(filter_, "email", email)

    ideas = _range(ideas_from, ideas_to, _number)
    if ideas:
        filter_["ideas"] = ideas

    return ListQuery(filter=filter_, page=parse_page(page))
