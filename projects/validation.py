"""
projects/validation.py -- Input rules for creating and updating project ideas.

Creation and update share the same difficulty and stack rules, so an update
can never put a project into a state creation would have refused. Every
failure raises core.errors.ValidationError with a user-safe message.
"""

from __future__ import annotations

from typing import Any, Optional

from core.errors import ValidationError
from projects.models import DIFFICULTIES, StackEntry

_STACK_FIELDS = ("frontend", "backend", "api")


def validate_difficulty(difficulty: str) -> str:
    if difficulty not in DIFFICULTIES:
        raise ValidationError("Difficulty must be easy, medium, or hard")
    return difficulty


def _valid_entry(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    return all(isinstance(item.get(name), str) and item.get(name) for name in _STACK_FIELDS)


def validate_stack(stack: Any) -> list[StackEntry]:
    """Return the stack as StackEntry objects; an empty list is allowed."""
    if not isinstance(stack, list):
        raise ValidationError("The stack must be in an array format")
    if not all(_valid_entry(item) for item in stack):
        raise ValidationError("Each stack item must include frontend, backend, api")
    return [StackEntry(item["frontend"], item["backend"], item["api"]) for item in stack]


def validate_new_project(
    name: Optional[str],
    description: Optional[str],
    difficulty: Optional[str],
    user: Optional[str],
    stack: Any,
) -> list[StackEntry]:
    """Check a create request. Returns the parsed stack."""
    if not name or not description or not difficulty or not user or stack is None:
        raise ValidationError("Missing required fields")
    validate_difficulty(difficulty)
    return validate_stack(stack)


def project_changes(
    name: Optional[str] = None,
    description: Optional[str] = None,
    difficulty: Optional[str] = None,
    user: Optional[str] = None,
    stack: Any = None,
) -> dict[str, Any]:
    """Collect the fields an update request actually supplies.

    Empty strings count as "not supplied". Difficulty and stack are
    re-validated with the creation rules.
    """
    changes: dict[str, Any] = {}
    if name:
        changes["name"] = name
    if description:
        changes["description"] = description
    if difficulty:
        changes["difficulty"] = validate_difficulty(difficulty)
    if user:
        changes["user"] = user
    if stack is not None:
        changes["stack"] = validate_stack(stack)
    return changes
