"""
tests/test_validation.py -- Unit tests for project idea input rules.
"""

from __future__ import annotations

import pytest

from core.errors import ValidationError
from projects.models import StackEntry
from projects.validation import project_changes, validate_new_project, validate_stack

FULL = {"frontend": "Vue", "backend": "Django", "api": "GraphQL"}


class TestCreateRules:
    def test_valid_project(self) -> None:
        stack = validate_new_project("n", "d", "medium", "u1", [FULL])
        assert stack == [StackEntry("Vue", "Django", "GraphQL")]

    def test_empty_stack_is_allowed(self) -> None:
        assert validate_new_project("n", "d", "easy", "u1", []) == []

    @pytest.mark.parametrize(
        "args",
        [
            (None, "d", "easy", "u1", []),
            ("n", "", "easy", "u1", []),
            ("n", "d", None, "u1", []),
            ("n", "d", "easy", None, []),
            ("n", "d", "easy", "u1", None),
        ],
    )
    def test_missing_fields(self, args) -> None:
        with pytest.raises(ValidationError, match="Missing required fields"):
            validate_new_project(*args)

    def test_difficulty_outside_closed_set(self) -> None:
        with pytest.raises(ValidationError, match="Difficulty must be easy, medium, or hard"):
            validate_new_project("n", "d", "extreme", "u1", [])

    def test_stack_must_be_array(self) -> None:
        with pytest.raises(ValidationError, match="array format"):
            validate_new_project("n", "d", "easy", "u1", {"frontend": "x"})

    @pytest.mark.parametrize("missing", ["frontend", "backend", "api"])
    def test_stack_entry_missing_field(self, missing: str) -> None:
        entry = {k: v for k, v in FULL.items() if k != missing}
        with pytest.raises(ValidationError, match="Each stack item must include frontend, backend, api"):
            validate_stack([FULL, entry])

    def test_stack_entry_blank_field(self) -> None:
        with pytest.raises(ValidationError):
            validate_stack([{**FULL, "api": ""}])

    def test_stack_entry_not_an_object(self) -> None:
        with pytest.raises(ValidationError):
            validate_stack(["React"])


class TestUpdateRules:
    def test_only_supplied_fields(self) -> None:
        assert project_changes(name="New name") == {"name": "New name"}

    def test_empty_strings_are_not_changes(self) -> None:
        assert project_changes(name="", description="", difficulty="", user="") == {}

    def test_difficulty_revalidated(self) -> None:
        with pytest.raises(ValidationError):
            project_changes(difficulty="trivial")

    def test_stack_revalidated(self) -> None:
        with pytest.raises(ValidationError):
            project_changes(stack=[{"frontend": "x"}])

    def test_stack_parsed(self) -> None:
        assert project_changes(stack=[FULL]) == {"stack": [StackEntry("Vue", "Django", "GraphQL")]}
