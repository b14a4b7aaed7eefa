"""Unit tests for todolist_cli.utils.exit_codes."""

from __future__ import annotations

import pytest

from todolist_cli.models.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    StorageError,
    TodoListError,
)
from todolist_cli.utils.exit_codes import (
    ERROR_CONFLICT,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
    SUCCESS,
    exit_code_for,
    get_exit_code_name,
)


class TestExitCodeConstants:
    def test_values(self):
        assert (SUCCESS, ERROR_GENERAL, ERROR_INVALID_ARGS) == (0, 1, 2)
        assert (ERROR_CONFLICT, ERROR_STORAGE, ERROR_NOT_FOUND) == (3, 4, 5)

    def test_all_unique(self):
        codes = [
            SUCCESS,
            ERROR_GENERAL,
            ERROR_INVALID_ARGS,
            ERROR_CONFLICT,
            ERROR_STORAGE,
            ERROR_NOT_FOUND,
        ]
        assert len(set(codes)) == len(codes)


class TestNames:
    def test_known_name(self):
        assert get_exit_code_name(ERROR_STORAGE) == "ERROR_STORAGE"

    def test_unknown_name(self):
        assert get_exit_code_name(42) == "UNKNOWN(42)"


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (NotFoundError("x"), ERROR_NOT_FOUND),
        (ConflictError("x"), ERROR_CONFLICT),
        (InvalidInputError("x"), ERROR_INVALID_ARGS),
        (StorageError("x"), ERROR_STORAGE),
        (TodoListError("x"), ERROR_GENERAL),
        (RuntimeError("x"), ERROR_GENERAL),
    ],
)
def test_exit_code_for(error, code):
    assert exit_code_for(error) == code
