"""Process exit codes, so scripts can tell failures apart without parsing output."""

from todolist_cli.models.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    StorageError,
)

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2  # bad option value, empty title, unparseable input
ERROR_CONFLICT = 3  # duplicate category, task filed under a foreign category
ERROR_STORAGE = 4  # task store unreadable or unwritable
ERROR_NOT_FOUND = 5

_NAMES = {
    SUCCESS: "SUCCESS",
    ERROR_GENERAL: "ERROR_GENERAL",
    ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
    ERROR_CONFLICT: "ERROR_CONFLICT",
    ERROR_STORAGE: "ERROR_STORAGE",
    ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
}

_ERROR_CODES = (
    (NotFoundError, ERROR_NOT_FOUND),
    (ConflictError, ERROR_CONFLICT),
    (InvalidInputError, ERROR_INVALID_ARGS),
    (StorageError, ERROR_STORAGE),
)


def get_exit_code_name(code: int) -> str:
    """Symbolic name of an exit code, as written to the log."""
    return _NAMES.get(code, f"UNKNOWN({code})")


def exit_code_for(error: Exception) -> int:
    """Map a todolist-cli exception to its exit code."""
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return ERROR_GENERAL
