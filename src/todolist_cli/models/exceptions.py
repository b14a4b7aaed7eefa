"""Custom exceptions for todolist-cli."""


class TodoListError(Exception):
    """Base exception for all todolist-cli errors."""


class StorageError(TodoListError):
    """Raised when the task store cannot be read or written.

    A store that simply does not exist yet is not an error; this is raised
    for everything else (permission problems, corrupt content, broken
    category references).
    """


class NotFoundError(TodoListError):
    """Raised when a category or task cannot be found."""


class ConflictError(TodoListError):
    """Raised when an operation is refused because of existing state.

    Examples: a duplicate category name, adding a task that is already
    stored, filing a task under a category that is not in the repository.
    """


class InvalidInputError(TodoListError):
    """Raised when user input is missing or malformed."""
