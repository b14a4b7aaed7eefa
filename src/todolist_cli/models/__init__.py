"""todolist-cli domain models.

Pydantic models for the core entities (categories and tasks), the
on-disk snapshot of a repository and the application configuration.
"""

from .config_models import AppConfig, CategorySeed
from .core import Category, Task
from .exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    StorageError,
    TodoListError,
)
from .snapshot import CategoryRecord, RepositorySnapshot, TaskRecord

__all__ = [
    # Domain models
    "Category",
    "Task",
    # Persistence models
    "CategoryRecord",
    "TaskRecord",
    "RepositorySnapshot",
    # Config models
    "AppConfig",
    "CategorySeed",
    # Errors
    "TodoListError",
    "StorageError",
    "NotFoundError",
    "ConflictError",
    "InvalidInputError",
]
