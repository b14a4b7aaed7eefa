"""Services module for todolist-cli - Business logic layer."""

from .config_service import ConfigService, get_config_service
from .storage_service import StorageService
from .todo_service import TodoService, get_todo_service

__all__ = [
    "ConfigService",
    "StorageService",
    "TodoService",
    "get_config_service",
    "get_todo_service",
]
