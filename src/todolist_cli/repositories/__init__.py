"""Repositories for todolist-cli.

TaskRepository is the in-memory store of categories and tasks. Persisting it
to disk is handled by todolist_cli.services.storage_service.
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
