"""Todo service - Business logic between commands and the repository.

TodoService owns the one TaskRepository a process works with. It loads it
from the working store on first use, seeds default categories on a first
run, translates the repository's boolean/None results into exceptions the
command layer can report, and saves the repository back when it changed.
"""

from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any

from todolist_cli.models.config_models import AppConfig
from todolist_cli.models.core import Category, Task
from todolist_cli.models.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
)
from todolist_cli.repositories import TaskRepository
from todolist_cli.services.config_service import get_config_service
from todolist_cli.services.storage_service import StorageService
from todolist_cli.utils.uuid_utils import resolve_id

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class TodoService:
    """Service for category and task operations on the working store.

    Attributes:
        storage: StorageService used to read/write stores
        config: Application configuration
    """

    def __init__(self, storage: StorageService, config: AppConfig):
        """Initialize the todo service.

        Args:
            storage: StorageService used for the working store and named files
            config: Application configuration (seeding, colours, autosave)
        """
        self.storage = storage
        self.config = config
        self._repository: TaskRepository | None = None
        self._dirty = False

    # ------------------------------------------------------------------
    # Working store
    # ------------------------------------------------------------------

    @property
    def repository(self) -> TaskRepository:
        """The working repository, loaded on first access."""
        if self._repository is None:
            self._repository = self._load_working_store()
        return self._repository

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def _load_working_store(self) -> TaskRepository:
        first_run = not self.storage.exists()
        repository = self.storage.load()
        if first_run and self.config.defaults.seed_categories:
            for seed in self.config.defaults.categories:
                repository.add_category(Category(name=seed.name, color=seed.color.upper()))
            self._dirty = True
            logger.info("Seeded %d default categories", repository.category_count())
        return repository

    def commit(self) -> Path | None:
        """Save the working store if it changed and autosave is on.

        On first run the freshly seeded store counts as a change.
        """
        repository = self.repository
        if not self._dirty or not self.config.storage.autosave:
            return None
        path = self.storage.save(repository)
        self._dirty = False
        return path

    def save_to(self, name: str | None = None) -> Path:
        """Write the working repository to a named file (or the working store)."""
        path = self.storage.save(self.repository, name)
        if self.storage.resolve_path(name) == self.storage.resolve_path(None):
            self._dirty = False
        return path

    def load_from(self, name: str | None = None) -> tuple[TaskRepository, bool]:
        """Replace the working repository with the contents of a named file.

        Returns:
            The loaded repository and whether the file existed (a missing
            file yields an empty repository)
        """
        existed = self.storage.exists(name)
        repository = self.storage.load(name)
        self._repository = repository
        self._dirty = True
        return repository, existed

    def replace_repository(self, repository: TaskRepository) -> None:
        self._repository = repository
        self._dirty = True

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self) -> list[Category]:
        return self.repository.list_categories()

    def get_category(self, name: str) -> Category:
        """Find a category by name (case-insensitive).

        Raises:
            NotFoundError: If no category has that name
        """
        category = self.repository.find_category_by_name(name)
        if category is None:
            raise NotFoundError(f"Category '{name}' not found")
        return category

    def add_category(self, name: str, color: str | None = None) -> Category:
        """Create a category.

        Raises:
            InvalidInputError: If the name is blank
            ConflictError: If a category with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Category name cannot be empty")
        if self.repository.find_category_by_name(name) is not None:
            raise ConflictError(f"A category named '{name}' already exists")

        color = (color or "").strip() or self.config.defaults.category_color
        category = Category(name=name, color=color.upper())
        if not self.repository.add_category(category):
            raise ConflictError(f"Category '{name}' is already in the list")
        self._dirty = True
        return category

    def remove_category(self, name: str) -> tuple[Category, int]:
        """Delete a category and every task in it.

        Returns:
            The removed category and the number of tasks removed with it
        """
        category = self.get_category(name)
        task_count = len(self.repository.list_tasks_by_category(category))
        self.repository.remove_category(category)
        self._dirty = True
        return category, task_count

    def update_category(
        self, name: str, *, new_name: str | None = None, color: str | None = None
    ) -> Category:
        """Rename and/or recolour a category."""
        category = self.get_category(name)
        if new_name is not None:
            new_name = new_name.strip()
            if not new_name:
                raise InvalidInputError("Category name cannot be empty")
            clash = self.repository.find_category_by_name(new_name)
            if clash is not None and clash != category:
                raise ConflictError(f"A category named '{new_name}' already exists")
            category.name = new_name
        if color is not None and color.strip():
            category.color = color.strip().upper()
        self._dirty = True
        return category

    def count_tasks_in(self, category: Category) -> int:
        return len(self.repository.list_tasks_by_category(category))

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def add_task(
        self,
        title: str,
        *,
        description: str = "",
        due_date: date | None = None,
        category_name: str | None = None,
    ) -> Task:
        """Create a task and file it under a category.

        When *category_name* is omitted the first category is used.

        Raises:
            InvalidInputError: If the title is blank or there are no categories
            NotFoundError: If the named category does not exist
        """
        title = (title or "").strip()
        if not title:
            raise InvalidInputError("Task title cannot be empty")

        if category_name:
            category = self.get_category(category_name)
        else:
            categories = self.repository.list_categories()
            if not categories:
                raise InvalidInputError("Create at least one category first")
            category = categories[0]

        task = Task(
            title=title,
            description=(description or "").strip(),
            due_date=due_date,
            category=category,
        )
        if not self.repository.add_task(task):
            raise ConflictError(f"Task could not be added to '{category.name}'")
        self._dirty = True
        return task

    def get_task(self, task_id: str) -> Task:
        """Find a task by full id or unique id prefix.

        Raises:
            NotFoundError: If nothing (or more than one task) matches
        """
        candidates = [t.id for t in self.repository.list_all_tasks()]
        try:
            full_id = resolve_id(candidates, task_id)
        except ValueError as e:
            raise NotFoundError(str(e)) from e
        task = self.repository.find_task_by_id(full_id)
        if task is None:
            raise NotFoundError(f"Task '{task_id}' not found")
        return task

    def complete_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        task.mark_as_completed()
        self._dirty = True
        return task

    def reopen_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        task.mark_as_incomplete()
        self._dirty = True
        return task

    def delete_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        if not self.repository.remove_task(task):
            raise NotFoundError(f"Task '{task_id}' not found")
        self._dirty = True
        return task

    def update_task(
        self,
        task_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        due_date: date | None = _UNSET,
        category_name: str | None = None,
    ) -> Task:
        """Edit a task's fields.

        Only the given fields change. Pass ``due_date=None`` to clear the due
        date; leave it out to keep it.
        """
        task = self.get_task(task_id)
        if title is not None:
            title = title.strip()
            if not title:
                raise InvalidInputError("Task title cannot be empty")
        if category_name is not None:
            category = self.get_category(category_name)
            if not self.repository.move_task(task, category):
                raise ConflictError(f"Task could not be moved to '{category.name}'")

        if title is not None:
            task.title = title
        if description is not None:
            task.description = description.strip()
        if due_date is not _UNSET:
            task.due_date = due_date
        self._dirty = True
        return task

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_tasks(self, *, status: str = "all", category_name: str | None = None) -> list[Task]:
        """List tasks, optionally filtered by status and category.

        Args:
            status: One of "all", "pending", "completed", "overdue"
            category_name: Only tasks of this category

        Raises:
            InvalidInputError: For an unknown status
        """
        repo = self.repository
        if status == "all":
            tasks = repo.list_all_tasks()
        elif status == "pending":
            tasks = repo.list_pending_tasks()
        elif status == "completed":
            tasks = repo.list_completed_tasks()
        elif status == "overdue":
            tasks = repo.list_overdue_tasks()
        else:
            raise InvalidInputError(
                f"Unknown status '{status}' (expected all, pending, completed or overdue)"
            )

        if category_name:
            category = self.get_category(category_name)
            tasks = [t for t in tasks if t.category == category]
        return tasks

    def upcoming_tasks(self, days: int | None = None) -> list[Task]:
        if days is None:
            days = self.config.display.upcoming_days
        return self.repository.list_upcoming_tasks(days)

    def search_tasks(self, keyword: str | None) -> list[Task]:
        return self.repository.search_tasks(keyword)

    def stats(self) -> dict[str, Any]:
        """Summary counts for the working repository."""
        repo = self.repository
        return {
            "total": repo.task_count(),
            "completed": len(repo.list_completed_tasks()),
            "pending": len(repo.list_pending_tasks()),
            "overdue": len(repo.list_overdue_tasks()),
            "completion_rate": repo.completion_rate(),
            "categories": [
                {
                    "name": c.name,
                    "color": c.color,
                    "tasks": len(repo.list_tasks_by_category(c)),
                    "completed": sum(1 for t in repo.list_tasks_by_category(c) if t.completed),
                }
                for c in repo.list_categories()
            ],
        }


@lru_cache(maxsize=1)
def get_todo_service() -> TodoService:
    """Get a cached TodoService bound to the configured working store."""
    config_service = get_config_service()
    storage = StorageService(
        data_dir=config_service.data_dir,
        default_file=config_service.data_file,
    )
    return TodoService(storage, config_service.config)
