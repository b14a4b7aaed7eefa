"""In-memory repository of categories and tasks.

The repository owns the category/task relationship and every derived query
over it. It keeps an ordered list of categories for iteration order and a
mapping from category id to that category's ordered task list, so nothing
user-visible depends on dictionary ordering.

Business-rule violations (unknown category, duplicate, missing item) are
reported through return values, never exceptions. The repository performs
no I/O; persistence lives in todolist_cli.services.storage_service.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta

from todolist_cli.models.core import Category, Task
from todolist_cli.utils import dates


class TaskRepository:
    """Ordered store of categories and the tasks filed under them.

    Invariants:
        - every stored task belongs to a category that is also stored
        - a category appears at most once
        - a task appears at most once, under exactly one category
        - removing a category removes all of its tasks
    """

    def __init__(self, today: Callable[[], date] | None = None):
        """Initialize an empty repository.

        Args:
            today: Current-date source used by overdue/upcoming queries
                (defaults to todolist_cli.utils.dates.today)
        """
        self._categories: list[Category] = []
        self._tasks_by_category: dict[str, list[Task]] = {}
        self._today = today or dates.today

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, category: Category) -> bool:
        """Add a category.

        Returns:
            True if inserted, False if an equal category is already present
        """
        if category.id in self._tasks_by_category:
            return False
        self._categories.append(category)
        self._tasks_by_category[category.id] = []
        return True

    def remove_category(self, category: Category) -> bool:
        """Remove a category together with all of its tasks.

        Returns:
            True if the category was present and removed
        """
        if category.id not in self._tasks_by_category:
            return False
        del self._tasks_by_category[category.id]
        self._categories = [c for c in self._categories if c.id != category.id]
        return True

    def list_categories(self) -> list[Category]:
        """Return the categories in insertion order."""
        return list(self._categories)

    def find_category_by_name(self, name: str) -> Category | None:
        """Find the first category whose name matches, ignoring case."""
        if name is None:
            return None
        wanted = name.casefold()
        for category in self._categories:
            if category.name.casefold() == wanted:
                return category
        return None

    def find_category_by_id(self, category_id: str) -> Category | None:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def category_count(self) -> int:
        return len(self._categories)

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def add_task(self, task: Task) -> bool:
        """Add a task under its own category.

        The category must already be in the repository; it is never created
        implicitly.

        Returns:
            True if appended, False if the category is unknown or the task is
            already present
        """
        tasks = self._tasks_by_category.get(task.category.id)
        if tasks is None or task in tasks:
            return False
        tasks.append(task)
        return True

    def remove_task(self, task: Task) -> bool:
        """Remove a task from its category.

        Returns:
            True if removed, False if its category is unknown or the task is
            not stored under it
        """
        tasks = self._tasks_by_category.get(task.category.id)
        if tasks is None or task not in tasks:
            return False
        tasks.remove(task)
        return True

    def move_task(self, task: Task, category: Category) -> bool:
        """Re-file a stored task under another stored category.

        Returns:
            True if the task now belongs to *category*, False if either the
            task or the target category is not in the repository
        """
        stored = self._find_stored_task(task.id)
        target = self._tasks_by_category.get(category.id)
        if stored is None or target is None:
            return False
        if stored.category.id == category.id:
            return True
        self._tasks_by_category[stored.category.id].remove(stored)
        stored.category = category
        target.append(stored)
        return True

    def list_tasks_by_category(self, category: Category) -> list[Task]:
        """Return the tasks of a category, or [] for an unknown category."""
        return list(self._tasks_by_category.get(category.id, []))

    def list_all_tasks(self) -> list[Task]:
        """Return every task, category by category in insertion order."""
        all_tasks: list[Task] = []
        for category in self._categories:
            all_tasks.extend(self._tasks_by_category[category.id])
        return all_tasks

    def list_pending_tasks(self) -> list[Task]:
        return [task for task in self.list_all_tasks() if not task.completed]

    def list_completed_tasks(self) -> list[Task]:
        return [task for task in self.list_all_tasks() if task.completed]

    def list_overdue_tasks(self) -> list[Task]:
        """Return pending tasks whose due date is before today."""
        today = self._today()
        return [task for task in self.list_all_tasks() if task.is_overdue_on(today)]

    def list_upcoming_tasks(self, days: int) -> list[Task]:
        """Return pending tasks due within [today, today + days], inclusive.

        A negative *days* gives an empty window and therefore no tasks. A
        window reaching past the last representable date ends at date.max.
        """
        if days < 0:
            return []
        start = self._today()
        try:
            end = start + timedelta(days=days)
        except OverflowError:
            end = date.max
        return [
            task
            for task in self.list_pending_tasks()
            if task.due_date is not None and start <= task.due_date <= end
        ]

    def search_tasks(self, keyword: str | None) -> list[Task]:
        """Case-insensitive substring search over title and description.

        A missing, empty or whitespace-only keyword matches nothing.
        """
        if keyword is None or not keyword.strip():
            return []
        needle = keyword.casefold()
        return [
            task
            for task in self.list_all_tasks()
            if needle in task.title.casefold()
            or needle in (task.description or "").casefold()
        ]

    def find_task_by_id(self, task_id: str) -> Task | None:
        return self._find_stored_task(task_id)

    def task_count(self) -> int:
        return sum(len(tasks) for tasks in self._tasks_by_category.values())

    def completion_rate(self) -> float:
        """Percentage (0-100) of tasks marked completed; 0.0 when empty."""
        total = self.task_count()
        if total == 0:
            return 0.0
        return len(self.list_completed_tasks()) * 100.0 / total

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find_stored_task(self, task_id: str) -> Task | None:
        for task in self.list_all_tasks():
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return self.task_count()

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Category):
            return item.id in self._tasks_by_category
        if isinstance(item, Task):
            return item in self._tasks_by_category.get(item.category.id, [])
        return False

    def __repr__(self) -> str:
        return (
            f"TaskRepository(categories={len(self._categories)}, "
            f"tasks={self.task_count()})"
        )
