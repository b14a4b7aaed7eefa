"""Category and task domain models."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from todolist_cli.utils import dates
from todolist_cli.utils.uuid_utils import CATEGORY_PREFIX, TASK_PREFIX, generate_id


class Category(BaseModel):
    """A named, coloured grouping that tasks belong to.

    Attributes:
        id: Generated unique identifier, immutable once created
        name: Display name
        color: Free-form colour tag (e.g. "RED", "BLUE")

    Two categories are the same category when their ids match, whatever
    their current name or colour.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: generate_id(CATEGORY_PREFIX), frozen=True)
    name: str
    color: str = "BLACK"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name


class Task(BaseModel):
    """A unit of work filed under exactly one category.

    Attributes:
        id: Generated unique identifier, immutable once created
        title: Short title
        description: Optional longer text (may be empty)
        due_date: Optional due date
        completed: Completion flag, False on construction
        category: The category this task belongs to
        created_on: Day the task was created, immutable
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: generate_id(TASK_PREFIX), frozen=True)
    title: str
    description: str = ""
    due_date: date | None = None
    completed: bool = False
    category: Category
    created_on: date = Field(default_factory=lambda: dates.today(), frozen=True)

    def mark_as_completed(self) -> None:
        """Move the task to the Completed state."""
        self.completed = True

    def mark_as_incomplete(self) -> None:
        """Move the task back to the Pending state."""
        self.completed = False

    def is_overdue_on(self, day: date) -> bool:
        """Return True if the task is still pending and was due before *day*."""
        return not self.completed and self.due_date is not None and self.due_date < day

    @property
    def is_overdue(self) -> bool:
        return self.is_overdue_on(dates.today())

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
