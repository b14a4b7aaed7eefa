"""Snapshot models describing a whole repository on disk.

A snapshot flattens the category/task graph into two lists. Tasks refer to
their category by id and appear in repository order (categories in
insertion order, tasks in insertion order within each category), so
restoring a snapshot reproduces the original ordering exactly.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

SNAPSHOT_VERSION = 1


class CategoryRecord(BaseModel):
    """Serialized category."""

    id: str
    name: str
    color: str


class TaskRecord(BaseModel):
    """Serialized task; the category link is stored as an id."""

    id: str
    title: str
    description: str = ""
    due_date: date | None = None
    completed: bool = False
    category_id: str
    created_on: date


class RepositorySnapshot(BaseModel):
    """Full state of a repository.

    Attributes:
        version: Snapshot format version
        saved_at: When the snapshot was taken
        categories: Categories in insertion order
        tasks: Tasks in repository order
    """

    version: int = SNAPSHOT_VERSION
    saved_at: datetime = Field(default_factory=datetime.now)
    categories: list[CategoryRecord] = Field(default_factory=list)
    tasks: list[TaskRecord] = Field(default_factory=list)
