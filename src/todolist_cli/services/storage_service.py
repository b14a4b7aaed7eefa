"""Storage service - full-state persistence of a TaskRepository.

The whole repository is written as one JSON document (a RepositorySnapshot)
and read back as one unit; there is no partial persistence. Paths ending in
``.gz`` are gzip-compressed.

Loading a store that does not exist yields a fresh, empty repository. Any
other failure (permissions, unreadable or corrupt content, dangling category
references) raises StorageError.
"""

from __future__ import annotations

import gzip
import logging
import os
import tempfile
from collections.abc import Callable
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from todolist_cli.models.core import Category, Task
from todolist_cli.models.exceptions import StorageError
from todolist_cli.models.snapshot import (
    SNAPSHOT_VERSION,
    CategoryRecord,
    RepositorySnapshot,
    TaskRecord,
)
from todolist_cli.repositories import TaskRepository

DEFAULT_SUFFIX = ".json"

logger = logging.getLogger(__name__)


def to_snapshot(repository: TaskRepository) -> RepositorySnapshot:
    """Flatten a repository into a snapshot, preserving its ordering."""
    return RepositorySnapshot(
        categories=[
            CategoryRecord(id=c.id, name=c.name, color=c.color)
            for c in repository.list_categories()
        ],
        tasks=[
            TaskRecord(
                id=t.id,
                title=t.title,
                description=t.description,
                due_date=t.due_date,
                completed=t.completed,
                category_id=t.category.id,
                created_on=t.created_on,
            )
            for t in repository.list_all_tasks()
        ],
    )


def from_snapshot(
    snapshot: RepositorySnapshot, today: Callable[[], date] | None = None
) -> TaskRepository:
    """Rebuild a repository from a snapshot.

    Raises:
        StorageError: If the snapshot is from a newer format, or a task
            refers to a category that is not in the snapshot
    """
    if snapshot.version > SNAPSHOT_VERSION:
        raise StorageError(
            f"Unsupported store version {snapshot.version} "
            f"(this version reads up to {SNAPSHOT_VERSION})"
        )

    repository = TaskRepository(today=today)
    categories: dict[str, Category] = {}
    for record in snapshot.categories:
        category = Category(id=record.id, name=record.name, color=record.color)
        if repository.add_category(category):
            categories[category.id] = category

    for record in snapshot.tasks:
        category = categories.get(record.category_id)
        if category is None:
            raise StorageError(
                f"Task {record.id} refers to unknown category {record.category_id}"
            )
        task = Task(
            id=record.id,
            title=record.title,
            description=record.description,
            due_date=record.due_date,
            completed=record.completed,
            category=category,
            created_on=record.created_on,
        )
        if not repository.add_task(task):
            raise StorageError(f"Duplicate task {record.id} in store")

    return repository


class StorageService:
    """Save and load whole repositories to and from files."""

    def __init__(
        self,
        data_dir: str | Path,
        default_file: str | Path | None = None,
        today: Callable[[], date] | None = None,
    ):
        """Initialize the storage service.

        Args:
            data_dir: Directory that bare file names resolve against
            default_file: Store used when no name is given
            today: Current-date source handed to loaded repositories
        """
        self.data_dir = Path(data_dir)
        self.default_file = (
            Path(default_file) if default_file else self.data_dir / f"todolist{DEFAULT_SUFFIX}"
        )
        self._today = today

    def resolve_path(self, name: str | Path | None = None) -> Path:
        """Apply the file naming convention to a user-supplied name.

        - blank -> the default store
        - no suffix -> ``.json`` appended
        - bare file name -> placed in the data directory
        """
        if name is None or not str(name).strip():
            return self.default_file

        path = Path(str(name).strip()).expanduser()
        if not path.suffix:
            path = path.with_name(path.name + DEFAULT_SUFFIX)
        if not path.is_absolute() and path.parent == Path("."):
            path = self.data_dir / path
        return path

    def exists(self, path: str | Path | None = None) -> bool:
        target = self.resolve_path(path)
        return target.is_file()

    def save(self, repository: TaskRepository, path: str | Path | None = None) -> Path:
        """Write the whole repository to *path* atomically.

        Returns:
            The path written

        Raises:
            StorageError: If the file cannot be written
        """
        target = self.resolve_path(path)
        payload = to_snapshot(repository).model_dump_json(indent=2)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    data = payload.encode("utf-8")
                    if target.suffix == ".gz":
                        data = gzip.compress(data)
                    f.write(data)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to save task store {target}: {e}") from e

        logger.info(
            "Saved %d categories and %d tasks to %s",
            repository.category_count(),
            repository.task_count(),
            target,
        )
        return target

    def load(self, path: str | Path | None = None) -> TaskRepository:
        """Read a whole repository from *path*.

        Returns:
            The loaded repository, or an empty one if the file does not exist

        Raises:
            StorageError: If the file exists but cannot be read or parsed
        """
        target = self.resolve_path(path)

        try:
            raw = self._read(target)
        except FileNotFoundError:
            logger.info("No task store at %s, starting empty", target)
            return TaskRepository(today=self._today)
        except (OSError, EOFError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read task store {target}: {e}") from e

        try:
            snapshot = RepositorySnapshot.model_validate_json(raw)
        except ValidationError as e:
            raise StorageError(f"Task store {target} is corrupt: {e}") from e

        repository = from_snapshot(snapshot, today=self._today)
        logger.info(
            "Loaded %d categories and %d tasks from %s",
            repository.category_count(),
            repository.task_count(),
            target,
        )
        return repository

    @staticmethod
    def _read(path: Path) -> str:
        if path.suffix == ".gz":
            with gzip.open(path, "rt", encoding="utf-8") as f:
                return f.read()
        with open(path, encoding="utf-8") as f:
            return f.read()
