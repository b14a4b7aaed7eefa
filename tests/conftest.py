"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories.
"""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from todolist_cli.models.config_models import AppConfig
from todolist_cli.models.core import Category, Task
from todolist_cli.repositories import TaskRepository
from todolist_cli.services.storage_service import StorageService
from todolist_cli.services.todo_service import TodoService

TODAY = date(2026, 10, 19)


@pytest.fixture(autouse=True)
def isolate_logging(tmp_path):
    """Send the application log to a temporary directory."""
    import logging

    import todolist_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("todolist_cli").handlers.clear()
    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    for handler in logging.getLogger("todolist_cli").handlers:
        handler.close()
    logging.getLogger("todolist_cli").handlers.clear()
    logger_mod._logger = None


@pytest.fixture(autouse=True)
def wide_console():
    """Keep rich from wrapping table cells in captured output."""
    from todolist_cli.utils.ui.console import get_console

    console = get_console()
    original = console.width
    console.width = 200
    yield
    console.width = original


@pytest.fixture()
def today():
    """A fixed current-date source."""
    return lambda: TODAY


@pytest.fixture()
def repo(today):
    """An empty repository with a pinned current date."""
    return TaskRepository(today=today)


@pytest.fixture()
def work():
    return Category(name="Work", color="BLUE")


@pytest.fixture()
def personal():
    return Category(name="Personal", color="GREEN")


@pytest.fixture()
def make_task():
    """Factory for tasks with sensible defaults."""

    def _make(category: Category, title: str = "Task", **kwargs) -> Task:
        return Task(title=title, category=category, **kwargs)

    return _make


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from todolist_cli.services.config_service import get_config_service

    get_config_service.cache_clear()
    with patch(
        "todolist_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        with patch(
            "todolist_cli.services.config_service.user_data_dir",
            return_value=str(tmp_path / "data"),
        ):
            from todolist_cli.services.config_service import ConfigService

            svc = ConfigService()
            yield svc
    get_config_service.cache_clear()


@pytest.fixture()
def storage(tmp_path, today):
    """A StorageService writing into *tmp_path*."""
    return StorageService(data_dir=tmp_path, today=today)


@pytest.fixture()
def todo_service(storage):
    """A TodoService on a fresh temporary store (default categories seeded)."""
    return TodoService(storage, AppConfig())


@pytest.fixture()
def patch_todo_service(todo_service):
    """Patch get_todo_service in every command module with *todo_service*."""
    targets = [
        "todolist_cli.commands.tasks.get_todo_service",
        "todolist_cli.commands.categories.get_todo_service",
        "todolist_cli.commands.data.get_todo_service",
        "todolist_cli.main.get_todo_service",
    ]
    patchers = [patch(target, return_value=todo_service) for target in targets]
    for patcher in patchers:
        patcher.start()
    yield todo_service
    for patcher in patchers:
        patcher.stop()
