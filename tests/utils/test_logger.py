"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

from todolist_cli.utils.logger import get_logger


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()

    assert (tmp_path / "todolist.log").exists()
    assert isinstance(logger, logging.Logger)
    assert logger.name == "todolist_cli"


def test_get_logger_returns_singleton(tmp_path):
    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        assert get_logger() is get_logger()


def test_get_logger_uses_rotating_handler(tmp_path):
    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()

    (handler,) = logger.handlers
    assert isinstance(handler, logging.handlers.RotatingFileHandler)
    assert handler.maxBytes == 5 * 1024 * 1024
    assert handler.backupCount == 3


def test_module_loggers_reach_the_file(tmp_path):
    """Child loggers propagate into the application log file."""
    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()
        logging.getLogger("todolist_cli.services.storage_service").info("saved store")

    for handler in logger.handlers:
        handler.flush()

    content = (tmp_path / "todolist.log").read_text()
    assert "saved store" in content
    assert "[todolist_cli.services.storage_service]" in content


def test_get_logger_creates_parent_dirs(tmp_path):
    nested = tmp_path / "a" / "b" / "c"
    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(nested)):
        get_logger()

    assert nested.is_dir()


def test_level_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("TODOLIST_LOG_LEVEL", "warning")
    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()

    assert logger.handlers[0].level == logging.WARNING


def test_bad_level_falls_back_to_debug(tmp_path, monkeypatch):
    monkeypatch.setenv("TODOLIST_LOG_LEVEL", "chatty")
    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        logger = get_logger()

    assert logger.handlers[0].level == logging.DEBUG


def test_enable_console_logging_is_idempotent(tmp_path):
    from todolist_cli.utils.logger import enable_console_logging

    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        first = enable_console_logging()
        second = enable_console_logging(logging.DEBUG)

    assert first is second
    assert second.level == logging.DEBUG
    assert len(get_logger().handlers) == 2
