"""Decorators for command functions."""

import functools
import time
from collections.abc import Callable

import typer

from todolist_cli.models.exceptions import TodoListError
from todolist_cli.utils.exit_codes import ERROR_GENERAL, exit_code_for, get_exit_code_name
from todolist_cli.utils.logger import get_logger
from todolist_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """An error raised by a command itself, carrying the exit code to use."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(func: Callable):
    """Wrap a command with timing/failure logging and error reporting.

    AppError and TodoListError are shown as plain error messages and mapped
    to their exit codes; anything else is logged with its traceback and
    reported as an unexpected error.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        name = func.__name__
        started = time.monotonic()
        logger.info("command started: %s", name)
        try:
            result = func(*args, **kwargs)
        except typer.Exit:
            raise
        except (AppError, TodoListError) as e:
            code = e.exit_code if isinstance(e, AppError) else exit_code_for(e)
            logger.error(
                "command failed: %s (%.3fs) [%s] %s",
                name,
                time.monotonic() - started,
                get_exit_code_name(code),
                e,
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e
        except Exception as e:
            logger.exception(
                "command crashed: %s (%.3fs)", name, time.monotonic() - started
            )
            format_error(f"An unexpected error occurred: {e}")
            raise typer.Exit(code=ERROR_GENERAL) from e

        logger.info("command completed: %s (%.3fs)", name, time.monotonic() - started)
        return result

    return wrapper
