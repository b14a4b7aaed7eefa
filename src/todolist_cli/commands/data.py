"""Data management commands (save, load)."""

import typer

from todolist_cli.services.todo_service import get_todo_service
from todolist_cli.utils.typer_helpers import SuggestingGroup
from todolist_cli.utils.ui.console import get_console
from todolist_cli.utils.ui.formatters import format_info, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Data management commands")
console = get_console()


@app.command("save")
@command_wrapper
def save_data(
    filename: str | None = typer.Argument(
        None, help="File to write (default: the working store; .json added if no suffix)"
    ),
) -> None:
    """
    Save the whole task list to a file.

    Examples:
        todolist data save
        todolist data save backup
        todolist data save ~/exports/tasks.json.gz
    """
    service = get_todo_service()
    path = service.save_to(filename)
    format_success(f"Task list saved to {path}")


@app.command("load")
@command_wrapper
def load_data(
    filename: str = typer.Argument(..., help="File to read (.json added if no suffix)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Replace the working task list with the contents of a file."""
    service = get_todo_service()
    source = service.storage.resolve_path(filename)

    if not yes and service.repository.task_count():
        if not typer.confirm(
            f"Replace the current {service.repository.task_count()} task(s) "
            f"with the contents of {source}?",
            default=False,
        ):
            console.print("[yellow]Load cancelled.[/yellow]")
            return

    repository, existed = service.load_from(filename)
    if not existed:
        format_warning(f"No saved list at {source}; starting with an empty list")
    service.commit()
    format_success(
        f"Loaded {repository.category_count()} categories and "
        f"{repository.task_count()} tasks from {source}"
    )


@app.command("path")
@command_wrapper
def data_path() -> None:
    """Show where the working task list is stored."""
    service = get_todo_service()
    format_info(str(service.storage.default_file))
