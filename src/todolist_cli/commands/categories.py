"""Category management commands."""

import typer

from todolist_cli.services.todo_service import get_todo_service
from todolist_cli.utils.typer_helpers import SuggestingGroup
from todolist_cli.utils.ui.console import get_console
from todolist_cli.utils.ui.formatters import (
    category_to_dict,
    format_categories_table,
    format_output,
    format_success,
    format_warning,
)

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Category management commands")
console = get_console()


@app.command("list")
@command_wrapper
def list_categories(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List categories with their task counts."""
    service = get_todo_service()
    rows = [(c, service.count_tasks_in(c)) for c in service.list_categories()]
    service.commit()

    if output in ("json", "yaml"):
        format_output({"categories": [category_to_dict(c, n) for c, n in rows]}, output)
    else:
        format_categories_table(rows)


@app.command("add")
@command_wrapper
def add_category(
    name: str = typer.Argument(..., help="Category name"),
    color: str | None = typer.Option(
        None, "--color", help="Colour tag (RED, BLUE, GREEN, ...)"
    ),
) -> None:
    """Create a new category."""
    service = get_todo_service()
    category = service.add_category(name, color)
    service.commit()
    format_success(f"Category '{category.name}' created ({category.color})")


@app.command("delete")
@command_wrapper
def delete_category(
    name: str = typer.Argument(..., help="Category name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a category and every task in it."""
    service = get_todo_service()
    category = service.get_category(name)
    task_count = service.count_tasks_in(category)

    if not yes:
        if task_count:
            format_warning(
                f"'{category.name}' contains {task_count} task(s); "
                "they will be deleted with it."
            )
        if not typer.confirm(f"Delete category '{category.name}'?", default=False):
            console.print("[yellow]Deletion cancelled.[/yellow]")
            return

    removed, count = service.remove_category(category.name)
    service.commit()
    format_success(f"Category '{removed.name}' deleted ({count} task(s) removed)")


@app.command("rename")
@command_wrapper
def rename_category(
    name: str = typer.Argument(..., help="Current category name"),
    new_name: str | None = typer.Argument(None, help="New category name"),
    color: str | None = typer.Option(None, "--color", help="New colour tag"),
) -> None:
    """Rename and/or recolour a category."""
    if new_name is None and color is None:
        format_warning("Nothing to change")
        return

    service = get_todo_service()
    category = service.update_category(name, new_name=new_name, color=color)
    service.commit()
    format_success(f"Category is now '{category.name}' ({category.color})")
