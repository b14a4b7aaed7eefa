"""Task commands (add, list, complete, delete, search, ...).

Each command works on the working store through get_todo_service() and saves
it back before returning.
"""

from __future__ import annotations

import typer
from rich.markup import escape

from todolist_cli.models.core import Task
from todolist_cli.services.todo_service import get_todo_service
from todolist_cli.utils.dates import parse_due_date
from todolist_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todolist_cli.utils.ui.console import get_console
from todolist_cli.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_output,
    format_stats,
    format_success,
    format_task_detail,
    format_tasks,
    format_warning,
    render_task,
    task_to_dict,
)

from .decorators import AppError, command_wrapper

console = get_console()


def _output_format(output: str | None, json_opt: bool = False) -> str:
    if json_opt:
        return "json"
    if output is None:
        output = get_todo_service().config.display.format
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format '{output}' (expected {', '.join(OUTPUT_FORMATS)})",
            exit_code=ERROR_INVALID_ARGS,
        )
    return output


def _parse_due(value: str | None, date_format: str):
    """Parse a --due option; a bad date leaves the task without a due date."""
    if value is None:
        return None
    due = parse_due_date(value, date_format)
    if due is None:
        format_warning(
            f"Could not read due date '{value}' (expected today, tomorrow, "
            f"YYYY-MM-DD or {date_format}); leaving it unset"
        )
    return due


def _show_tasks(tasks: list[Task], output: str, title: str, empty_message: str) -> None:
    service = get_todo_service()
    format_tasks(
        tasks,
        output,
        title=title,
        date_format=service.config.display.date_format,
        empty_message=empty_message,
    )


@command_wrapper
def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    due: str | None = typer.Option(
        None, "--due", help="Due date (today, tomorrow, YYYY-MM-DD or configured format)"
    ),
    category: str | None = typer.Option(
        None, "--category", "-c", help="Category name (default: first category)"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (default: display.format)"
    ),
) -> None:
    """Add a new task."""
    output = _output_format(output)
    service = get_todo_service()
    date_format = service.config.display.date_format
    task = service.add_task(
        title,
        description=description,
        due_date=_parse_due(due, date_format),
        category_name=category,
    )
    service.commit()

    if output in ("json", "yaml"):
        format_output(task_to_dict(task), output)
        return
    format_success(f"Task added to {task.category.name}")
    console.print(render_task(task, date_format), markup=False, highlight=False, soft_wrap=True)


@command_wrapper
def list_tasks(
    category: str | None = typer.Option(None, "--category", "-c", help="Filter by category"),
    status: str = typer.Option(
        "all", "--status", "-s", help="Filter by status (all, pending, completed, overdue)"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (default: display.format)"
    ),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """List tasks, grouped by category order."""
    output = _output_format(output, json_opt)
    service = get_todo_service()
    tasks = service.list_tasks(status=status, category_name=category)
    service.commit()

    title = "Tasks" if category is None else f"Tasks in {category}"
    _show_tasks(tasks, output, title, "No tasks found")


@command_wrapper
def pending_tasks(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (default: display.format)"
    ),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show tasks that are not completed yet."""
    output = _output_format(output, json_opt)
    service = get_todo_service()
    tasks = service.list_tasks(status="pending")
    service.commit()
    _show_tasks(tasks, output, "Pending tasks", "Nothing left to do")


@command_wrapper
def overdue_tasks(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (default: display.format)"
    ),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show pending tasks whose due date has passed."""
    output = _output_format(output, json_opt)
    service = get_todo_service()
    tasks = service.list_tasks(status="overdue")
    service.commit()
    _show_tasks(tasks, output, "Overdue tasks", "No overdue tasks")


@command_wrapper
def upcoming_tasks(
    days: int | None = typer.Option(
        None, "--days", "-n", help="Window in days (default: display.upcoming_days)"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (default: display.format)"
    ),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show pending tasks due within the next few days."""
    output = _output_format(output, json_opt)
    service = get_todo_service()
    window = days if days is not None else service.config.display.upcoming_days
    tasks = service.upcoming_tasks(window)
    service.commit()
    _show_tasks(
        tasks, output, f"Due in the next {window} day(s)", "No upcoming tasks"
    )


@command_wrapper
def search_tasks(
    keyword: str = typer.Argument(..., help="Text to look for in titles and descriptions"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (default: display.format)"
    ),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Search tasks by keyword (case-insensitive)."""
    output = _output_format(output, json_opt)
    service = get_todo_service()
    tasks = service.search_tasks(keyword)
    service.commit()
    _show_tasks(tasks, output, f"Tasks matching '{keyword}'", "No matching tasks")


@command_wrapper
def show_task(
    task_id: str = typer.Argument(..., help="Task ID (or unique prefix)"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (default: display.format)"
    ),
) -> None:
    """Show one task in detail."""
    output = _output_format(output)
    service = get_todo_service()
    task = service.get_task(task_id)
    date_format = service.config.display.date_format
    service.commit()
    if output in ("json", "yaml"):
        format_output(task_to_dict(task), output)
    elif output == "text":
        console.print(render_task(task, date_format), markup=False, highlight=False, soft_wrap=True)
    else:
        format_task_detail(task, date_format)


@command_wrapper
def complete_tasks(
    task_ids: list[str] = typer.Argument(..., help="Task ID(s) - can specify multiple"),
) -> None:
    """Mark one or more tasks as completed."""
    service = get_todo_service()
    completed = [service.complete_task(task_id) for task_id in task_ids]
    service.commit()

    for task in completed:
        format_success(f"✓ Completed: {task.title}")
    if len(completed) == 1:
        console.print(f"[dim]To undo: todolist reopen {escape(task_ids[0])}[/dim]")


@command_wrapper
def reopen_tasks(
    task_ids: list[str] = typer.Argument(..., help="Task ID(s) - can specify multiple"),
) -> None:
    """Mark one or more tasks as not completed."""
    service = get_todo_service()
    reopened = [service.reopen_task(task_id) for task_id in task_ids]
    service.commit()

    for task in reopened:
        format_success(f"Reopened: {task.title}")


@command_wrapper
def delete_task(
    task_id: str = typer.Argument(..., help="Task ID (or unique prefix)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    service = get_todo_service()
    task = service.get_task(task_id)

    if not yes and not typer.confirm(f"Delete task '{task.title}'?", default=False):
        console.print("[yellow]Deletion cancelled.[/yellow]")
        return

    service.delete_task(task.id)
    service.commit()
    format_success(f"Deleted: {task.title}")


@command_wrapper
def edit_task(
    task_id: str = typer.Argument(..., help="Task ID (or unique prefix)"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description"
    ),
    due: str | None = typer.Option(None, "--due", help="New due date"),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
    category: str | None = typer.Option(
        None, "--category", "-c", help="Move to another category"
    ),
) -> None:
    """Edit a task's title, description, due date or category."""
    if due is not None and clear_due:
        raise AppError("Use either --due or --clear-due, not both", ERROR_INVALID_ARGS)

    service = get_todo_service()
    date_format = service.config.display.date_format
    changes: dict = {}
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    if clear_due:
        changes["due_date"] = None
    elif due is not None:
        parsed = _parse_due(due, date_format)
        if parsed is not None:
            changes["due_date"] = parsed
    if category is not None:
        changes["category_name"] = category

    if not changes:
        format_warning("Nothing to change")
        return

    task = service.update_task(task_id, **changes)
    service.commit()
    format_success("Task updated")
    console.print(render_task(task, date_format), markup=False, highlight=False, soft_wrap=True)


@command_wrapper
def show_stats(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format (default: display.format)"
    ),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show task counts and completion rate."""
    output = _output_format(output, json_opt)
    service = get_todo_service()
    stats = service.stats()
    service.commit()
    if output in ("json", "yaml"):
        format_output(stats, output)
    else:
        format_stats(stats)
