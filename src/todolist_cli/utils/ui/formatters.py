"""Output formatters for different formats."""

from __future__ import annotations

import json
from datetime import date
from typing import Any

import yaml
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from todolist_cli.models.core import Category, Task
from todolist_cli.utils import dates
from todolist_cli.utils.ui.console import get_console
from todolist_cli.utils.uuid_utils import shorten_id

console = get_console()

STATUS_COMPLETED = "Completed"
STATUS_OVERDUE = "Overdue"
STATUS_PENDING = "Pending"

STATUS_COLORS = {
    STATUS_COMPLETED: "green",
    STATUS_OVERDUE: "bold red",
    STATUS_PENDING: "yellow",
}

STATUS_ICONS = {
    STATUS_COMPLETED: "✓",
    STATUS_OVERDUE: "!",
    STATUS_PENDING: "·",
}

OUTPUT_FORMATS = ("table", "text", "json", "yaml")


# ============================================================================
# Task rendering
# ============================================================================


def task_status(task: Task, today: date | None = None) -> str:
    """Three-way status label; Overdue wins over Pending."""
    if task.completed:
        return STATUS_COMPLETED
    if task.is_overdue_on(today or dates.today()):
        return STATUS_OVERDUE
    return STATUS_PENDING


def render_task(task: Task, date_format: str = dates.DEFAULT_DATE_FORMAT) -> str:
    """Render a task as a single line of text.

    Example::

        [TASK-1f2e...] Buy milk - 2 litres - Due: 21/10/2026 - Category: Personal - Pending
    """
    due = dates.format_due_date(task.due_date, date_format)
    return (
        f"[{task.id}] {task.title} - {task.description} - Due: {due} "
        f"- Category: {task.category.name} - {task_status(task)}"
    )


def task_to_dict(task: Task, date_format: str | None = None) -> dict[str, Any]:
    """Plain-data view of a task for JSON/YAML output."""
    due: str | None = None
    if task.due_date is not None:
        due = task.due_date.strftime(date_format) if date_format else task.due_date.isoformat()
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "due_date": due,
        "completed": task.completed,
        "status": task_status(task),
        "category": task.category.name,
        "category_id": task.category.id,
        "created_on": task.created_on.isoformat(),
    }


def category_to_dict(category: Category, task_count: int | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"id": category.id, "name": category.name, "color": category.color}
    if task_count is not None:
        data["tasks"] = task_count
    return data


# ============================================================================
# Generic output
# ============================================================================


def format_output(data: Any, output_format: str = "json") -> None:
    """Print plain data as JSON or YAML."""
    if output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    else:
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def format_tasks(
    tasks: list[Task],
    output_format: str = "table",
    *,
    title: str | None = None,
    date_format: str = dates.DEFAULT_DATE_FORMAT,
    empty_message: str = "No tasks found",
) -> None:
    """Display a list of tasks in the requested format."""
    if output_format in ("json", "yaml"):
        format_output(
            {"tasks": [task_to_dict(t, None) for t in tasks]}, output_format
        )
        return

    if not tasks:
        console.print(f"[yellow]{escape(empty_message)}[/yellow]")
        return

    if output_format == "text":
        if title:
            console.print(f"[bold]{escape(title)}[/bold]")
        for task in tasks:
            console.print(render_task(task, date_format), markup=False, highlight=False, soft_wrap=True)
        return

    format_tasks_table(tasks, title=title, date_format=date_format)


def format_tasks_table(
    tasks: list[Task],
    *,
    title: str | None = None,
    date_format: str = dates.DEFAULT_DATE_FORMAT,
) -> None:
    """Format tasks as a rich table."""
    table = Table(
        title=escape(title) if title else None,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Due")
    table.add_column("Status")

    today = dates.today()
    for task in tasks:
        status = task_status(task, today)
        due = dates.format_due_date(task.due_date, date_format)
        if task.due_date is not None and not task.completed:
            due = f"{due} ({dates.format_relative_due(task.due_date, today)})"
        table.add_row(
            shorten_id(task.id),
            Text(task.title),
            Text(task.category.name, style=_category_style(task.category)),
            due,
            Text(f"{STATUS_ICONS[status]} {status}", style=STATUS_COLORS[status]),
        )

    console.print(table)


def format_task_detail(task: Task, date_format: str = dates.DEFAULT_DATE_FORMAT) -> None:
    """Format a single task as key-value pairs."""
    status = task_status(task)
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Id", task.id)
    table.add_row("Title", Text(task.title))
    table.add_row("Description", Text(task.description or "-"))
    table.add_row("Due", dates.format_due_date(task.due_date, date_format))
    table.add_row("Category", Text(task.category.name))
    table.add_row("Status", Text(status, style=STATUS_COLORS[status]))
    table.add_row("Created", task.created_on.strftime(date_format))

    console.print(table)


def format_categories_table(categories: list[tuple[Category, int]]) -> None:
    """Format categories (with their task counts) as a table."""
    if not categories:
        console.print("[yellow]No categories found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Color")
    table.add_column("Tasks", justify="right")
    table.add_column("ID", style="dim")

    for index, (category, count) in enumerate(categories, start=1):
        table.add_row(
            str(index),
            Text(category.name, style=_category_style(category)),
            category.color,
            str(count),
            shorten_id(category.id),
        )

    console.print(table)


def format_stats(stats: dict[str, Any]) -> None:
    """Display summary statistics with a completion bar."""
    rate = stats["completion_rate"]
    color = get_completion_color(rate)

    console.print("[bold cyan]Task statistics[/bold cyan]")
    console.print(f"  Total:     {stats['total']}")
    console.print(f"  Completed: [green]{stats['completed']}[/green]")
    console.print(f"  Pending:   [yellow]{stats['pending']}[/yellow]")
    console.print(f"  Overdue:   [red]{stats['overdue']}[/red]")
    console.print(
        f"  Progress:  [{color}]{get_progress_bar(rate)} {rate:.1f}%[/{color}]"
    )

    if stats["categories"]:
        console.print()
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Category")
        table.add_column("Tasks", justify="right")
        table.add_column("Completed", justify="right")
        for row in stats["categories"]:
            table.add_row(Text(row["name"]), str(row["tasks"]), str(row["completed"]))
        console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")


# ============================================================================
# Helper Functions
# ============================================================================

_RICH_COLORS = {
    "BLACK": "white",
    "RED": "red",
    "GREEN": "green",
    "YELLOW": "yellow",
    "BLUE": "blue",
    "MAGENTA": "magenta",
    "PURPLE": "magenta",
    "CYAN": "cyan",
    "WHITE": "white",
    "ORANGE": "orange3",
}


def _category_style(category: Category) -> str:
    return _RICH_COLORS.get(category.color.upper(), "")


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"
