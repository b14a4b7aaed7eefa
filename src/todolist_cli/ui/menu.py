"""Interactive numbered menu.

MenuController is the interactive counterpart of the command-line surface:
it holds one TodoService for the whole session and talks to the user only
through rich prompts, so a session can be driven from a text stream in tests.
"""

from __future__ import annotations

import logging
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from todolist_cli.models.exceptions import TodoListError
from todolist_cli.services.todo_service import TodoService
from todolist_cli.utils.dates import parse_due_date
from todolist_cli.utils.ui.console import get_console
from todolist_cli.utils.ui.formatters import render_task

logger = logging.getLogger(__name__)

MENU_OPTIONS = [
    ("1", "Show all tasks"),
    ("2", "Show tasks by category"),
    ("3", "Show pending tasks"),
    ("4", "Show overdue tasks"),
    ("5", "Show upcoming tasks"),
    ("6", "Add a task"),
    ("7", "Mark a task as completed"),
    ("8", "Delete a task"),
    ("9", "Search tasks"),
    ("10", "Manage categories"),
    ("11", "Save to file"),
    ("12", "Load from file"),
    ("0", "Quit"),
]


class _LineStream:
    """Wrap a text stream so end of input raises EOFError, as input() does."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def readline(self) -> str:
        line = self._stream.readline()
        if not line:
            raise EOFError
        return line


class MenuController:
    """Drives the numbered menu for one TodoService."""

    def __init__(
        self,
        service: TodoService,
        console: Console | None = None,
        stream: TextIO | None = None,
    ):
        """Initialize the menu.

        Args:
            service: Service holding the repository for this session
            console: Console to print to (defaults to the shared console)
            stream: Input stream for prompts (defaults to stdin)
        """
        self.service = service
        self.console = console or get_console()
        self.stream = _LineStream(stream) if stream is not None else None
        self._actions = {
            1: self.show_all_tasks,
            2: self.show_tasks_by_category,
            3: self.show_pending_tasks,
            4: self.show_overdue_tasks,
            5: self.show_upcoming_tasks,
            6: self.add_task,
            7: self.complete_task,
            8: self.delete_task,
            9: self.search_tasks,
            10: self.manage_categories,
            11: self.save_to_file,
            12: self.load_from_file,
        }

    @property
    def date_format(self) -> str:
        return self.service.config.display.date_format

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Show the menu until the user quits."""
        logger.info("menu session started")
        try:
            while True:
                self.show_menu()
                choice = self.ask_int("Choose an option", 0, len(self._actions))
                if choice == 0:
                    break
                self.handle(choice)
        except (EOFError, KeyboardInterrupt):
            self.console.print()
        self.service.commit()
        self.console.print("[dim]Goodbye.[/dim]")
        logger.info("menu session finished")

    def show_menu(self) -> None:
        self.console.print()
        self.console.print("[bold cyan]Task list[/bold cyan]")
        for key, label in MENU_OPTIONS:
            self.console.print(f"  [cyan]{key:>2}[/cyan]. {label}")

    def handle(self, choice: int) -> None:
        """Run one menu action; service errors are reported, not raised."""
        try:
            self._actions[choice]()
        except TodoListError as e:
            logger.warning("menu action %d failed: %s", choice, e)
            self.console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def ask(self, prompt: str) -> str:
        return Prompt.ask(prompt, console=self.console, stream=self.stream).strip()

    def ask_int(self, prompt: str, low: int, high: int) -> int:
        """Ask until the answer is an integer in ``[low, high]``."""
        while True:
            answer = self.ask(prompt)
            try:
                value = int(answer)
            except ValueError:
                self.console.print("[red]Please enter a number.[/red]")
                continue
            if low <= value <= high:
                return value
            self.console.print(f"[red]Please enter a number from {low} to {high}.[/red]")

    def confirm(self, prompt: str) -> bool:
        return Confirm.ask(prompt, console=self.console, stream=self.stream)

    def choose_category(self):
        """Let the user pick a category by number; None if there are none."""
        categories = self.service.list_categories()
        if not categories:
            self.console.print("[yellow]No categories yet.[/yellow]")
            return None
        for index, category in enumerate(categories, start=1):
            self.console.print(f"  {index}. {escape(category.name)}")
        return categories[self.ask_int("Category number", 1, len(categories)) - 1]

    def choose_task(self, tasks):
        """Let the user pick one of *tasks* by number; None if the list is empty."""
        if not tasks:
            self.console.print("[yellow]No tasks.[/yellow]")
            return None
        self.print_tasks(tasks, numbered=True)
        return tasks[self.ask_int("Task number", 1, len(tasks)) - 1]

    def print_tasks(self, tasks, numbered: bool = False) -> None:
        if not tasks:
            self.console.print("[yellow]No tasks.[/yellow]")
            return
        for index, task in enumerate(tasks, start=1):
            line = render_task(task, self.date_format)
            if numbered:
                line = f"{index}. {line}"
            self.console.print(line, markup=False, highlight=False, soft_wrap=True)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def show_all_tasks(self) -> None:
        self.print_tasks(self.service.list_tasks())

    def show_tasks_by_category(self) -> None:
        category = self.choose_category()
        if category is not None:
            self.print_tasks(self.service.list_tasks(category_name=category.name))

    def show_pending_tasks(self) -> None:
        self.print_tasks(self.service.list_tasks(status="pending"))

    def show_overdue_tasks(self) -> None:
        self.print_tasks(self.service.list_tasks(status="overdue"))

    def show_upcoming_tasks(self) -> None:
        days = self.service.config.display.upcoming_days
        self.console.print(f"[bold]Due in the next {days} day(s)[/bold]")
        self.print_tasks(self.service.upcoming_tasks(days))

    def add_task(self) -> None:
        title = self.ask("Title")
        description = self.ask("Description")
        due_text = self.ask(f"Due date ({self.date_format}, today, tomorrow or blank)")
        due = parse_due_date(due_text, self.date_format) if due_text else None
        if due_text and due is None:
            self.console.print("[yellow]Unrecognised date; leaving it unset.[/yellow]")

        category = self.choose_category()
        if category is None:
            return
        task = self.service.add_task(
            title, description=description, due_date=due, category_name=category.name
        )
        self.service.commit()
        self.console.print("[green]Task added:[/green]")
        self.print_tasks([task])

    def complete_task(self) -> None:
        task = self.choose_task(self.service.list_tasks(status="pending"))
        if task is None:
            return
        self.service.complete_task(task.id)
        self.service.commit()
        self.console.print(f"[green]Completed:[/green] {escape(task.title)}")

    def delete_task(self) -> None:
        task = self.choose_task(self.service.list_tasks())
        if task is None:
            return
        if self.confirm(f"Delete '{escape(task.title)}'?"):
            self.service.delete_task(task.id)
            self.service.commit()
            self.console.print("[green]Task deleted.[/green]")

    def search_tasks(self) -> None:
        keyword = self.ask("Keyword")
        self.print_tasks(self.service.search_tasks(keyword))

    def manage_categories(self) -> None:
        self.console.print("  1. List categories")
        self.console.print("  2. Add a category")
        self.console.print("  3. Delete a category")
        self.console.print("  0. Back")
        choice = self.ask_int("Choose an option", 0, 3)

        if choice == 1:
            for category in self.service.list_categories():
                count = self.service.count_tasks_in(category)
                self.console.print(
                    f"  {escape(category.name)} ({category.color}) - {count} task(s)"
                )
        elif choice == 2:
            name = self.ask("Name")
            color = self.ask("Colour (blank for default)")
            category = self.service.add_category(name, color or None)
            self.service.commit()
            self.console.print(f"[green]Category added:[/green] {escape(category.name)}")
        elif choice == 3:
            category = self.choose_category()
            if category is None:
                return
            count = self.service.count_tasks_in(category)
            if self.confirm(
                f"Delete '{escape(category.name)}' and its {count} task(s)?"
            ):
                self.service.remove_category(category.name)
                self.service.commit()
                self.console.print("[green]Category deleted.[/green]")

    def save_to_file(self) -> None:
        name = self.ask("File name (blank for the default store)")
        path = self.service.save_to(name or None)
        self.console.print(f"[green]Saved to[/green] {escape(str(path))}")

    def load_from_file(self) -> None:
        name = self.ask("File name (blank for the default store)")
        repository, existed = self.service.load_from(name or None)
        if not existed:
            self.console.print("[yellow]No such file; starting with an empty list.[/yellow]")
        self.service.commit()
        self.console.print(
            f"[green]Loaded[/green] {repository.category_count()} categories, "
            f"{repository.task_count()} tasks"
        )
