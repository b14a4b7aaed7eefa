"""Main entry point for the todolist CLI."""

import typer

from todolist_cli import __version__
from todolist_cli.commands import categories, config, data, tasks
from todolist_cli.commands.decorators import command_wrapper
from todolist_cli.services.config_service import get_config_service
from todolist_cli.services.todo_service import get_todo_service
from todolist_cli.ui.menu import MenuController
from todolist_cli.utils.logger import enable_console_logging
from todolist_cli.utils.typer_helpers import SuggestingGroup
from todolist_cli.utils.ui.console import apply_display_settings, get_console

# Create main app with custom group class
app = typer.Typer(
    name="todolist",
    cls=SuggestingGroup,
    help="A personal task tracker with categories, due dates and search",
    no_args_is_help=True,
)

console = get_console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Echo log messages to stderr"
    ),
) -> None:
    """Apply display settings before any command runs."""
    apply_display_settings(color=get_config_service().config.display.color)
    if verbose:
        enable_console_logging()


# Task commands live at the top level
app.command("add")(tasks.add_task)
app.command("list")(tasks.list_tasks)
app.command("pending")(tasks.pending_tasks)
app.command("overdue")(tasks.overdue_tasks)
app.command("upcoming")(tasks.upcoming_tasks)
app.command("search")(tasks.search_tasks)
app.command("show")(tasks.show_task)
app.command("complete")(tasks.complete_tasks)
app.command("reopen")(tasks.reopen_tasks)
app.command("delete")(tasks.delete_task)
app.command("edit")(tasks.edit_task)
app.command("stats")(tasks.show_stats)

# Add subcommands
app.add_typer(categories.app, name="categories", help="Category management")
app.add_typer(data.app, name="data", help="Save and load the task list")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todolist[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
@command_wrapper
def menu() -> None:
    """Start the interactive numbered menu."""
    MenuController(get_todo_service()).run()


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
