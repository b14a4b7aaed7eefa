"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from rich.markup import escape
from typer.core import TyperGroup

from todolist_cli.utils.exit_codes import ERROR_INVALID_ARGS
from todolist_cli.utils.ui.console import get_console


def suggest_commands(attempted: str, available: list[str], limit: int = 3) -> list[str]:
    """Return up to *limit* command names that look like *attempted*."""
    return get_close_matches(attempted, available, n=limit, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Command group that answers an unknown command with "did you mean".

    Hidden commands are never suggested. When nothing is close enough the
    usual click usage error is shown.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            visible = [
                name
                for name, command in self.commands.items()
                if not getattr(command, "hidden", False)
            ]
            suggestions = suggest_commands(args[0], visible)
            if not suggestions:
                raise

            console = get_console()
            console.print(f'[red]Error:[/red] unknown command "{escape(args[0])}" for "{ctx.info_name}"')
            console.print()
            console.print(
                "[yellow]Did you mean this?[/yellow]"
                if len(suggestions) == 1
                else "[yellow]Did you mean one of these?[/yellow]"
            )
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            console.print(f"\nRun '{ctx.command_path} --help' for usage.")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
