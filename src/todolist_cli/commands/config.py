"""Configuration management commands."""

import json

import typer
from pydantic import ValidationError
from rich.markup import escape

from todolist_cli.services.config_service import get_config_service
from todolist_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from todolist_cli.utils.typer_helpers import SuggestingGroup
from todolist_cli.utils.ui.console import get_console
from todolist_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


def _parse_value(value: str):
    """Best-effort conversion of a command-line string to a config value."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    if value[:1] in ("[", "{"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("yaml", "--output", "-o", help="Output format (json, yaml)"),
) -> None:
    """Show the current configuration."""
    config_service = get_config_service()
    format_output(config_service.config.model_dump(), output)
    console.print(f"[dim]{escape(str(config_service.config_path))}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., display.date_format)"),
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        raise AppError(f"Configuration key '{key}' not found", ERROR_NOT_FOUND)
    if hasattr(value, "model_dump"):
        format_output(value.model_dump(), "yaml")
    else:
        console.print(value, markup=False, highlight=False)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., display.upcoming_days)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed_value = _parse_value(value)
    try:
        get_config_service().set(key, parsed_value)
    except KeyError as e:
        raise AppError(f"Unknown configuration key '{key}'", ERROR_NOT_FOUND) from e
    except ValidationError as e:
        errors = "; ".join(err["msg"] for err in e.errors())
        raise AppError(f"Invalid value for '{key}': {errors}", ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            console.print("[yellow]Cancelled[/yellow]")
            return

    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(f"Unknown configuration key '{key}'", ERROR_NOT_FOUND) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
