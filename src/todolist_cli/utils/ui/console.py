"""Shared rich console for todolist output."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Return the console every command and formatter prints to."""
    return Console()


def apply_display_settings(color: bool = True) -> Console:
    """Switch colour output on or off for the shared console.

    Args:
        color: False strips all styling (display.color in the config)
    """
    console = get_console()
    console.no_color = not color
    return console
