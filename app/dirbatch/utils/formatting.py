"""Shared rich consoles and message helpers.

Normal output goes to stdout; warnings, errors and log records go to
stderr so that plan listings stay pipeable.
"""

import sys

from rich.console import Console

from dirbatch.core.theme import get_theme


def make_console(*, stderr: bool = False) -> Console:
    """Create a themed console.

    Interactive terminals get truecolor so hex theme colors render
    exactly; otherwise rich picks the color system itself.
    """
    stream = sys.stderr if stderr else sys.stdout
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = make_console()
err_console = make_console(stderr=True)


def print_info(message: str) -> None:
    """Print an informational line."""
    console.print(message, style="info")


def print_success(message: str) -> None:
    """Print a success line."""
    console.print(message, style="success")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[error]Error:[/] {message}")
