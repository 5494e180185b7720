"""Settings file commands.

Provides commands to show and update the run defaults stored in
~/.config/dirbatch/config.toml.
"""

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from dirbatch.batch.models import ErrorPolicy
from dirbatch.cli.types import abort
from dirbatch.core.errors import ConfigurationError
from dirbatch.core.paths import get_settings_path
from dirbatch.core.settings import BatchSettings, load_settings, save_settings
from dirbatch.utils.formatting import console, print_info, print_success

app = typer.Typer(
    help="Show or change the default run settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective default settings."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        abort(e)

    path = get_settings_path()
    table = Table(
        title="Default Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("jobs", "auto" if settings.jobs <= 0 else str(settings.jobs))
    table.add_row("level", "default" if settings.level is None else str(settings.level))
    table.add_row("error", settings.error.value)
    console.print(table)

    if not path.exists():
        print_info(f"No settings file at {path}; built-in defaults apply.")


@app.command("set")
def set_(
    jobs: Annotated[
        int | None,
        typer.Option("--jobs", "-j", help="Default worker count (0 = auto).", show_default=False),
    ] = None,
    level: Annotated[
        int | None,
        typer.Option("--level", "-l", help="Default compression level (0-9).", show_default=False),
    ] = None,
    error: Annotated[
        ErrorPolicy | None,
        typer.Option("--error", help="Default error policy.", case_sensitive=False),
    ] = None,
) -> None:
    """Update the default settings."""
    updates: dict[str, object] = {}
    if jobs is not None:
        updates["jobs"] = jobs
    if level is not None:
        updates["level"] = level
    if error is not None:
        updates["error"] = error

    if not updates:
        print_info("Nothing to change. Pass --jobs, --level or --error.")
        return

    try:
        current = load_settings()
        try:
            settings = BatchSettings.model_validate({**current.model_dump(), **updates})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e
        path = save_settings(settings)
    except ConfigurationError as e:
        abort(e)

    print_success(f"Settings saved to {path}")
