"""Shared types and utilities for CLI commands.

This module provides the option declarations and helper functions used
across the zipdirs, unzipdirs and deldirs commands to avoid code
duplication.
"""

import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.logging import RichHandler

from dirbatch.batch.models import ErrorPolicy, RunReport
from dirbatch.cli.display import print_run_summary
from dirbatch.core.errors import DirbatchError
from dirbatch.utils.formatting import err_console, print_error

# =============================================================================
# Shared argument and option declarations
# =============================================================================

InputArgument = Annotated[
    Path,
    typer.Argument(help="Input directory to scan.", show_default=False),
]
OutputArgument = Annotated[
    Path | None,
    typer.Argument(
        help="(optional) Output directory. <input> is used as <output> by default.",
        show_default=False,
    ),
]
DepthOption = Annotated[
    int,
    typer.Option("--depth", "-d", help="Depth of the subdirectories to process."),
]
JobsOption = Annotated[
    int | None,
    typer.Option(
        "--jobs",
        "-j",
        help="Number of simultaneous jobs (default: number of physical CPU cores).",
        show_default=False,
    ),
]
ErrorOption = Annotated[
    ErrorPolicy | None,
    typer.Option(
        "--error",
        help="Stop at the first failure (break) or attempt every job (continue).",
        case_sensitive=False,
        show_default="break",
    ),
]
HiddenOption = Annotated[
    bool,
    typer.Option("--all", help="Include hidden entries."),
]
SkipExistingOption = Annotated[
    bool,
    typer.Option(
        "--skip_existing",
        "--skip",
        help="Skip entries whose output already exists.",
    ),
]
DryRunOption = Annotated[
    bool,
    typer.Option("--dryrun", help="List planned jobs and exit."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose output."),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Suppress non-essential output."),
]


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def resolve_output_flags(ctx: typer.Context, verbose: bool, quiet: bool) -> tuple[bool, bool]:
    """Merge command flags with the umbrella app's global flags.

    Configures logging as a side effect.

    Returns:
        Effective (verbose, quiet) pair.
    """
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    verbose = verbose or bool(obj.get("verbose"))
    quiet = quiet or bool(obj.get("quiet"))
    configure_logging(verbose)
    return verbose, quiet


def abort(error: DirbatchError) -> NoReturn:
    """Print a diagnostic for a fatal error and exit with status 1."""
    print_error(str(error))
    raise typer.Exit(code=1) from error


def finish_run(report: RunReport, verb: str) -> None:
    """Print the run summary and exit with status 1 if any job failed.

    Args:
        report: Report of the finished run.
        verb: Past-tense verb for the success message.
    """
    print_run_summary(report, verb)
    if report.first_failure is not None:
        print_error(str(report.first_failure))
        raise typer.Exit(code=1)
