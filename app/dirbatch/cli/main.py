"""The ``dirbatch`` umbrella command and the standalone tool entry points.

``dirbatch zip|unzip|delete`` run the same commands as the ``zipdirs``,
``unzipdirs`` and ``deldirs`` scripts; ``dirbatch config`` manages the
run defaults.
"""

from typing import Annotated

import typer

from dirbatch import __version__
from dirbatch.cli.commands import config, deldirs, unzipdirs, zipdirs

app = typer.Typer(
    name="dirbatch",
    help="Parallel per-directory zip, unzip and delete jobs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _show_version(requested: bool) -> None:
    if requested:
        typer.echo(f"dirbatch version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=_show_version,
            is_eager=True,
            help="Print the version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details to stderr."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Hide progress bars and worker counts."),
    ] = False,
) -> None:
    """Run one zip, unzip or delete job per directory, in parallel."""
    # Subcommands merge these with their own -v/-q flags
    ctx.ensure_object(dict)
    ctx.obj.update(verbose=verbose, quiet=quiet)


app.command("zip")(zipdirs.zipdirs)
app.command("unzip")(unzipdirs.unzipdirs)
app.command("delete")(deldirs.deldirs)
app.add_typer(config.app, name="config")

# click exits with this status on usage errors (unknown option, bad value)
_USAGE_ERROR_STATUS = 2


def _run(command: typer.Typer) -> None:
    """Run a Typer app as a console script.

    Command-line usage errors exit with status 1, like every other
    argument or configuration error; all other statuses pass through.
    """
    try:
        command()
    except SystemExit as e:
        if e.code == _USAGE_ERROR_STATUS:
            raise SystemExit(1) from None
        raise


def run_dirbatch() -> None:
    """Console script ``dirbatch``."""
    _run(app)


def run_zipdirs() -> None:
    """Console script ``zipdirs``."""
    _run(zipdirs.app)


def run_unzipdirs() -> None:
    """Console script ``unzipdirs``."""
    _run(unzipdirs.app)


def run_deldirs() -> None:
    """Console script ``deldirs``."""
    _run(deldirs.app)
