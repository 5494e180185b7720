"""Delete directory trees matching present/absent conditions.

Runs as a dry run unless --exec is given. With --exec every matching
directory is confirmed interactively (unless --yes) and the approved
deletions run on the worker pool.
"""

from typing import Annotated

import typer
from rich.markup import escape

from dirbatch.archive.operator import JobOperator
from dirbatch.batch.conditions import validate_conditions
from dirbatch.batch.enumerator import enumerate_entries
from dirbatch.batch.models import Condition, JobSpec
from dirbatch.batch.planner import plan_delete_jobs
from dirbatch.cli.display import print_filter_summary, print_plan
from dirbatch.cli.types import (
    DepthOption,
    DryRunOption,
    ErrorOption,
    HiddenOption,
    InputArgument,
    JobsOption,
    QuietOption,
    VerboseOption,
    abort,
    finish_run,
    resolve_output_flags,
)
from dirbatch.core.errors import DirbatchError
from dirbatch.core.executor import execute_jobs, resolve_run_options
from dirbatch.utils.formatting import console, print_info

app = typer.Typer(
    name="deldirs",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def build_conditions(present: list[str], absent: list[str], depth: int = 0) -> list[Condition]:
    """Build deletion conditions from --present/--absent values.

    Args:
        present: Names that must exist in a directory.
        absent: Names that must not exist in a directory.
        depth: Depth of the names below each directory (only 0 is supported).

    Returns:
        Absent conditions followed by present conditions.

    Raises:
        ConfigurationError: If no condition is given or a name or depth is invalid.
    """
    conditions = [Condition.absent(name, depth) for name in absent]
    conditions.extend(Condition.present(name, depth) for name in present)
    validate_conditions(conditions)
    return conditions


def confirm_deletions(jobs: list[JobSpec]) -> list[JobSpec]:
    """Ask for confirmation of each deletion.

    Returns:
        Jobs the user approved, in run order.
    """
    return [
        job
        for job in jobs
        if typer.confirm(f'Delete "{job.source.path}"?', default=False)
    ]


@app.command()
def deldirs(
    ctx: typer.Context,
    input_dir: InputArgument,
    present: Annotated[
        list[str] | None,
        typer.Option(
            "--present",
            "-p",
            help="Delete directories containing this file or directory name.",
            show_default=False,
        ),
    ] = None,
    absent: Annotated[
        list[str] | None,
        typer.Option(
            "--absent",
            "-a",
            help="Delete directories not containing this file or directory name.",
            show_default=False,
        ),
    ] = None,
    pattern_depth: Annotated[
        int,
        typer.Option("--pattern-depth", help="Depth of condition names (only 0 is supported)."),
    ] = 0,
    depth: DepthOption = 0,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Delete directories without asking."),
    ] = False,
    execute: Annotated[
        bool,
        typer.Option("--exec", "-e", help="Execute the deletion."),
    ] = False,
    jobs: JobsOption = None,
    include_hidden: HiddenOption = False,
    error: ErrorOption = None,
    dryrun: DryRunOption = False,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Delete directory trees in INPUT matching the given conditions."""
    _, quiet = resolve_output_flags(ctx, verbose, quiet)

    try:
        conditions = build_conditions(present or [], absent or [], pattern_depth)
        options = resolve_run_options(jobs, error)
        entries = enumerate_entries(input_dir, depth, include_hidden=include_hidden)
        plan = plan_delete_jobs(entries, conditions)
    except DirbatchError as e:
        abort(e)

    print_filter_summary(plan.filtered)

    if plan.is_empty:
        print_info("There is nothing to delete.")
        return

    if dryrun or not execute:
        print_info('Dry run. Add "--exec" to execute the deletion.')
        print_plan(plan.jobs)
        return

    approved = plan.jobs if yes else confirm_deletions(plan.jobs)
    if not approved:
        print_info("No directories approved for deletion.")
        return

    if not quiet:
        console.print(f"[info]Deleting {len(approved)} director(ies)...[/info]")
        for job in approved:
            console.print(f"[muted]{escape(str(job.source.path))}[/muted]", soft_wrap=True)

    report = execute_jobs(
        approved,
        JobOperator().run,
        options,
        description="Deleting",
        show_progress=not quiet,
    )
    finish_run(report, "deleted")
