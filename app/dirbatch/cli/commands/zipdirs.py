"""Compress each subdirectory into its own zip archive."""

from typing import Annotated

import typer

from dirbatch.archive.operator import JobOperator
from dirbatch.batch.enumerator import enumerate_entries
from dirbatch.batch.planner import plan_archive_jobs
from dirbatch.cli.display import print_filter_summary, print_plan
from dirbatch.cli.types import (
    DepthOption,
    DryRunOption,
    ErrorOption,
    HiddenOption,
    InputArgument,
    JobsOption,
    OutputArgument,
    QuietOption,
    SkipExistingOption,
    VerboseOption,
    abort,
    finish_run,
    resolve_output_flags,
)
from dirbatch.core.errors import DirbatchError
from dirbatch.core.executor import execute_jobs, resolve_run_options
from dirbatch.utils.formatting import print_info

app = typer.Typer(
    name="zipdirs",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def zipdirs(
    ctx: typer.Context,
    input_dir: InputArgument,
    output_dir: OutputArgument = None,
    depth: DepthOption = 0,
    jobs: JobsOption = None,
    level: Annotated[
        int | None,
        typer.Option(
            "--level",
            "-l",
            help="Compression level (0 = store only, 9 = best).",
            show_default=False,
        ),
    ] = None,
    files: Annotated[
        bool,
        typer.Option("--file", help="Compress plain files as well as directories."),
    ] = False,
    include_hidden: HiddenOption = False,
    skip_existing: SkipExistingOption = False,
    skip_empty: Annotated[
        bool,
        typer.Option("--skip_empty", help="Skip empty directories."),
    ] = False,
    delete: Annotated[
        bool,
        typer.Option("--delete", help="Remove each source after it was compressed."),
    ] = False,
    error: ErrorOption = None,
    dryrun: DryRunOption = False,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Zip each subdirectory of INPUT into OUTPUT/<name>.zip."""
    _, quiet = resolve_output_flags(ctx, verbose, quiet)
    output_root = output_dir if output_dir is not None else input_dir

    try:
        options = resolve_run_options(jobs, error, level)
        entries = enumerate_entries(
            input_dir, depth, include_files=files, include_hidden=include_hidden
        )
        plan = plan_archive_jobs(
            entries,
            input_dir,
            output_root,
            skip_existing=skip_existing,
            skip_empty=skip_empty,
        )
    except DirbatchError as e:
        abort(e)

    print_filter_summary(plan.filtered)

    if plan.is_empty:
        print_info("There is nothing to compress.")
        return

    if dryrun:
        print_plan(plan.jobs)
        return

    if not quiet:
        print_info(f"Using {options.worker_count} worker(s).")

    operator = JobOperator(level=options.level, delete_source=delete)
    report = execute_jobs(
        plan.jobs,
        operator.run,
        options,
        description="Compressing",
        show_progress=not quiet,
    )
    finish_run(report, "compressed")
