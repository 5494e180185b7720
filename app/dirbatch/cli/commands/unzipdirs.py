"""Extract every zip archive found under a directory."""

import typer

from dirbatch.archive.operator import JobOperator
from dirbatch.batch.enumerator import enumerate_entries
from dirbatch.batch.planner import plan_extract_jobs
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
    name="unzipdirs",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def unzipdirs(
    ctx: typer.Context,
    input_dir: InputArgument,
    output_dir: OutputArgument = None,
    depth: DepthOption = 0,
    jobs: JobsOption = None,
    include_hidden: HiddenOption = False,
    skip_existing: SkipExistingOption = False,
    error: ErrorOption = None,
    dryrun: DryRunOption = False,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Unzip all zip files in INPUT into OUTPUT/<name>/."""
    _, quiet = resolve_output_flags(ctx, verbose, quiet)
    output_root = output_dir if output_dir is not None else input_dir

    try:
        options = resolve_run_options(jobs, error)
        entries = enumerate_entries(
            input_dir, depth, include_files=True, include_hidden=include_hidden
        )
        plan = plan_extract_jobs(entries, input_dir, output_root, skip_existing=skip_existing)
    except DirbatchError as e:
        abort(e)

    print_filter_summary(plan.filtered)

    if plan.is_empty:
        print_info("There is nothing to decompress.")
        return

    if dryrun:
        print_plan(plan.jobs)
        return

    if not quiet:
        print_info(f"Using {options.worker_count} worker(s).")

    report = execute_jobs(
        plan.jobs,
        JobOperator().run,
        options,
        description="Decompressing",
        show_progress=not quiet,
    )
    finish_run(report, "decompressed")
