"""Shared Rich display functions for job plans and run results.

Provides plan listings, filter feedback and result summaries used by
the zipdirs, unzipdirs and deldirs commands.
"""

from rich.markup import escape
from rich.table import Table

from dirbatch.batch.conditions import FilterResult
from dirbatch.batch.models import JobSpec, RunReport
from dirbatch.utils.formatting import console, print_success, print_warning

# User-facing wording for filter names; unlisted filters are not reported
_FILTER_MESSAGES: dict[str, str] = {
    "existing": "Skip {count} existing entries.",
    "empty": "Skip {count} empty directories.",
    "archives": "Skip {count} archive files.",
    "unreadable": "Skip {count} unreadable directories.",
}


def print_filter_summary(filtered: FilterResult) -> None:
    """Print how many entries each filter removed.

    Args:
        filtered: Result of the eligibility filters.
    """
    for warning in filtered.warnings:
        print_warning(warning)
    for name, count in filtered.removed.items():
        template = _FILTER_MESSAGES.get(name)
        if template and count:
            console.print(f"[muted]{template.format(count=count)}[/muted]")


def print_plan(jobs: list[JobSpec]) -> None:
    """Print planned jobs, one 'source -> destination' pair per line.

    Delete jobs have no destination and print the directory only.

    Args:
        jobs: Planned jobs in run order.
    """
    for job in jobs:
        if job.destination is None:
            console.print(f"[removed]{escape(str(job.source.path))}[/removed]", soft_wrap=True)
        else:
            console.print(
                f"[source]{escape(str(job.source.path))}[/source] -> "
                f"[destination]{escape(str(job.destination))}[/destination]",
                soft_wrap=True,
            )


def create_failures_table(report: RunReport) -> Table:
    """Create a Rich table listing failed jobs.

    Args:
        report: Report of a finished run.

    Returns:
        Rich Table with one row per failed job.
    """
    table = Table(
        title="Failed Jobs",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Source", no_wrap=True)
    table.add_column("Error")

    for outcome in report.outcomes:
        if outcome.success:
            continue
        table.add_row(
            escape(str(outcome.job.source.path)),
            f"[muted]{escape(outcome.error or 'Unknown error')}[/muted]",
        )

    return table


def print_run_summary(report: RunReport, verb: str) -> None:
    """Print a summary of a finished run.

    Shows a success message when every job succeeded; otherwise prints
    the failures table and the completed/failed/not started counts.

    Args:
        report: Report of a finished run.
        verb: Past-tense verb for the success message (e.g. "compressed").
    """
    if report.success:
        print_success(f"All {report.completed} entries {verb} successfully.")
        return

    console.print(create_failures_table(report))
    parts = [
        f"[success]{report.completed} succeeded[/success]",
        f"[error]{report.failed} failed[/error]",
    ]
    if report.not_started:
        parts.append(f"[warning]{report.not_started} not started[/warning]")
    console.print(f"\n{', '.join(parts)}")
