"""Run orchestration shared by the CLI tools.

Merges command-line flags with the settings file into the effective
run options and drives the worker pool with a progress display. These
functions are shared between the zipdirs, unzipdirs and deldirs
commands.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dirbatch.archive.ziparchive import validate_level
from dirbatch.batch.models import ErrorPolicy, RunReport
from dirbatch.batch.partition import resolve_worker_count
from dirbatch.batch.pool import JobRunner, WorkerPool
from dirbatch.batch.progress import NullProgressSink, ProgressSink, RichProgressSink
from dirbatch.core.settings import BatchSettings, load_settings
from dirbatch.utils.formatting import console

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dirbatch.batch.models import JobSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Effective options of one run, fixed at run start.

    Attributes:
        worker_count: Resolved worker count (>= 1).
        policy: Error policy.
        level: Compression level (archive runs only).
    """

    worker_count: int
    policy: ErrorPolicy
    level: int | None = None


def resolve_run_options(
    jobs: int | None,
    error: ErrorPolicy | None,
    level: int | None = None,
    settings: BatchSettings | None = None,
) -> RunOptions:
    """Resolve run options from flags, the settings file and defaults.

    Flags given on the command line win over the settings file, which
    wins over the built-in defaults.

    Args:
        jobs: --jobs value (None if not given; <= 0 means auto).
        error: --error value (None if not given).
        level: --level value (None if not given).
        settings: Loaded settings; read from disk if None.

    Returns:
        RunOptions for the run.

    Raises:
        ConfigurationError: If the settings file or level is invalid.
    """
    if settings is None:
        settings = load_settings()

    requested_jobs = jobs if jobs is not None else settings.jobs
    options = RunOptions(
        worker_count=resolve_worker_count(requested_jobs),
        policy=error if error is not None else settings.error,
        level=validate_level(level if level is not None else settings.level),
    )
    logger.debug("Resolved run options: %s", options)
    return options


def execute_jobs(
    jobs: Sequence[JobSpec],
    runner: JobRunner,
    options: RunOptions,
    *,
    description: str,
    show_progress: bool = True,
) -> RunReport:
    """Run jobs on a worker pool, optionally with a progress bar.

    Args:
        jobs: Ordered job sequence.
        runner: Callable executing one job.
        options: Effective run options.
        description: Progress bar label (e.g. "Compressing").
        show_progress: Render a progress bar on the console.

    Returns:
        RunReport of the run (failures are not raised).
    """
    pool = WorkerPool(options.worker_count, options.policy)

    if not show_progress:
        sink: ProgressSink = NullProgressSink()
        return pool.run(jobs, runner, sink)

    with RichProgressSink(description, total=len(jobs), console=console) as bar:
        return pool.run(jobs, runner, bar)
