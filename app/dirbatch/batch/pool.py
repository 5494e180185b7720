"""Fixed-size worker pool for batch jobs.

Runs J worker threads, each draining its round-robin partition of the
job sequence in order. Workers share only three things: the lock that
serialises destination-directory creation, the set-once failure cell
and the progress counter. Cancellation under the BREAK policy is
cooperative and checked at job boundaries; a job that is already
running is never interrupted, and there is no timeout.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from dirbatch.batch.models import ErrorPolicy, JobOutcome, JobSpec, RunReport
from dirbatch.batch.partition import partition
from dirbatch.batch.progress import ProgressCounter, ProgressSink
from dirbatch.core.errors import ConfigurationError, JobError

logger = logging.getLogger(__name__)

# Callable executing one job; raises on failure
JobRunner = Callable[[JobSpec], None]


class FailureCell:
    """Set-once slot holding the first failure of a run.

    The first writer wins; later writes are ignored and the stored
    failure is never overwritten.
    """

    def __init__(self) -> None:
        self._failure: BaseException | None = None
        self._lock = threading.Lock()

    def try_set(self, failure: BaseException) -> bool:
        """Store a failure unless one is already recorded.

        Returns:
            True if this call stored the failure.
        """
        with self._lock:
            if self._failure is not None:
                return False
            self._failure = failure
            return True

    def get(self) -> BaseException | None:
        """Return the recorded failure, if any."""
        with self._lock:
            return self._failure

    @property
    def is_set(self) -> bool:
        """True once a failure has been recorded."""
        return self.get() is not None


@dataclass(slots=True)
class RunState:
    """State shared by all workers of one run.

    Attributes:
        jobs: Ordered job sequence.
        worker_count: Number of workers (fixed for the run).
        policy: Error policy (fixed for the run).
        failure: First-failure cell.
        mkdir_lock: Serialises destination-directory creation.
        progress: Number of successfully completed jobs.
    """

    jobs: Sequence[JobSpec]
    worker_count: int
    policy: ErrorPolicy
    failure: FailureCell = field(default_factory=FailureCell)
    mkdir_lock: threading.Lock = field(default_factory=threading.Lock)
    progress: ProgressCounter = field(default_factory=ProgressCounter)
    outcomes: list[JobOutcome] = field(default_factory=list)
    outcomes_lock: threading.Lock = field(default_factory=threading.Lock)

    def record(self, outcome: JobOutcome) -> None:
        """Append a job outcome."""
        with self.outcomes_lock:
            self.outcomes.append(outcome)


def ensure_parent(destination: Path, lock: threading.Lock) -> bool:
    """Create the parent directory of a destination if it is missing.

    Existence is checked before and again after acquiring the shared
    lock, so a parent targeted by several workers is created once.

    Args:
        destination: Job destination path.
        lock: Lock shared by all workers of the run.

    Returns:
        True if this call created the directory.

    Raises:
        OSError: If the directory cannot be created.
    """
    parent = destination.parent
    if parent.is_dir():
        return False
    with lock:
        if parent.is_dir():
            return False
        parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory %s", parent)
        return True


def _as_job_error(job: JobSpec, exc: Exception) -> JobError:
    """Wrap an arbitrary exception raised by a job into a JobError."""
    if isinstance(exc, JobError):
        return exc
    error = JobError(f"Failed to {job.kind.value} {job.source.path}: {exc}", job)
    error.__cause__ = exc
    return error


class WorkerPool:
    """Runs jobs on a fixed number of worker threads.

    Args:
        worker_count: Number of workers (>= 1), never resized mid-run.
        policy: Reaction to failing jobs.
    """

    def __init__(self, worker_count: int, policy: ErrorPolicy = ErrorPolicy.BREAK) -> None:
        if worker_count < 1:
            msg = f"Worker count must be at least 1, got {worker_count}"
            raise ConfigurationError(msg)
        self._worker_count = worker_count
        self._policy = policy

    @property
    def worker_count(self) -> int:
        """Number of workers."""
        return self._worker_count

    @property
    def policy(self) -> ErrorPolicy:
        """Error policy of the pool."""
        return self._policy

    def run(
        self,
        jobs: Sequence[JobSpec],
        runner: JobRunner,
        progress: ProgressSink | None = None,
    ) -> RunReport:
        """Run all jobs and block until every worker has finished.

        Args:
            jobs: Ordered job sequence.
            runner: Callable executing one job, raising on failure.
            progress: Optional sink ticked once per successful job.

        Returns:
            RunReport holding every started job's outcome and the first
            recorded failure, if any.
        """
        state = RunState(jobs=jobs, worker_count=self._worker_count, policy=self._policy)
        partitions = partition(jobs, self._worker_count)
        logger.info(
            "Running %d job(s) on %d worker(s), policy=%s",
            len(jobs),
            self._worker_count,
            self._policy.value,
        )

        threads = [
            threading.Thread(
                target=self._work,
                args=(worker_id, assigned, state, runner, progress),
                name=f"dirbatch-worker-{worker_id}",
            )
            for worker_id, assigned in partitions.items()
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        report = RunReport(
            outcomes=list(state.outcomes),
            first_failure=state.failure.get(),
            total=len(jobs),
        )
        logger.info(
            "Run finished: %d completed, %d failed, %d not started",
            report.completed,
            report.failed,
            report.not_started,
        )
        return report

    def _work(
        self,
        worker_id: int,
        jobs: list[JobSpec],
        state: RunState,
        runner: JobRunner,
        progress: ProgressSink | None,
    ) -> None:
        """Drain one worker's partition in order."""
        for job in jobs:
            if state.policy == ErrorPolicy.BREAK and state.failure.is_set:
                logger.debug("Worker %d stopping: a failure was recorded", worker_id)
                return

            try:
                if job.destination is not None:
                    ensure_parent(job.destination, state.mkdir_lock)
                runner(job)
            except Exception as e:  # thread boundary: failures travel via the cell
                error = _as_job_error(job, e)
                state.record(JobOutcome(job=job, success=False, error=str(error)))
                first = state.failure.try_set(error)
                if state.policy == ErrorPolicy.BREAK:
                    logger.debug(
                        "Worker %d stopping after failure (first=%s): %s", worker_id, first, error
                    )
                    return
                logger.error("%s", error)
                continue

            state.record(JobOutcome(job=job, success=True))
            state.progress.increment()
            if progress is not None:
                progress.tick()
            logger.debug("Worker %d finished %s", worker_id, job.describe())


def run_jobs(
    jobs: Sequence[JobSpec],
    runner: JobRunner,
    *,
    worker_count: int,
    policy: ErrorPolicy = ErrorPolicy.BREAK,
    progress: ProgressSink | None = None,
) -> RunReport:
    """Run jobs on a pool and re-raise the first failure after the join.

    Raises:
        JobError: The first failure recorded by any worker.
    """
    report = WorkerPool(worker_count, policy).run(jobs, runner, progress)
    report.raise_for_failure()
    return report
