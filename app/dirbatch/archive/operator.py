"""Job operator.

Executes a single archive, extract or delete job. This is the runner
the worker pool invokes once per job; every failure is raised as a
JobError carrying the job and the underlying cause.
"""

import logging
import shutil
from pathlib import Path

from dirbatch.archive.ziparchive import create_archive, extract_archive, validate_level
from dirbatch.batch.models import JobSpec, OperationKind
from dirbatch.core.errors import ArchiveError, JobError

logger = logging.getLogger(__name__)


def remove_path(path: Path) -> None:
    """Remove a directory tree, file or symlink.

    Directories (but not symlinks to directories) are removed with
    shutil.rmtree; files, symlinks and dead symlinks are unlinked.

    Raises:
        FileNotFoundError: If the path does not exist.
        OSError: If removal fails.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
        return
    if path.exists() or path.is_symlink():
        path.unlink()
        return
    msg = f"Path does not exist: {path}"
    raise FileNotFoundError(msg)


def _destination(job: JobSpec) -> Path:
    """Return the destination of an archive or extract job.

    Raises:
        JobError: If the job has no destination.
    """
    if job.destination is None:
        msg = f"{job.kind.value} job for {job.source.path} has no destination"
        raise JobError(msg, job)
    return job.destination


class JobOperator:
    """Executes jobs of every operation kind.

    Attributes:
        level: Compression level for archive jobs (None = default).
        delete_source: Remove the source after a successful archive job.
    """

    def __init__(self, level: int | None = None, delete_source: bool = False) -> None:
        """Initialize the JobOperator.

        Args:
            level: Compression level 0-9, or None for the default.
            delete_source: If True, remove each source once its archive
                has been written.

        Raises:
            ConfigurationError: If the level is out of range.
        """
        self.level = validate_level(level)
        self.delete_source = delete_source

    def run(self, job: JobSpec) -> None:
        """Execute a single job.

        Args:
            job: Job to execute.

        Raises:
            JobError: If the job fails.
        """
        try:
            if job.kind == OperationKind.ARCHIVE:
                self._archive(job)
            elif job.kind == OperationKind.EXTRACT:
                self._extract(job)
            else:
                self._delete(job)
        except (ArchiveError, OSError) as e:
            raise JobError(str(e), job) from e

    def __call__(self, job: JobSpec) -> None:
        self.run(job)

    def _archive(self, job: JobSpec) -> None:
        create_archive(job.source.path, _destination(job), self.level)
        if self.delete_source:
            remove_path(job.source.path)
            logger.debug("Removed source %s", job.source.path)

    def _extract(self, job: JobSpec) -> None:
        extract_archive(job.source.path, _destination(job))

    def _delete(self, job: JobSpec) -> None:
        remove_path(job.source.path)
        logger.debug("Deleted %s", job.source.path)
