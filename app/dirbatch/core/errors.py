"""Exception hierarchy for dirbatch.

All errors raised by the engine derive from DirbatchError so that the
CLI can report them uniformly before exiting with a non-zero status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dirbatch.batch.models import JobSpec


class DirbatchError(Exception):
    """Base exception for all dirbatch errors."""


class ConfigurationError(DirbatchError):
    """Raised for bad flags, malformed patterns or invalid settings.

    Reported immediately; no work is attempted.
    """


class EnumerationError(DirbatchError):
    """Raised when the input tree cannot be enumerated.

    Covers a missing or non-directory root as well as child directories
    that cannot be listed during a deep scan.
    """


class ArchiveError(DirbatchError):
    """Raised by the archive layer when creating or extracting fails."""


class JobError(DirbatchError):
    """Raised when a single job (archive, extract or delete) fails.

    Attributes:
        job: The job that failed.
    """

    def __init__(self, message: str, job: JobSpec) -> None:
        super().__init__(message)
        self.job = job
