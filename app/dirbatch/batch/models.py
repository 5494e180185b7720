"""Batch domain models.

This module defines the data structures shared by the batch engine:
enumerated entries, enumeration requests, deletion conditions, job
specifications, the error policy and the per-run report.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dirbatch.core.errors import ConfigurationError

# Suffix appended when archiving and stripped when extracting
ARCHIVE_SUFFIX = ".zip"


@dataclass(frozen=True, slots=True)
class Entry:
    """A filesystem path discovered during enumeration.

    Attributes:
        path: Path of the entry (root-prefixed, not resolved).
        is_dir: True for directories (including symlinks to directories).
    """

    path: Path
    is_dir: bool

    @property
    def name(self) -> str:
        """Final path component."""
        return self.path.name


@dataclass(frozen=True, slots=True)
class EnumerationRequest:
    """Parameters for a single enumeration of an input root.

    Attributes:
        root: Directory to enumerate.
        max_depth: 0 lists direct children; N > 0 recurses N levels and flattens.
        include_files: Include plain files, not only directories.
        include_hidden: Include entries whose name starts with a dot.
    """

    root: Path
    max_depth: int = 0
    include_files: bool = False
    include_hidden: bool = False

    def __post_init__(self) -> None:
        """Validate the request after initialization."""
        if self.max_depth < 0:
            msg = f"Depth must be a non-negative integer, got {self.max_depth}"
            raise ConfigurationError(msg)


class ConditionKind(str, Enum):
    """Kind of a deletion condition.

    Attributes:
        PRESENT: The named child must exist.
        ABSENT: The named child must not exist.
    """

    PRESENT = "present"
    ABSENT = "absent"


@dataclass(frozen=True, slots=True)
class Condition:
    """A present/absent filename condition for the deletion workflow.

    Conditions are evaluated against the direct-child names of a
    directory. Only depth 0 (direct children) is supported.

    Attributes:
        kind: Whether the name must be present or absent.
        name: File or directory name to look for.
        depth: Depth of the name below the candidate directory.
    """

    kind: ConditionKind
    name: str
    depth: int = 0

    def __post_init__(self) -> None:
        """Validate condition data after initialization."""
        if not self.name:
            msg = f"{self.kind.value.capitalize()} condition name cannot be empty"
            raise ConfigurationError(msg)
        if "/" in self.name or "\\" in self.name or self.name in (".", ".."):
            msg = f"Condition name must be a plain file or directory name, got '{self.name}'"
            raise ConfigurationError(msg)
        if self.depth != 0:
            msg = f"Condition depth {self.depth} is not supported (only 0 is implemented)"
            raise ConfigurationError(msg)

    @classmethod
    def present(cls, name: str, depth: int = 0) -> "Condition":
        """Create a PRESENT condition."""
        return cls(kind=ConditionKind.PRESENT, name=name, depth=depth)

    @classmethod
    def absent(cls, name: str, depth: int = 0) -> "Condition":
        """Create an ABSENT condition."""
        return cls(kind=ConditionKind.ABSENT, name=name, depth=depth)


class OperationKind(str, Enum):
    """Kind of work performed by a job."""

    ARCHIVE = "archive"
    EXTRACT = "extract"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class JobSpec:
    """A single unit of work bound to one source entry.

    Created once by the planner and consumed by exactly one worker.

    Attributes:
        source: Entry the job operates on.
        destination: Derived output path (None for delete jobs).
        kind: Operation to perform.
    """

    source: Entry
    destination: Path | None
    kind: OperationKind

    def __post_init__(self) -> None:
        """Validate job data after initialization."""
        if self.kind != OperationKind.DELETE and self.destination is None:
            msg = f"{self.kind.value} job requires a destination"
            raise ValueError(msg)

    def describe(self) -> str:
        """Human-readable 'source -> destination' form."""
        if self.destination is None:
            return str(self.source.path)
        return f"{self.source.path} -> {self.destination}"


class ErrorPolicy(str, Enum):
    """Run-wide reaction to a failing job.

    Attributes:
        BREAK: Stop scheduling new jobs after the first failure.
        CONTINUE: Record failures and attempt every job.
    """

    BREAK = "break"
    CONTINUE = "continue"


@dataclass(frozen=True, slots=True)
class JobOutcome:
    """Result of a job that was started by a worker.

    Attributes:
        job: The job that ran.
        success: Whether it completed successfully.
        error: Error message if it failed, None otherwise.
    """

    job: JobSpec
    success: bool
    error: str | None = None


@dataclass(slots=True)
class RunReport:
    """Aggregated result of one pool run, visible after the join barrier.

    Attributes:
        outcomes: Outcomes of every started job (interleaved across workers).
        first_failure: First failure recorded by any worker, if any.
        total: Number of jobs handed to the pool.
    """

    outcomes: list[JobOutcome] = field(default_factory=list)
    first_failure: BaseException | None = None
    total: int = 0

    @property
    def completed(self) -> int:
        """Number of jobs that completed successfully."""
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        """Number of jobs that failed."""
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def not_started(self) -> int:
        """Number of jobs that were never started (cancelled under BREAK)."""
        return self.total - len(self.outcomes)

    @property
    def success(self) -> bool:
        """True if no job failed."""
        return self.first_failure is None

    def raise_for_failure(self) -> None:
        """Re-raise the first recorded failure, if any."""
        if self.first_failure is not None:
            raise self.first_failure
