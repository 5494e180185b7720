"""Job planning: destination derivation and job sequence construction.

Turns enumerated entries into the ordered, immutable JobSpec sequence
handed to the worker pool. Destinations mirror the source's position
relative to the input root under the output root.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from dirbatch.batch.conditions import (
    EntryFilter,
    FilterResult,
    apply_filters,
    exclude_archives_filter,
    filter_deletable,
    keep_archives_filter,
    skip_empty_filter,
    skip_existing_filter,
)
from dirbatch.batch.models import ARCHIVE_SUFFIX, Condition, Entry, JobSpec, OperationKind

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JobPlan:
    """Ordered jobs for one run plus filtering feedback.

    Attributes:
        jobs: Jobs in run order.
        filtered: Result of the eligibility filters.
    """

    jobs: list[JobSpec] = field(default_factory=list)
    filtered: FilterResult = field(default_factory=FilterResult)

    @property
    def is_empty(self) -> bool:
        """True if there is nothing to do."""
        return not self.jobs


def _relative(source: Path, input_root: Path) -> Path:
    """Path of source relative to the input root (lexical)."""
    return source.relative_to(input_root)


def archive_destination(source: Path, input_root: Path, output_root: Path) -> Path:
    """Derive the archive path for a source.

    ``<output_root>/<relative>`` with the archive suffix appended to the
    final name, so ``a/b`` becomes ``a/b.zip`` and ``a/b.txt`` becomes
    ``a/b.txt.zip``.
    """
    target = output_root / _relative(source, input_root)
    return target.with_name(target.name + ARCHIVE_SUFFIX)


def extract_destination(source: Path, input_root: Path, output_root: Path) -> Path:
    """Derive the extraction directory for an archive.

    ``<output_root>/<relative>`` with the last suffix stripped.
    """
    target = output_root / _relative(source, input_root)
    return target.with_suffix("")


def plan_archive_jobs(
    entries: list[Entry],
    input_root: Path,
    output_root: Path,
    *,
    skip_existing: bool = False,
    skip_empty: bool = False,
) -> JobPlan:
    """Build archive jobs for enumerated entries.

    Plain files that already carry the archive suffix are always
    excluded so that a second run over the same tree does not archive
    its own output.

    Args:
        entries: Enumerated sources.
        input_root: Root the entries were enumerated from.
        output_root: Root under which archives are written.
        skip_existing: Drop sources whose archive already exists.
        skip_empty: Drop empty source directories.

    Returns:
        JobPlan with ARCHIVE jobs.
    """

    def destination_of(entry: Entry) -> Path:
        return archive_destination(entry.path, input_root, output_root)

    filters: list[EntryFilter] = [exclude_archives_filter()]
    if skip_existing:
        filters.append(skip_existing_filter(destination_of))
    if skip_empty:
        filters.append(skip_empty_filter())

    filtered = apply_filters(entries, filters)
    jobs = [
        JobSpec(source=e, destination=destination_of(e), kind=OperationKind.ARCHIVE)
        for e in filtered.kept
    ]
    logger.debug("Planned %d archive job(s)", len(jobs))
    return JobPlan(jobs=jobs, filtered=filtered)


def plan_extract_jobs(
    entries: list[Entry],
    input_root: Path,
    output_root: Path,
    *,
    skip_existing: bool = False,
) -> JobPlan:
    """Build extraction jobs for the archives among enumerated entries.

    Args:
        entries: Enumerated entries (must include files).
        input_root: Root the entries were enumerated from.
        output_root: Root under which archives are extracted.
        skip_existing: Drop archives whose output directory already exists.

    Returns:
        JobPlan with EXTRACT jobs.
    """

    def destination_of(entry: Entry) -> Path:
        return extract_destination(entry.path, input_root, output_root)

    filters: list[EntryFilter] = [keep_archives_filter()]
    if skip_existing:
        filters.append(skip_existing_filter(destination_of))

    filtered = apply_filters(entries, filters)
    jobs = [
        JobSpec(source=e, destination=destination_of(e), kind=OperationKind.EXTRACT)
        for e in filtered.kept
    ]
    logger.debug("Planned %d extract job(s)", len(jobs))
    return JobPlan(jobs=jobs, filtered=filtered)


def plan_delete_jobs(entries: list[Entry], conditions: list[Condition]) -> JobPlan:
    """Build deletion jobs for directories matching the conditions.

    Raises:
        ConfigurationError: If no condition is given.
    """
    filtered = filter_deletable(entries, conditions)
    jobs = [JobSpec(source=e, destination=None, kind=OperationKind.DELETE) for e in filtered.kept]
    logger.debug("Planned %d delete job(s)", len(jobs))
    return JobPlan(jobs=jobs, filtered=filtered)
