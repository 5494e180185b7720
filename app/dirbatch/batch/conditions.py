"""Eligibility filters for enumerated entries.

Two policies share one shape: decide from a directory's direct-child
names (or from the derived destination) whether an entry takes part in
the run. Deletion uses present/absent name conditions; archiving and
extraction use independent boolean filters applied conjunctively, each
reporting how many entries it removed.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from dirbatch.batch.models import ARCHIVE_SUFFIX, Condition, ConditionKind, Entry
from dirbatch.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FilterResult:
    """Entries kept by a filtering pass plus feedback for the user.

    Attributes:
        kept: Entries that passed every filter, in input order.
        removed: Number of entries removed, keyed by filter name.
        warnings: Non-fatal problems encountered while filtering.
    """

    kept: list[Entry] = field(default_factory=list)
    removed: dict[str, int] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def total_removed(self) -> int:
        """Total number of entries removed by all filters."""
        return sum(self.removed.values())


class UnreadableDirectory(Exception):
    """Raised internally when a directory's children cannot be listed."""


def child_names(directory: Path) -> set[str]:
    """Return the set of direct-child names of a directory.

    Raises:
        UnreadableDirectory: If the directory cannot be listed.
    """
    try:
        return {child.name for child in directory.iterdir()}
    except OSError as e:
        msg = f"Cannot list {directory}: {e.strerror or e}"
        raise UnreadableDirectory(msg) from e


# =============================================================================
# Deletion eligibility
# =============================================================================


def validate_conditions(conditions: Sequence[Condition]) -> None:
    """Ensure at least one present or absent condition is given.

    Raises:
        ConfigurationError: If no condition is given.
    """
    if not conditions:
        msg = "At least one --present or --absent condition needs to be set"
        raise ConfigurationError(msg)


def conditions_met(names: set[str], conditions: Sequence[Condition]) -> bool:
    """Evaluate conditions against a set of direct-child names.

    Absent conditions are checked first: any forbidden name makes the
    directory ineligible regardless of the present conditions. Otherwise
    every present name must exist.

    Args:
        names: Direct-child names of the candidate directory.
        conditions: Present/absent conditions.

    Returns:
        True if the directory is eligible.
    """
    absent = [c.name for c in conditions if c.kind == ConditionKind.ABSENT]
    if any(name in names for name in absent):
        return False

    present = [c.name for c in conditions if c.kind == ConditionKind.PRESENT]
    return all(name in names for name in present)


def is_deletion_eligible(directory: Path, conditions: Sequence[Condition]) -> bool:
    """Check whether a directory satisfies the deletion conditions.

    Raises:
        UnreadableDirectory: If the directory cannot be listed.
    """
    return conditions_met(child_names(directory), conditions)


def filter_deletable(entries: Iterable[Entry], conditions: Sequence[Condition]) -> FilterResult:
    """Keep the directories that satisfy every deletion condition.

    Directories that cannot be listed are treated as ineligible and
    reported as warnings instead of failing the run.

    Args:
        entries: Enumerated entries (non-directories are ignored).
        conditions: Present/absent conditions (at least one).

    Returns:
        FilterResult with the eligible directories.

    Raises:
        ConfigurationError: If no condition is given.
    """
    validate_conditions(conditions)
    result = FilterResult()
    unmatched = 0
    unreadable = 0

    for entry in entries:
        if not entry.is_dir:
            continue
        try:
            eligible = is_deletion_eligible(entry.path, conditions)
        except UnreadableDirectory as e:
            logger.debug("%s", e)
            result.warnings.append(str(e))
            unreadable += 1
            continue
        if eligible:
            result.kept.append(entry)
        else:
            unmatched += 1

    result.removed["conditions"] = unmatched
    if unreadable:
        result.removed["unreadable"] = unreadable
    return result


# =============================================================================
# Archive / extract eligibility
# =============================================================================


def has_archive_suffix(path: Path) -> bool:
    """Check whether a path carries the archive extension."""
    return path.suffix.lower() == ARCHIVE_SUFFIX


def is_empty_directory(path: Path) -> bool:
    """Check whether a directory has no children at all.

    Raises:
        UnreadableDirectory: If the directory cannot be listed.
    """
    try:
        return next(path.iterdir(), None) is None
    except OSError as e:
        msg = f"Cannot list {path}: {e.strerror or e}"
        raise UnreadableDirectory(msg) from e


@dataclass(frozen=True, slots=True)
class EntryFilter:
    """A named predicate that removes entries from a run.

    Attributes:
        name: Name reported to the user (e.g. "existing").
        rejects: Returns True for entries that must be removed.
    """

    name: str
    rejects: Callable[[Entry], bool]


def exclude_archives_filter() -> EntryFilter:
    """Drop plain files that already are archives (when scanning files)."""
    return EntryFilter(
        name="archives",
        rejects=lambda e: not e.is_dir and has_archive_suffix(e.path),
    )


def keep_archives_filter() -> EntryFilter:
    """Keep only plain files with the archive extension (extraction)."""
    return EntryFilter(
        name="non-archives",
        rejects=lambda e: e.is_dir or not has_archive_suffix(e.path),
    )


def skip_existing_filter(destination_of: Callable[[Entry], Path]) -> EntryFilter:
    """Drop entries whose computed destination already exists."""
    return EntryFilter(
        name="existing",
        rejects=lambda e: destination_of(e).exists(),
    )


def skip_empty_filter() -> EntryFilter:
    """Drop source directories that have no children."""
    return EntryFilter(
        name="empty",
        rejects=lambda e: e.is_dir and is_empty_directory(e.path),
    )


def apply_filters(entries: Iterable[Entry], filters: Sequence[EntryFilter]) -> FilterResult:
    """Apply filters conjunctively, counting removals per filter.

    Each entry is removed by the first filter that rejects it. An entry
    whose directory cannot be listed while filtering is treated as
    ineligible and reported as a warning.

    Args:
        entries: Entries to filter, in run order.
        filters: Filters to apply, in order.

    Returns:
        FilterResult with the kept entries in input order.
    """
    result = FilterResult()
    for entry_filter in filters:
        result.removed[entry_filter.name] = 0

    for entry in entries:
        rejected_by: str | None = None
        try:
            for entry_filter in filters:
                if entry_filter.rejects(entry):
                    rejected_by = entry_filter.name
                    break
        except UnreadableDirectory as e:
            logger.debug("%s", e)
            result.warnings.append(str(e))
            result.removed["unreadable"] = result.removed.get("unreadable", 0) + 1
            continue

        if rejected_by is None:
            result.kept.append(entry)
        else:
            result.removed[rejected_by] += 1

    return result
