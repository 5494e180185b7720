"""Directory enumeration with depth control.

Lists the entries below an input root to a bounded depth and returns a
flat, deterministically ordered sequence. Traversal uses an explicit
worklist of (path, remaining depth) pairs rather than recursion.
"""

import logging
from pathlib import Path

from dirbatch.batch.models import Entry, EnumerationRequest
from dirbatch.core.errors import EnumerationError

logger = logging.getLogger(__name__)

# Names starting with this marker are hidden on POSIX systems
HIDDEN_PREFIX = "."


def is_hidden(path: Path) -> bool:
    """Check whether a path's final component is hidden."""
    return path.name.startswith(HIDDEN_PREFIX)


def enumerate_entries(
    root: Path,
    max_depth: int = 0,
    *,
    include_files: bool = False,
    include_hidden: bool = False,
) -> list[Entry]:
    """Enumerate entries below a root directory.

    At depth 0 the direct children of ``root`` are returned: directories
    always, plain files only if ``include_files``. For ``max_depth`` N > 0
    every directory at the current level is enumerated with depth N - 1
    and the results are concatenated in sorted-parent order (pre-order
    flatten). Files found at intermediate levels are not part of the
    result.

    Args:
        root: Directory to enumerate.
        max_depth: Recursion depth (0 = direct children only).
        include_files: Include plain files at the final level.
        include_hidden: Include entries whose name starts with a dot.

    Returns:
        Entries sorted lexicographically by path.

    Raises:
        ConfigurationError: If max_depth is negative.
        EnumerationError: If root is not a directory or any directory
            on the way cannot be listed.
    """
    request = EnumerationRequest(
        root=Path(root),
        max_depth=max_depth,
        include_files=include_files,
        include_hidden=include_hidden,
    )
    return enumerate_request(request)


def enumerate_request(request: EnumerationRequest) -> list[Entry]:
    """Enumerate entries described by an EnumerationRequest.

    See :func:`enumerate_entries` for the ordering and failure contract.
    """
    root = request.root
    if not root.is_dir():
        if root.exists():
            msg = f"Not a directory: {root}"
        else:
            msg = f"Directory does not exist: {root}"
        raise EnumerationError(msg)

    results: list[Entry] = []
    # LIFO worklist; children are pushed in reverse so pops follow sorted order
    worklist: list[tuple[Path, int]] = [(root, request.max_depth)]

    while worklist:
        directory, remaining = worklist.pop()
        children = _list_children(directory, include_hidden=request.include_hidden)

        if remaining == 0:
            for child, child_is_dir in children:
                if child_is_dir or request.include_files:
                    results.append(Entry(path=child, is_dir=child_is_dir))
            continue

        subdirs = [child for child, child_is_dir in children if child_is_dir]
        worklist.extend((subdir, remaining - 1) for subdir in reversed(subdirs))

    # Part-wise path ordering keeps the pre-order grouping intact
    results.sort(key=lambda e: e.path)
    logger.debug(
        "Enumerated %d entries under %s (depth=%d)", len(results), root, request.max_depth
    )
    return results


def _list_children(directory: Path, *, include_hidden: bool) -> list[tuple[Path, bool]]:
    """List the direct children of a directory, sorted by path.

    Args:
        directory: Directory to list.
        include_hidden: Keep hidden entries.

    Returns:
        Sorted (path, is_dir) pairs.

    Raises:
        EnumerationError: If the directory cannot be listed.
    """
    try:
        paths = sorted(directory.iterdir())
    except OSError as e:
        msg = f"Cannot list directory {directory}: {e.strerror or e}"
        raise EnumerationError(msg) from e

    children: list[tuple[Path, bool]] = []
    for path in paths:
        if not include_hidden and is_hidden(path):
            continue
        children.append((path, path.is_dir()))
    return children
