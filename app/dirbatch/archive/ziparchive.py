"""Zip archive creation and extraction.

A narrow capability used by the batch engine: compress a directory (or
a single file) into one archive, and extract one archive into a
directory. Every failure surfaces as ArchiveError.
"""

import logging
import zipfile
from pathlib import Path

from dirbatch.core.errors import ArchiveError, ConfigurationError

logger = logging.getLogger(__name__)

MIN_LEVEL = 0
MAX_LEVEL = 9

# Errors zipfile and the OS layer may raise while reading or writing
_ARCHIVE_ERRORS: tuple[type[Exception], ...] = (
    OSError,
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    ValueError,
    RuntimeError,
    EOFError,
)


def validate_level(level: int | None) -> int | None:
    """Validate a compression level.

    Args:
        level: Compression level (0-9) or None for the default.

    Returns:
        The level unchanged.

    Raises:
        ConfigurationError: If the level is out of range.
    """
    if level is not None and not (MIN_LEVEL <= level <= MAX_LEVEL):
        msg = f"Compression level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {level}"
        raise ConfigurationError(msg)
    return level


def create_archive(source: Path, destination: Path, level: int | None = None) -> None:
    """Compress a directory or a single file into a zip archive.

    Directory members are stored relative to the directory itself, with
    sub-directories written as directory entries. A plain file becomes
    a single member named after the file. Level 0 stores members
    without compression. Modification times before 1980 are clamped to
    the earliest time zip can store. A partially written archive is
    removed when writing fails; an existing file is left alone when the
    archive cannot even be opened.

    Args:
        source: Directory or file to compress.
        destination: Archive path to create (overwritten if present).
        level: Deflate level 0-9, or None for zlib's default.

    Raises:
        ArchiveError: If the archive cannot be written.
    """
    validate_level(level)
    if level == 0:
        compression, compresslevel = zipfile.ZIP_STORED, None
    else:
        compression, compresslevel = zipfile.ZIP_DEFLATED, level

    opened = False
    try:
        # Timestamps outside the DOS range (before 1980) are clamped
        with zipfile.ZipFile(
            destination,
            "w",
            compression=compression,
            compresslevel=compresslevel,
            strict_timestamps=False,
        ) as archive:
            opened = True
            if source.is_dir():
                for path in sorted(source.rglob("*")):
                    if path == destination:
                        continue
                    archive.write(path, path.relative_to(source).as_posix())
            else:
                archive.write(source, source.name)
    except _ARCHIVE_ERRORS as e:
        # Only remove what this call wrote
        if opened:
            destination.unlink(missing_ok=True)
        msg = f"Failed to create archive {destination} from {source}: {e}"
        raise ArchiveError(msg) from e

    logger.debug("Archived %s -> %s", source, destination)


def extract_archive(source: Path, destination: Path) -> None:
    """Extract every member of a zip archive into a directory.

    The destination directory is created if missing. Member names are
    sanitised by zipfile, so nothing is written outside ``destination``.

    Args:
        source: Archive to extract.
        destination: Directory to extract into.

    Raises:
        ArchiveError: If the archive cannot be opened or extracted.
    """
    try:
        destination.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(source) as archive:
            archive.extractall(destination)
    except _ARCHIVE_ERRORS as e:
        msg = f"Failed to extract archive {source} into {destination}: {e}"
        raise ArchiveError(msg) from e

    logger.debug("Extracted %s -> %s", source, destination)
