"""Archive capability and job execution.

This module provides zip archive creation and extraction plus the
operator that executes archive, extract and delete jobs.
"""

from dirbatch.archive.operator import JobOperator, remove_path
from dirbatch.archive.ziparchive import (
    MAX_LEVEL,
    MIN_LEVEL,
    create_archive,
    extract_archive,
    validate_level,
)

__all__ = [
    "MAX_LEVEL",
    "MIN_LEVEL",
    "JobOperator",
    "create_archive",
    "extract_archive",
    "remove_path",
    "validate_level",
]
