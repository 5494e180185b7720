"""Deterministic assignment of jobs to workers."""

import logging
import os
from collections.abc import Sequence
from typing import TypeVar

import psutil

from dirbatch.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_worker_count(requested: int | None) -> int:
    """Resolve the requested worker count.

    Values <= 0 (or None) mean "auto" and resolve to the number of
    physical cores on the host, evaluated once per call. Hosts where
    psutil cannot count physical cores fall back to the logical CPU
    count, then to 1.

    Args:
        requested: Requested worker count.

    Returns:
        Worker count >= 1.
    """
    if requested is not None and requested > 0:
        return requested
    detected = psutil.cpu_count(logical=False) or os.cpu_count() or 1
    logger.debug("Auto-detected %d physical core(s)", detected)
    return detected


def partition(jobs: Sequence[T], worker_count: int) -> dict[int, list[T]]:
    """Assign jobs to workers with a fixed-stride round robin.

    Worker ``k`` receives the jobs at positions ``k, k + J, k + 2J, ...``
    where ``J`` is ``worker_count``. Every job is assigned to exactly
    one worker and loads differ by at most one job.

    Args:
        jobs: Ordered job sequence.
        worker_count: Number of workers (J >= 1).

    Returns:
        Mapping from worker id (0..J-1) to its ordered subsequence.
        Workers without jobs map to empty lists.

    Raises:
        ConfigurationError: If worker_count is less than 1.
    """
    if worker_count < 1:
        msg = f"Worker count must be at least 1, got {worker_count}"
        raise ConfigurationError(msg)
    return {k: list(jobs[k::worker_count]) for k in range(worker_count)}
