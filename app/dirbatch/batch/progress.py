"""Progress reporting for batch runs.

Progress is presentational only: workers tick a sink once per completed
job and nothing in the engine reads it back for control flow.
"""

from __future__ import annotations

import threading
from types import TracebackType
from typing import TYPE_CHECKING, Protocol

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

if TYPE_CHECKING:
    from rich.console import Console


class ProgressSink(Protocol):
    """Receives one tick per successfully completed job."""

    def tick(self) -> None:
        """Record one completed job."""
        ...


class ProgressCounter:
    """Monotonic counter safe for concurrent increments."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        """Increment the counter and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        """Current count."""
        with self._lock:
            return self._value


class NullProgressSink:
    """Sink that only counts ticks (quiet mode and tests)."""

    def __init__(self) -> None:
        self.counter = ProgressCounter()

    def tick(self) -> None:
        self.counter.increment()

    @property
    def ticks(self) -> int:
        """Number of ticks received."""
        return self.counter.value


class RichProgressSink:
    """Progress bar backed by rich.progress.

    Use as a context manager around the pool run::

        with RichProgressSink("Compressing", total=len(jobs)) as sink:
            pool.run(jobs, operator.run, progress=sink)

    Args:
        description: Text shown before the bar.
        total: Number of jobs in the run.
        console: Console to render to (defaults to rich's global console).
    """

    def __init__(self, description: str, total: int, console: Console | None = None) -> None:
        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=False,
        )
        self._description = description
        self._total = total
        self._task: TaskID | None = None
        self._lock = threading.Lock()
        self.counter = ProgressCounter()

    def __enter__(self) -> RichProgressSink:
        self._progress.start()
        self._task = self._progress.add_task(self._description, total=self._total)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def tick(self) -> None:
        self.counter.increment()
        if self._task is None:
            return
        with self._lock:
            self._progress.advance(self._task)
