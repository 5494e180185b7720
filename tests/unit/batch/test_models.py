"""Tests for batch domain models."""

from pathlib import Path

import pytest
from dirbatch.batch.models import (
    Condition,
    ConditionKind,
    Entry,
    EnumerationRequest,
    ErrorPolicy,
    JobOutcome,
    JobSpec,
    OperationKind,
    RunReport,
)
from dirbatch.core.errors import ConfigurationError, JobError


def _job(name: str = "a") -> JobSpec:
    return JobSpec(
        source=Entry(Path("/in") / name, True),
        destination=Path("/out") / f"{name}.zip",
        kind=OperationKind.ARCHIVE,
    )


class TestEntry:
    """Tests for Entry."""

    def test_name(self) -> None:
        """name is the final path component."""
        assert Entry(Path("/data/sub/dir"), True).name == "dir"

    def test_is_hashable(self) -> None:
        """Entries are frozen and usable in sets."""
        assert len({Entry(Path("/a"), True), Entry(Path("/a"), True)}) == 1


class TestEnumerationRequest:
    """Tests for EnumerationRequest."""

    def test_defaults(self) -> None:
        """Depth 0, directories only, hidden excluded."""
        request = EnumerationRequest(root=Path("/data"))
        assert request.max_depth == 0
        assert request.include_files is False
        assert request.include_hidden is False

    def test_negative_depth(self) -> None:
        """Negative depths are rejected."""
        with pytest.raises(ConfigurationError):
            EnumerationRequest(root=Path("/data"), max_depth=-1)


class TestCondition:
    """Tests for Condition."""

    def test_factories(self) -> None:
        """present/absent set the kind."""
        assert Condition.present("a").kind == ConditionKind.PRESENT
        assert Condition.absent("a").kind == ConditionKind.ABSENT

    @pytest.mark.parametrize("name", [".", "..", "a/b", "a\\b"])
    def test_rejects_non_plain_names(self, name: str) -> None:
        """Dots and separators are not plain names."""
        with pytest.raises(ConfigurationError):
            Condition.present(name)


class TestJobSpec:
    """Tests for JobSpec."""

    def test_describe_with_destination(self) -> None:
        """describe shows source and destination."""
        assert _job().describe() == f"{Path('/in/a')} -> {Path('/out/a.zip')}"

    def test_describe_delete(self) -> None:
        """Delete jobs show only the source."""
        job = JobSpec(
            source=Entry(Path("/in/a"), True), destination=None, kind=OperationKind.DELETE
        )
        assert job.describe() == str(Path("/in/a"))

    def test_archive_requires_destination(self) -> None:
        """Non-delete jobs must carry a destination."""
        with pytest.raises(ValueError, match="requires a destination"):
            JobSpec(source=Entry(Path("/in/a"), True), destination=None, kind=OperationKind.ARCHIVE)


class TestErrorPolicy:
    """Tests for ErrorPolicy."""

    def test_values(self) -> None:
        """Policies map to their CLI spelling."""
        assert ErrorPolicy("break") is ErrorPolicy.BREAK
        assert ErrorPolicy("continue") is ErrorPolicy.CONTINUE


class TestRunReport:
    """Tests for RunReport."""

    def test_counts(self) -> None:
        """completed/failed/not_started derive from outcomes and total."""
        report = RunReport(
            outcomes=[
                JobOutcome(job=_job("a"), success=True),
                JobOutcome(job=_job("b"), success=False, error="bad"),
            ],
            first_failure=JobError("bad", _job("b")),
            total=5,
        )

        assert report.completed == 1
        assert report.failed == 1
        assert report.not_started == 3
        assert report.success is False

    def test_raise_for_failure(self) -> None:
        """The first failure is re-raised as-is."""
        failure = JobError("bad", _job())
        report = RunReport(first_failure=failure, total=1)

        with pytest.raises(JobError) as exc_info:
            report.raise_for_failure()
        assert exc_info.value is failure

    def test_clean_report(self) -> None:
        """A report without failures does not raise."""
        report = RunReport(outcomes=[JobOutcome(job=_job(), success=True)], total=1)
        report.raise_for_failure()
        assert report.success is True
