"""Unit tests for the job operator."""

import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest
from dirbatch.archive.operator import JobOperator, remove_path
from dirbatch.batch.models import Entry, JobSpec, OperationKind
from dirbatch.core.errors import ArchiveError, ConfigurationError, JobError


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Directory with one file."""
    source = tmp_path / "src"
    source.mkdir()
    (source / "data.txt").write_text("payload")
    return source


def _archive_job(source: Path, destination: Path) -> JobSpec:
    return JobSpec(source=Entry(source, True), destination=destination, kind=OperationKind.ARCHIVE)


class TestArchiveJobs:
    """Tests for ARCHIVE jobs."""

    def test_writes_archive(self, source_dir: Path, tmp_path: Path) -> None:
        """The source is compressed and kept by default."""
        destination = tmp_path / "src.zip"

        JobOperator().run(_archive_job(source_dir, destination))

        assert zipfile.is_zipfile(destination)
        assert source_dir.is_dir()

    def test_delete_source(self, source_dir: Path, tmp_path: Path) -> None:
        """delete_source removes the source after archiving."""
        destination = tmp_path / "src.zip"

        JobOperator(delete_source=True).run(_archive_job(source_dir, destination))

        assert destination.is_file()
        assert not source_dir.exists()

    def test_failed_archive_keeps_source(self, source_dir: Path, tmp_path: Path) -> None:
        """A failed archive never deletes its source."""
        job = _archive_job(source_dir, tmp_path / "src.zip")

        with (
            patch(
                "dirbatch.archive.operator.create_archive",
                side_effect=ArchiveError("disk full"),
            ),
            pytest.raises(JobError, match="disk full") as exc_info,
        ):
            JobOperator(delete_source=True).run(job)

        assert source_dir.is_dir()
        assert exc_info.value.job is job
        assert isinstance(exc_info.value.__cause__, ArchiveError)

    def test_invalid_level(self) -> None:
        """An out-of-range level is rejected at construction."""
        with pytest.raises(ConfigurationError):
            JobOperator(level=12)


class TestExtractJobs:
    """Tests for EXTRACT jobs."""

    def test_extracts_into_destination(self, source_dir: Path, tmp_path: Path) -> None:
        """The archive is unpacked into the destination directory."""
        archive_path = tmp_path / "src.zip"
        JobOperator().run(_archive_job(source_dir, archive_path))
        destination = tmp_path / "out" / "src"

        JobOperator()(
            JobSpec(
                source=Entry(archive_path, False),
                destination=destination,
                kind=OperationKind.EXTRACT,
            )
        )

        assert (destination / "data.txt").read_text() == "payload"
        assert archive_path.is_file()

    def test_corrupt_archive(self, tmp_path: Path) -> None:
        """A corrupt archive fails with a JobError."""
        bogus = tmp_path / "bogus.zip"
        bogus.write_text("nope")
        job = JobSpec(
            source=Entry(bogus, False), destination=tmp_path / "bogus", kind=OperationKind.EXTRACT
        )

        with pytest.raises(JobError, match="bogus.zip"):
            JobOperator().run(job)

    @pytest.mark.parametrize("kind", [OperationKind.ARCHIVE, OperationKind.EXTRACT])
    def test_missing_destination(self, source_dir: Path, kind: OperationKind) -> None:
        """A job whose destination was cleared fails instead of writing anywhere."""
        job = JobSpec(source=Entry(source_dir, True), destination=source_dir, kind=kind)
        object.__setattr__(job, "destination", None)

        with pytest.raises(JobError, match="has no destination") as exc_info:
            JobOperator().run(job)

        assert exc_info.value.job is job
        assert (source_dir / "data.txt").read_text() == "payload"


class TestDeleteJobs:
    """Tests for DELETE jobs."""

    def test_removes_tree(self, source_dir: Path) -> None:
        """The whole directory tree is removed."""
        JobOperator().run(
            JobSpec(source=Entry(source_dir, True), destination=None, kind=OperationKind.DELETE)
        )

        assert not source_dir.exists()

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Deleting a vanished directory fails with a JobError."""
        job = JobSpec(
            source=Entry(tmp_path / "gone", True), destination=None, kind=OperationKind.DELETE
        )

        with pytest.raises(JobError, match="does not exist"):
            JobOperator().run(job)


class TestRemovePath:
    """Tests for remove_path."""

    def test_removes_file(self, tmp_path: Path) -> None:
        """Plain files are unlinked."""
        target = tmp_path / "file.txt"
        target.write_text("x")

        remove_path(target)

        assert not target.exists()

    def test_symlink_to_directory_keeps_target(self, source_dir: Path, tmp_path: Path) -> None:
        """A symlink to a directory is unlinked, not followed."""
        link = tmp_path / "link"
        link.symlink_to(source_dir, target_is_directory=True)

        remove_path(link)

        assert not link.exists()
        assert (source_dir / "data.txt").is_file()

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            remove_path(tmp_path / "missing")
