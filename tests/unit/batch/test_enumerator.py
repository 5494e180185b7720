"""Tests for directory enumeration with depth control."""

from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from dirbatch.batch.enumerator import enumerate_entries, enumerate_request, is_hidden
from dirbatch.batch.models import Entry, EnumerationRequest
from dirbatch.core.errors import ConfigurationError, EnumerationError

_original_iterdir = Path.iterdir


def _names(entries: list[Entry], root: Path) -> list[str]:
    """Entries as root-relative POSIX strings."""
    return [e.path.relative_to(root).as_posix() for e in entries]


class TestDepthZero:
    """Tests for listing direct children."""

    def test_lists_directories_only_by_default(self, sample_tree: Path) -> None:
        """Plain files and hidden entries are excluded by default."""
        entries = enumerate_entries(sample_tree)

        assert _names(entries, sample_tree) == ["alpha", "beta", "gamma"]
        assert all(e.is_dir for e in entries)

    def test_include_files(self, sample_tree: Path) -> None:
        """include_files adds plain files, tagged as non-directories."""
        entries = enumerate_entries(sample_tree, include_files=True)

        assert _names(entries, sample_tree) == ["alpha", "beta", "gamma", "notes.txt"]
        notes = entries[-1]
        assert notes.is_dir is False

    def test_include_hidden(self, sample_tree: Path) -> None:
        """include_hidden keeps dot-prefixed entries."""
        entries = enumerate_entries(sample_tree, include_hidden=True)

        assert _names(entries, sample_tree) == [".hidden", "alpha", "beta", "gamma"]

    def test_sorted_regardless_of_listing_order(self, sample_tree: Path) -> None:
        """Results are sorted even when the OS lists children in reverse."""

        def reversed_iterdir(self: Path) -> Iterator[Path]:
            return iter(sorted(_original_iterdir(self), reverse=True))

        with patch.object(Path, "iterdir", autospec=True, side_effect=reversed_iterdir):
            entries = enumerate_entries(sample_tree)

        assert _names(entries, sample_tree) == ["alpha", "beta", "gamma"]

    def test_empty_root(self, tmp_path: Path) -> None:
        """An empty root yields no entries."""
        assert enumerate_entries(tmp_path) == []


class TestRecursion:
    """Tests for depth > 0 flattening."""

    def test_depth_one_flattens_children(self, sample_tree: Path) -> None:
        """Depth 1 lists grandchildren in sorted-parent order."""
        entries = enumerate_entries(sample_tree, 1, include_files=True)

        assert _names(entries, sample_tree) == [
            "alpha/a1.txt",
            "alpha/a2.txt",
            "beta/b1.txt",
            "beta/nested",
        ]

    def test_depth_n_is_preorder_flatten_of_children(
        self,
        tmp_path: Path,
        make_tree: Callable[[Path, dict[str, object]], Path],
    ) -> None:
        """enumerate(root, N) equals the concatenation of enumerate(child, N-1)."""
        root = make_tree(
            tmp_path / "root",
            {
                "b": {"x": {"1": {}, "2": {}}, "y": {"3": {}}},
                "a": {"z": {"4": {}}, "a-b": {"5": {}}},
                "a-c": {"w": {"6": {}}},
            },
        )

        flat = enumerate_entries(root, 2)
        expected: list[Entry] = []
        for child in enumerate_entries(root, 0):
            expected.extend(enumerate_entries(child.path, 1))

        assert flat == expected
        assert _names(flat, root) == [
            "a/a-b/5",
            "a/z/4",
            "a-c/w/6",
            "b/x/1",
            "b/x/2",
            "b/y/3",
        ]

    def test_intermediate_files_are_dropped(self, sample_tree: Path) -> None:
        """Files at intermediate levels are not part of a deep result."""
        entries = enumerate_entries(sample_tree, 1, include_files=True)

        assert "notes.txt" not in _names(entries, sample_tree)

    def test_hidden_directories_not_traversed(self, sample_tree: Path) -> None:
        """Hidden directories are skipped at every level unless requested."""
        hidden_out = enumerate_entries(sample_tree, 1, include_files=True)
        hidden_in = enumerate_entries(sample_tree, 1, include_files=True, include_hidden=True)

        assert ".hidden/h.txt" not in _names(hidden_out, sample_tree)
        assert ".hidden/h.txt" in _names(hidden_in, sample_tree)

    def test_depth_beyond_tree_yields_nothing(self, sample_tree: Path) -> None:
        """Recursing past the leaves produces an empty result."""
        assert enumerate_entries(sample_tree, 5) == []

    def test_enumerate_request(self, sample_tree: Path) -> None:
        """enumerate_request accepts a prepared EnumerationRequest."""
        request = EnumerationRequest(root=sample_tree, max_depth=0, include_files=True)

        assert enumerate_request(request) == enumerate_entries(sample_tree, include_files=True)


class TestFailures:
    """Tests for enumeration failures."""

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root raises EnumerationError."""
        with pytest.raises(EnumerationError, match="does not exist"):
            enumerate_entries(tmp_path / "missing")

    def test_root_is_a_file(self, tmp_path: Path) -> None:
        """A file root raises EnumerationError."""
        target = tmp_path / "file.txt"
        target.write_text("x")

        with pytest.raises(EnumerationError, match="Not a directory"):
            enumerate_entries(target)

    def test_negative_depth(self, tmp_path: Path) -> None:
        """A negative depth is a configuration error."""
        with pytest.raises(ConfigurationError, match="non-negative"):
            enumerate_entries(tmp_path, -1)

    def test_unreadable_child_fails_whole_enumeration(self, sample_tree: Path) -> None:
        """A child that cannot be listed fails the run with no partial result."""
        blocked = sample_tree / "beta"

        def failing_iterdir(self: Path) -> Iterator[Path]:
            if self == blocked:
                raise PermissionError(13, "Permission denied")
            return _original_iterdir(self)

        with (
            patch.object(Path, "iterdir", autospec=True, side_effect=failing_iterdir),
            pytest.raises(EnumerationError, match="Permission denied"),
        ):
            enumerate_entries(sample_tree, 1)


class TestIsHidden:
    """Tests for is_hidden helper."""

    def test_dot_prefix_is_hidden(self) -> None:
        """Names starting with a dot are hidden."""
        assert is_hidden(Path("/data/.git")) is True

    def test_plain_name_is_visible(self) -> None:
        """Other names are visible."""
        assert is_hidden(Path("/data/src.d")) is False
