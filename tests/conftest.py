"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user settings never leak in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def make_tree() -> Callable[[Path, dict[str, object]], Path]:
    """Build a directory tree from a nested dict.

    Keys are names; a dict value is a directory, a str or bytes value is
    file content.
    """

    def _make(root: Path, layout: dict[str, object]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for name, content in layout.items():
            path = root / name
            if isinstance(content, dict):
                _make(path, content)
            elif isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(str(content))
        return root

    return _make


@pytest.fixture
def sample_tree(tmp_path: Path, make_tree: Callable[[Path, dict[str, object]], Path]) -> Path:
    """A small input tree with directories, files and a hidden entry."""
    return make_tree(
        tmp_path / "input",
        {
            "beta": {"b1.txt": "b1", "nested": {"deep.txt": "deep"}},
            "alpha": {"a1.txt": "a1", "a2.txt": "a2"},
            "gamma": {},
            ".hidden": {"h.txt": "h"},
            "notes.txt": "notes",
        },
    )
