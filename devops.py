"""Development tasks for dirbatch.

Usage: python devops.py {fmt,lint,test,clean}
"""

import shutil
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def _sh(*args: str) -> None:
    """Run one command from the project root, exiting with its status on failure."""
    completed = subprocess.run(args, cwd=ROOT)  # nosec: B603
    if completed.returncode != 0:
        print(f"{' '.join(args)} exited with {completed.returncode}", file=sys.stderr)
        sys.exit(completed.returncode)


def fmt() -> None:
    """Format sources and apply safe lint fixes."""
    _sh("ruff", "format", "app", "tests", "devops.py")
    _sh("ruff", "check", "--fix", "app", "tests", "devops.py")


def lint() -> None:
    """Check formatting and lint rules without changing files."""
    _sh("ruff", "format", "--check", "app", "tests", "devops.py")
    _sh("ruff", "check", "app", "tests", "devops.py")


def test() -> None:
    """Run the unit tests."""
    _sh(sys.executable, "-m", "pytest", "-q")


def clean() -> None:
    """Delete caches and build output."""
    for pattern in ("**/__pycache__", "**/*.egg-info", ".pytest_cache", ".ruff_cache"):
        for path in ROOT.glob(pattern):
            shutil.rmtree(path, ignore_errors=True)
    for name in ("build", "dist"):
        shutil.rmtree(ROOT / name, ignore_errors=True)


TASKS = {"fmt": fmt, "lint": lint, "test": test, "clean": clean}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()
