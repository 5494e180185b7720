"""CLI package for dirbatch.

This package contains the Typer applications for the umbrella command
and the standalone zipdirs, unzipdirs and deldirs tools.
"""

from dirbatch.cli.main import app

__all__ = ["app"]
