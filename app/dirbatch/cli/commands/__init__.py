"""CLI commands for dirbatch.

This package contains all subcommand implementations.
"""

from dirbatch.cli.commands import config, deldirs, unzipdirs, zipdirs

__all__ = ["config", "deldirs", "unzipdirs", "zipdirs"]
