"""Locations of dirbatch's user files.

Everything lives in one XDG config directory, ``$XDG_CONFIG_HOME/dirbatch``
or ``~/.config/dirbatch`` when the variable is unset or empty.
"""

import os
from pathlib import Path

APP_NAME = "dirbatch"

SETTINGS_FILE = "config.toml"
THEME_FILE = "theme.toml"


def get_config_dir() -> Path:
    """Return the dirbatch config directory (not created)."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / APP_NAME


def get_settings_path() -> Path:
    """Return the path of the run-defaults file."""
    return get_config_dir() / SETTINGS_FILE


def get_user_theme_path() -> Path:
    """Return the path of the user's theme overrides."""
    return get_config_dir() / THEME_FILE
