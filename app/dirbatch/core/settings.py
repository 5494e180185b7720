"""Persistent run defaults.

Stores defaults for the worker count, compression level and error
policy in ~/.config/dirbatch/config.toml. The file is optional;
command-line flags always take precedence over it.

Example config.toml::

    jobs = 4
    level = 6
    error = "continue"
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dirbatch.batch.models import ErrorPolicy
from dirbatch.core.errors import ConfigurationError
from dirbatch.core.paths import get_settings_path

logger = logging.getLogger(__name__)


class BatchSettings(BaseModel):
    """Defaults applied to every run.

    Attributes:
        jobs: Worker count; 0 or less means auto-detect.
        level: Compression level 0-9 (None = zlib default).
        error: Error policy ("break" or "continue").
    """

    model_config = ConfigDict(extra="forbid")

    jobs: Annotated[
        int,
        Field(description="Worker count (<= 0 = auto-detect)"),
    ] = 0
    level: Annotated[
        int | None,
        Field(ge=0, le=9, description="Compression level (0-9)"),
    ] = None
    error: Annotated[
        ErrorPolicy,
        Field(description="Error policy"),
    ] = ErrorPolicy.BREAK


def load_settings(path: Path | None = None) -> BatchSettings:
    """Load run defaults from a TOML file.

    A missing file yields the built-in defaults.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated BatchSettings object.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return BatchSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read settings {settings_path}: {e}") from e

    try:
        return BatchSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: BatchSettings, path: Path | None = None) -> Path:
    """Save run defaults to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: Settings to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data: dict[str, object] = {"jobs": settings.jobs, "error": settings.error.value}
    if settings.level is not None:
        data["level"] = settings.level

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigurationError(f"Failed to write settings {settings_path}: {e}") from e

    return settings_path
