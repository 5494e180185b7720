"""Console colors for the dirbatch tools.

Colors come from the bundled data/theme.toml; any subset of them can be
overridden in ~/.config/dirbatch/theme.toml. A broken override is
reported and ignored, it never stops a run.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from dirbatch.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


class ThemeColors(BaseModel):
    """Named colors used by console output.

    All values are hex codes (#RGB or #RRGGBB).
    """

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Plan listing
    source: str = "#c1ff62"
    destination: str = "#0e8ac8"
    removed: str = "#f53263"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        """Accept only hex color strings."""
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            msg = f"expected a #RGB or #RRGGBB color, got {value!r}"
            raise ValueError(msg)
        return value.strip()


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped with the package."""
    return Path(str(resources.files("dirbatch.data").joinpath("theme.toml")))


def read_colors(path: Path) -> dict[str, str]:
    """Read the [colors] table of a theme file.

    Non-string values are dropped.

    Args:
        path: Theme TOML file.

    Returns:
        Mapping of color name to value; empty if the file is missing.

    Raises:
        ValueError: If the file is not valid TOML or [colors] is not a table.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as e:
        msg = f"invalid TOML in {path}: {e}"
        raise ValueError(msg) from e

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        msg = f"[colors] in {path} must be a table"
        raise ValueError(msg)
    return {k: v for k, v in colors.items() if isinstance(v, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Load bundled colors merged with the user's overrides.

    Args:
        user_path: Override file; defaults to ~/.config/dirbatch/theme.toml.

    Returns:
        Validated ThemeColors. Falls back to the bundled colors when the
        override is unreadable or invalid.
    """
    bundled = read_colors(get_bundled_theme_path())
    path = user_path or get_user_theme_path()

    try:
        overrides = read_colors(path)
        return ThemeColors(**{**bundled, **overrides})
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("Ignoring theme overrides from %s: %s", path, e)
        return ThemeColors(**bundled)


def build_rich_theme(colors: ThemeColors) -> Theme:
    """Map theme colors onto rich style names."""
    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "dim": colors.muted,
            "header": colors.header,
            "bold_header": f"bold {colors.header}",
            "border": colors.border,
            "success": colors.success,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "info": colors.info,
            "source": colors.source,
            "destination": colors.destination,
            "removed": colors.removed,
            "progress.description": colors.info,
        }
    )


@cache
def get_theme() -> Theme:
    """Rich theme for the process, loaded once."""
    return build_rich_theme(load_theme())
