"""Theme management for nmsweep CLI.

Colors come from the ``[colors]`` table of the configuration file and
are turned into a Rich theme shared by every console.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme


class ThemeColors(BaseModel):
    """Color configuration for nmsweep CLI.

    All colors must be valid hex codes (#RRGGBB or #RGB).
    """

    model_config = ConfigDict(extra="forbid")

    success: str = "#03b971"
    error: str = "#f53263"
    warning: str = "#f5b332"
    info: str = "#0ec1c8"
    muted: str = "#b2bec3"
    spinner: str = "#69B9A1"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Validate that all color values are valid hex codes."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        color_part = color[1:]
        if len(color_part) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        try:
            int(color_part, 16)
        except ValueError:
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg) from None
        return color


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Convert ThemeColors to a Rich Theme.

    Args:
        colors: ThemeColors instance to convert. Defaults are used if None.

    Returns:
        Rich Theme instance configured with the color scheme.
    """
    if colors is None:
        colors = ThemeColors()

    styles: dict[str, str] = {
        "success": colors.success,
        "error": f"bold {colors.error}",
        "warning": colors.warning,
        "info": colors.info,
        "muted": colors.muted,
        "dim": colors.muted,
        "progress.spinner": colors.spinner,
        "project.path": "bold",
    }

    return Theme(styles)
