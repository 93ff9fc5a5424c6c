"""nmsweep configuration and settings.

This module provides the configuration model and loader. Every value
has a default, so the configuration file is optional; command-line
options override whatever the file sets.

Configuration is stored in ~/.config/nmsweep/config.toml
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nmsweep.cleaner.pool import DEFAULT_CONCURRENCY
from nmsweep.core.paths import get_config_path
from nmsweep.core.theme import ThemeColors
from nmsweep.discovery.scanner import DEFAULT_CACHE_DIR_NAME, DEFAULT_DEPTH, DEFAULT_MANIFEST_NAME

logger = logging.getLogger(__name__)


class SweepConfig(BaseModel):
    """Configuration for discovery and cleanup.

    Attributes:
        depth: How deep to search for projects.
        concurrency: Maximum number of deletions in flight.
        manifest_name: File name that marks a project directory.
        cache_dir_name: Name of the dependency cache directory to remove.
        colors: Terminal color theme.
    """

    model_config = ConfigDict(extra="forbid")

    depth: Annotated[
        int,
        Field(ge=0, description="How deep to search for projects"),
    ] = DEFAULT_DEPTH
    concurrency: Annotated[
        int,
        Field(ge=1, le=64, description="Maximum deletions in flight (1-64)"),
    ] = DEFAULT_CONCURRENCY
    manifest_name: Annotated[
        str,
        Field(min_length=1, description="Project manifest file name"),
    ] = DEFAULT_MANIFEST_NAME
    cache_dir_name: Annotated[
        str,
        Field(min_length=1, description="Dependency cache directory name"),
    ] = DEFAULT_CACHE_DIR_NAME
    colors: ThemeColors = Field(default_factory=ThemeColors)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> SweepConfig:
    """Load configuration from a TOML file.

    A missing default config file yields the defaults. A missing file
    given explicitly is an error.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated SweepConfig object.

    Raises:
        ConfigError: If an explicit file is missing, unreadable, or its
            content doesn't match the schema.
        ConfigParseError: If the TOML syntax is invalid.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return SweepConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        config = SweepConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config
