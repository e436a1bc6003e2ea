"""Configuration loading and schema definitions."""

from launcher.config.loader import (
    ItemsFileError,
    load_config,
    load_config_from_string,
    load_items_file,
)
from launcher.config.schema import Config, ItemConfig, LauncherOptions, Theme

__all__ = [
    "Config",
    "ItemConfig",
    "ItemsFileError",
    "LauncherOptions",
    "Theme",
    "load_config",
    "load_config_from_string",
    "load_items_file",
]
