"""Configuration and items loading with support for drop-in directories."""

from __future__ import annotations

import json
import logging
import sys
from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

import yaml
from pydantic import ValidationError

from launcher.config.defaults import DEFAULT_CONFIG_YAML
from launcher.config.schema import Config, ItemConfig
from launcher.core.items import Item

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "launcher" / "config.yaml"
DEFAULT_DROPIN_DIR = Path.home() / ".config" / "launcher" / "conf.d"


class ItemsFileError(ValueError):
    """Raised when an items file cannot be read or parsed."""


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif key in result and isinstance(result[key], list) and isinstance(value, list):
            # For lists, extend rather than replace
            result[key] = result[key] + value
        else:
            result[key] = value

    return result


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
        return data if data else {}


def load_dropin_directory(dropin_dir: Path) -> dict[str, Any]:
    """Load and merge all YAML files from drop-in directory."""
    if not dropin_dir.exists():
        return {}

    result: dict[str, Any] = {}
    yaml_files = sorted(dropin_dir.glob("*.yaml")) + sorted(dropin_dir.glob("*.yml"))

    for yaml_file in yaml_files:
        logger.debug("Loading drop-in config %s", yaml_file)
        data = load_yaml_file(yaml_file)
        result = deep_merge(result, data)

    return result


def default_config_data() -> dict[str, Any]:
    """Get the built-in defaults as a dict."""
    return yaml.safe_load(DEFAULT_CONFIG_YAML) or {}


def load_config(
    config_path: Path | str | None = None,
    dropin_dir: Path | str | None = None,
    include_defaults: bool = True,
) -> Config:
    """Load configuration from file and drop-in directory.

    Args:
        config_path: Path to main config file (default: ~/.config/launcher/config.yaml)
        dropin_dir: Path to drop-in directory (default: ~/.config/launcher/conf.d/)
        include_defaults: Merge the built-in defaults beneath the user config

    Returns:
        Merged configuration object
    """
    # Resolve paths
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    elif isinstance(config_path, str):
        config_path = Path(config_path)

    if dropin_dir is None:
        dropin_dir = DEFAULT_DROPIN_DIR
    elif isinstance(dropin_dir, str):
        dropin_dir = Path(dropin_dir)

    merged_data = default_config_data() if include_defaults else {}

    logger.debug("Loading config %s", config_path)
    merged_data = deep_merge(merged_data, load_yaml_file(config_path))
    merged_data = deep_merge(merged_data, load_dropin_directory(dropin_dir))

    config = Config(**merged_data)
    warn_duplicate_ids(config.get_items())
    return config


def load_config_from_string(yaml_string: str, include_defaults: bool = False) -> Config:
    """Load configuration from a YAML string (useful for testing)."""
    data = yaml.safe_load(yaml_string) or {}
    if include_defaults:
        data = deep_merge(default_config_data(), data)
    return Config(**data)


def parse_items(data: Any) -> list[Item]:
    """Parse items from decoded JSON/YAML data.

    Accepts either a list of item mappings or a mapping with an
    ``items`` list. Plain strings are taken as titles.
    """
    if isinstance(data, dict):
        data = data.get("items", [])
    if data is None:
        return []
    if not isinstance(data, list):
        raise ItemsFileError(f"Expected a list of items, got {type(data).__name__}")

    items: list[Item] = []
    for index, entry in enumerate(data):
        if isinstance(entry, str):
            entry = {"title": entry}
        if not isinstance(entry, dict):
            raise ItemsFileError(f"Item {index} must be a mapping or a string")
        try:
            items.append(ItemConfig(**entry).to_item())
        except ValidationError as e:
            raise ItemsFileError(f"Invalid item {index}: {e}") from e

    return items


def load_items_text(text: str, fmt: str | None = None) -> list[Item]:
    """Parse items from JSON or YAML text.

    Args:
        text: File contents
        fmt: "json", "yaml", or None to try JSON first then YAML
    """
    if not text.strip():
        return []

    try:
        if fmt == "json":
            data = json.loads(text)
        elif fmt == "yaml":
            data = yaml.safe_load(text)
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError:
                data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ItemsFileError(f"Could not parse items: {e}") from e

    return parse_items(data)


def load_items_file(path: Path | str, stdin: TextIO | None = None) -> list[Item]:
    """Load items from a JSON or YAML file, or stdin when path is "-"."""
    if str(path) == "-":
        return load_items_text((stdin or sys.stdin).read())

    path = Path(path)
    if not path.exists():
        raise ItemsFileError(f"No items file found at {path}")

    suffix = path.suffix.lower()
    fmt = "json" if suffix == ".json" else "yaml" if suffix in (".yaml", ".yml") else None
    logger.debug("Loading items from %s", path)
    items = load_items_text(path.read_text(encoding="utf-8"), fmt)
    warn_duplicate_ids(items)
    return items


def warn_duplicate_ids(items: Iterable[Item]) -> list[str]:
    """Log a warning for item ids that appear more than once.

    Duplicates are still offered as distinct rows.

    Returns:
        Sorted list of duplicated ids
    """
    counts = Counter(item.id for item in items)
    duplicates = sorted(item_id for item_id, count in counts.items() if count > 1)
    for item_id in duplicates:
        logger.warning("Duplicate item id %r (%d occurrences)", item_id, counts[item_id])
    return duplicates
