"""Pytest configuration and fixtures."""

import pytest

from launcher.config.loader import load_config_from_string
from launcher.config.schema import Config
from launcher.core.items import Item


@pytest.fixture
def sample_items() -> list[Item]:
    """Items used across ranking and session tests."""
    return [
        Item(id="a", title="Alpha"),
        Item(id="b", title="Beta"),
        Item(id="c", title="Gamma Alpha"),
    ]


@pytest.fixture
def server_items() -> list[Item]:
    """Items with subtitles and icons."""
    return [
        Item(id="prod", title="Production", subtitle="eu-west-1", icon="🚀"),
        Item(id="stage", title="Staging", subtitle="eu-west-2"),
        Item(id="dev", title="Development", subtitle="localhost", icon="🛠"),
        Item(id="docs", title="Docs", subtitle="internal wiki"),
    ]


@pytest.fixture
def sample_config() -> Config:
    """Sample configuration for testing, on top of the defaults."""
    yaml_content = """
launcher:
  placeholder: "Switch server..."
  max_visible_items: 3

items:
  - id: prod
    title: Production
    subtitle: eu-west-1
  - id: stage
    title: Staging

themes:
  dark:
    styles:
      "ui:selected": "bold white on magenta"

keybindings:
  launcher:
    ctrl-x: submit-command
    ctrl-j: next

aliases:
  q: dismiss
"""
    return load_config_from_string(yaml_content, include_defaults=True)


@pytest.fixture
def empty_config() -> Config:
    """Empty configuration for testing."""
    return Config()
