"""Keyboard-driven popup launcher with fuzzy-filtered results."""

from launcher.api import Launcher, show
from launcher.core.items import Item, LauncherAction, LauncherResult
from launcher.core.matcher import filter_and_rank, fuzzy_match, move_selection, submit
from launcher.core.session import LauncherSession

__version__ = "0.1.0"

__all__ = [
    "Item",
    "Launcher",
    "LauncherAction",
    "LauncherResult",
    "LauncherSession",
    "filter_and_rank",
    "fuzzy_match",
    "move_selection",
    "show",
    "submit",
]
