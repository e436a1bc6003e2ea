"""Core functionality: items, fuzzy ranking, sessions and colors."""

from launcher.core.color import ColorParser, ParsedColor, parse_color
from launcher.core.items import Item, LauncherAction, LauncherResult
from launcher.core.matcher import (
    MatchScore,
    filter_and_rank,
    fuzzy_match,
    move_selection,
    score_item,
    submit,
)
from launcher.core.session import LauncherSession, SessionState, SessionStateError

__all__ = [
    "Item",
    "LauncherAction",
    "LauncherResult",
    "MatchScore",
    "fuzzy_match",
    "score_item",
    "filter_and_rank",
    "move_selection",
    "submit",
    "LauncherSession",
    "SessionState",
    "SessionStateError",
    "ColorParser",
    "ParsedColor",
    "parse_color",
]
