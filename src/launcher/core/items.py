"""Launcher items and session outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Item:
    """A single entry in the launcher results.

    Attributes:
        id: Unique identifier supplied by the caller
        title: Display string, used for matching
        subtitle: Optional secondary string, also used for matching
        icon: Optional display hint (emoji or symbol name)
    """

    id: str
    title: str
    subtitle: str | None = None
    icon: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict, omitting unset optional fields."""
        data: dict[str, Any] = {"id": self.id, "title": self.title}
        if self.subtitle is not None:
            data["subtitle"] = self.subtitle
        if self.icon is not None:
            data["icon"] = self.icon
        return data


class LauncherAction(str, Enum):
    """How a launcher session ended."""

    DISMISSED = "dismissed"
    SUBMITTED = "submitted"  # Return: selected item or typed query
    COMMAND = "command"  # Command-qualified submit
    OPTION = "option"  # Option-qualified submit

    @property
    def code(self) -> int:
        """Integer code used by native callers."""
        return _ACTION_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> LauncherAction:
        """Map an integer code back to an action, defaulting to dismissed."""
        for action, action_code in _ACTION_CODES.items():
            if action_code == code:
                return action
        return cls.DISMISSED


_ACTION_CODES = {
    LauncherAction.DISMISSED: 0,
    LauncherAction.SUBMITTED: 1,
    LauncherAction.COMMAND: 2,
    LauncherAction.OPTION: 3,
}


@dataclass(frozen=True)
class LauncherResult:
    """Terminal outcome of a launcher session."""

    action: LauncherAction
    query: str | None = None
    selected_item: Item | None = None

    @classmethod
    def dismissed(cls) -> LauncherResult:
        return cls(action=LauncherAction.DISMISSED)

    @property
    def is_dismissed(self) -> bool:
        return self.action == LauncherAction.DISMISSED

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "action": self.action.value,
            "query": self.query,
            "selected_item": self.selected_item.to_dict() if self.selected_item else None,
        }

    def to_lines(self) -> list[str]:
        """Render as simple `key: value` lines for shell parsing."""
        lines = [
            f"action: {self.action.value}",
            f"query: {self.query if self.query is not None else '(none)'}",
        ]
        if self.selected_item is not None:
            lines.append(f"id: {self.selected_item.id}")
        return lines
