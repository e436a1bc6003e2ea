"""Bindable commands for the launcher window."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prompt_toolkit.document import Document

from launcher.core.items import LauncherAction
from launcher.core.session import SessionStateError

if TYPE_CHECKING:
    from launcher.ui.window import LauncherWindow

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of running a command from a key binding."""

    success: bool = True
    message: str = ""
    close_launcher: bool = False


# Called as command(window, args)
Command = Callable[..., CommandResult]


def _abbreviates(abbrev: str, name: str) -> bool:
    """Check whether each dash-part of abbrev starts the matching part of name."""
    abbrev_parts = abbrev.split("-")
    name_parts = name.split("-")
    return len(abbrev_parts) <= len(name_parts) and all(
        part.startswith(prefix) for prefix, part in zip(abbrev_parts, name_parts)
    )


class CommandRegistry:
    """Named commands that key bindings can run.

    Names may be abbreviated part by part: "s-n" finds "select-next" and
    "d" finds "dismiss". An abbreviation that fits several names is an
    error rather than a guess.
    """

    def __init__(self) -> None:
        self._registry: dict[str, Command] = {}

    def register(self, name: str) -> Callable[[Command], Command]:
        """Register the decorated function under name."""

        def add(func: Command) -> Command:
            self._registry[name] = func
            return func

        return add

    def get(self, name: str) -> Command | None:
        """Look up a command by full name or abbreviation.

        Raises:
            ValueError: If the abbreviation is ambiguous
        """
        if name in self._registry:
            return self._registry[name]

        candidates = sorted(full for full in self._registry if _abbreviates(name, full))
        if len(candidates) > 1:
            raise ValueError(f"Ambiguous command {name!r}: could be {', '.join(candidates)}")
        return self._registry[candidates[0]] if candidates else None

    def list_commands(self) -> list[str]:
        return sorted(self._registry)

    def execute(
        self, name: str, window: LauncherWindow, args: list[str] | None = None
    ) -> CommandResult:
        """Run a command, reporting failures in the result instead of raising."""
        try:
            command = self.get(name)
        except ValueError as e:
            return CommandResult(success=False, message=str(e))

        if command is None:
            return CommandResult(success=False, message=f"Unknown command: {name}")

        try:
            return command(window, list(args or []))
        except (ValueError, SessionStateError) as e:
            logger.warning("Command %s failed: %s", name, e)
            return CommandResult(success=False, message=str(e))


commands = CommandRegistry()


def parse_command_string(cmd_string: str) -> tuple[str, list[str]]:
    """Split "select-next 3" into ("select-next", ["3"])."""
    name, *args = shlex.split(cmd_string) or [""]
    return name, args


def _step(args: list[str]) -> int:
    """Get the optional step count argument."""
    return int(args[0]) if args else 1


# Selection commands

@commands.register("select-next")
def select_next(window: LauncherWindow, args: list[str]) -> CommandResult:
    """Move the selection down, wrapping to the top."""
    window.session.move_selection(_step(args))
    return CommandResult()


@commands.register("select-previous")
def select_previous(window: LauncherWindow, args: list[str]) -> CommandResult:
    """Move the selection up, wrapping to the bottom."""
    window.session.move_selection(-_step(args))
    return CommandResult()


@commands.register("select-first")
def select_first(window: LauncherWindow, args: list[str]) -> CommandResult:
    """Select the first result."""
    window.session.select(0)
    return CommandResult()


@commands.register("select-last")
def select_last(window: LauncherWindow, args: list[str]) -> CommandResult:
    """Select the last result."""
    window.session.select(len(window.session.filtered_items) - 1)
    return CommandResult()


# Query commands

@commands.register("clear-query")
def clear_query(window: LauncherWindow, args: list[str]) -> CommandResult:
    """Clear the search box."""
    window.buffer.document = Document("")
    return CommandResult()


# Closing commands

def _submit(window: LauncherWindow, action: LauncherAction) -> CommandResult:
    result = window.session.submit(action)
    return CommandResult(close_launcher=True, message=result.action.value)


@commands.register("submit")
def submit(window: LauncherWindow, args: list[str]) -> CommandResult:
    """Submit the selected item or typed query."""
    return _submit(window, LauncherAction.SUBMITTED)


@commands.register("submit-command")
def submit_command(window: LauncherWindow, args: list[str]) -> CommandResult:
    """Submit with the command modifier."""
    return _submit(window, LauncherAction.COMMAND)


@commands.register("submit-option")
def submit_option(window: LauncherWindow, args: list[str]) -> CommandResult:
    """Submit with the option modifier."""
    return _submit(window, LauncherAction.OPTION)


@commands.register("dismiss")
def dismiss(window: LauncherWindow, args: list[str]) -> CommandResult:
    """Close the launcher without a result."""
    window.session.dismiss()
    return CommandResult(close_launcher=True, message="dismissed")
