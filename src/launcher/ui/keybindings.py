"""Key bindings for the launcher window, built from configuration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys

from launcher.ui.commands import commands, parse_command_string

if TYPE_CHECKING:
    from prompt_toolkit.key_binding import KeyPressEvent

    from launcher.config.schema import Config
    from launcher.ui.window import LauncherWindow

logger = logging.getLogger(__name__)

KeySpec = str | Keys | tuple[str | Keys, ...]

# Named keys; ctrl-/alt- letters and function keys are derived in parse_key_spec
KEY_MAPPING: dict[str, KeySpec] = {
    "enter": Keys.ControlM,
    "return": Keys.ControlM,
    "alt-enter": (Keys.Escape, Keys.ControlM),
    "alt-return": (Keys.Escape, Keys.ControlM),
    "escape": Keys.Escape,
    "esc": Keys.Escape,
    "tab": Keys.ControlI,
    "shift-tab": Keys.BackTab,
    "up": Keys.Up,
    "down": Keys.Down,
    "pageup": Keys.PageUp,
    "pagedown": Keys.PageDown,
    "home": Keys.Home,
    "end": Keys.End,
    "space": " ",
    "ctrl-space": Keys.ControlSpace,
}


def parse_key_spec(key_spec: str) -> KeySpec | None:
    """Translate a configured key name such as "ctrl-n" or "alt-enter".

    Args:
        key_spec: Key name from the keybindings section

    Returns:
        A prompt_toolkit key or key sequence, or None if not recognized
    """
    name = key_spec.strip().lower()
    if name in KEY_MAPPING:
        return KEY_MAPPING[name]

    if len(key_spec) == 1:
        return key_spec

    modifier, _, rest = name.partition("-")
    if modifier == "ctrl" and len(rest) == 1 and rest.isalpha():
        return Keys[f"Control{rest.upper()}"]
    if modifier == "alt" and len(rest) == 1:
        # Keep the case of the character: alt-B differs from alt-b
        return (Keys.Escape, key_spec.strip()[-1])

    if name.startswith("f") and name[1:].isdigit() and 1 <= int(name[1:]) <= 24:
        return Keys[f"F{int(name[1:])}"]

    return None


class KeyBindingManager:
    """Builds prompt_toolkit key bindings that run launcher commands.

    One KeyBindings object is built per mode in the keybindings section;
    the window uses the "launcher" mode.
    """

    def __init__(self, config: Config, window: LauncherWindow) -> None:
        """Initialize key binding manager.

        Args:
            config: Configuration with keybindings and aliases
            window: The launcher window commands act on
        """
        self.config = config
        self.window = window
        self._bindings = {
            mode: self._build(keymap) for mode, keymap in config.keybindings.items()
        }

    def get_bindings(self, mode: str) -> KeyBindings:
        """Get the bindings for a mode; unknown modes have none."""
        if mode not in self._bindings:
            return KeyBindings()
        return self._bindings[mode]

    def resolve_command(self, command_str: str) -> tuple[str, list[str]]:
        """Split a bound command into name and arguments, expanding aliases.

        With the alias ``next: select-next``, ``"next 2"`` resolves to
        ``("select-next", ["2"])``.
        """
        name, args = parse_command_string(command_str)
        alias = self.config.aliases.get(name)
        if alias is None:
            return name, args

        alias_name, alias_args = parse_command_string(alias)
        return alias_name, alias_args + args

    def _build(self, keymap: dict[str, str]) -> KeyBindings:
        kb = KeyBindings()
        for key_spec, command_str in keymap.items():
            key = parse_key_spec(key_spec)
            if key is None:
                logger.warning("Ignoring unknown key %r", key_spec)
                continue

            keys = key if isinstance(key, tuple) else (key,)
            kb.add(*keys)(self._make_handler(*self.resolve_command(command_str)))
        return kb

    def _make_handler(self, name: str, args: list[str]) -> Callable[[KeyPressEvent], None]:
        def handler(event: KeyPressEvent) -> None:
            result = commands.execute(name, self.window, args)
            if not result.success:
                logger.debug("Command %s failed: %s", name, result.message)
            # Keys typed ahead can arrive after the app was told to exit
            if result.close_launcher and not event.app.is_done:
                event.app.exit(result=self.window.session.result)

        return handler
