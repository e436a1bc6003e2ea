"""Entry points for showing the launcher from Python code."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from launcher.config.loader import load_config
from launcher.core.items import Item, LauncherResult
from launcher.core.session import LauncherSession, SessionStateError
from launcher.ui.window import LauncherWindow

if TYPE_CHECKING:
    from prompt_toolkit.input import Input
    from prompt_toolkit.output import Output

    from launcher.config.schema import Config

logger = logging.getLogger(__name__)


class Launcher:
    """Shows launcher sessions, one at a time.

    Each show creates a fresh LauncherSession and LauncherWindow; the
    outcome is returned (or awaited) and also delivered to an optional
    callback.
    """

    def __init__(self, config: Config | None = None, theme: str | None = None) -> None:
        """Initialize launcher.

        Args:
            config: Configuration object (loaded lazily if None)
            theme: Theme name to use
        """
        self._config = config
        self.theme = theme
        self._window: LauncherWindow | None = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = load_config()
        return self._config

    @property
    def is_visible(self) -> bool:
        """Check if a session is currently showing."""
        return self._window is not None and self._window.session.is_active

    @property
    def current_session(self) -> LauncherSession | None:
        return self._window.session if self._window is not None else None

    def _prepare(
        self,
        placeholder: str | None,
        items: Iterable[Item] | None,
        config: Config | None,
        callback: Callable[[LauncherResult], None] | None,
    ) -> LauncherWindow:
        if self.is_visible:
            raise SessionStateError("A launcher session is already showing")

        config = (config or self.config).model_copy(deep=True)
        if placeholder is not None:
            config.launcher.placeholder = placeholder

        session = LauncherSession(config.get_items() if items is None else items)
        if callback is not None:
            session.add_done_callback(callback)

        window = LauncherWindow(session, config, self.theme)
        self._window = window
        return window

    async def show_async(
        self,
        placeholder: str | None = None,
        items: Iterable[Item] | None = None,
        config: Config | None = None,
        callback: Callable[[LauncherResult], None] | None = None,
        input: Input | None = None,
        output: Output | None = None,
    ) -> LauncherResult:
        """Show the launcher and wait for its outcome.

        Args:
            placeholder: Placeholder text (overrides the config)
            items: Items to offer (defaults to configured items)
            config: Configuration for this show only
            callback: Called with the outcome when the session closes
            input: prompt_toolkit input (defaults to the terminal)
            output: prompt_toolkit output (defaults to the terminal)

        Returns:
            The session outcome
        """
        window = self._prepare(placeholder, items, config, callback)
        return await self._run(window, input, output)

    async def _run(
        self, window: LauncherWindow, input: Input | None, output: Output | None
    ) -> LauncherResult:
        try:
            result = await window.run_async(input=input, output=output)
        finally:
            if self._window is window:
                self._window = None
        logger.debug("Launcher closed: %s", result.action.value)
        return result

    def start(
        self,
        placeholder: str | None = None,
        items: Iterable[Item] | None = None,
        config: Config | None = None,
        callback: Callable[[LauncherResult], None] | None = None,
        input: Input | None = None,
        output: Output | None = None,
    ) -> asyncio.Task[LauncherResult]:
        """Start a session without waiting for it.

        Must be called from a running event loop. The session is visible
        as soon as this returns, so hide() can dismiss it at once. The
        outcome is delivered to callback and is also the result of the
        returned task.
        """
        loop = asyncio.get_running_loop()
        window = self._prepare(placeholder, items, config, callback)
        return loop.create_task(self._run(window, input, output))

    def show(
        self,
        placeholder: str | None = None,
        items: Iterable[Item] | None = None,
        config: Config | None = None,
        callback: Callable[[LauncherResult], None] | None = None,
        input: Input | None = None,
        output: Output | None = None,
    ) -> LauncherResult:
        """Show the launcher and block until it closes."""
        return asyncio.run(
            self.show_async(placeholder, items, config, callback, input=input, output=output)
        )

    def hide(self) -> None:
        """Dismiss the showing session, if any."""
        if self._window is not None:
            self._window.close()


def show(
    placeholder: str | None = None,
    items: Iterable[Item] | None = None,
    config: Config | None = None,
) -> LauncherResult:
    """Show a launcher once and return its outcome."""
    return Launcher(config).show(placeholder, items)
