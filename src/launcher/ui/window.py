"""Launcher popup built with prompt_toolkit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from prompt_toolkit import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import ConditionalContainer, HSplit, Window
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.layout.processors import (
    BeforeInput,
    Processor,
    Transformation,
    TransformationInput,
)
from prompt_toolkit.styles import Style

from launcher.config.loader import load_config
from launcher.core.items import LauncherResult
from launcher.core.session import LauncherSession, SessionState
from launcher.ui.keybindings import KeyBindingManager
from launcher.ui.results import ResultsList, build_style_dict, style_class

if TYPE_CHECKING:
    from prompt_toolkit.input import Input
    from prompt_toolkit.output import Output

    from launcher.config.schema import Config

logger = logging.getLogger(__name__)

MODE = "launcher"


class PlaceholderProcessor(Processor):
    """Show placeholder text while the query is empty."""

    def __init__(self, text: str) -> None:
        self.text = text

    def apply_transformation(self, transformation_input: TransformationInput) -> Transformation:
        if transformation_input.document.text or not self.text:
            return Transformation(transformation_input.fragments)
        return Transformation(
            transformation_input.fragments + [(style_class("ui:placeholder"), self.text)]
        )


class LauncherWindow:
    """Search box with a fuzzy-filtered result list."""

    def __init__(
        self,
        session: LauncherSession,
        config: Config | None = None,
        theme: str | None = None,
    ) -> None:
        """Initialize the window.

        Args:
            session: Session to drive; started here if still idle
            config: Configuration object (loads default if None)
            theme: Theme name to use
        """
        self.config = config or load_config()
        self.options = self.config.launcher
        self.theme = self.config.get_theme(theme)

        self.session = session
        if session.state == SessionState.IDLE:
            session.start()

        self.buffer = Buffer(
            multiline=False,
            name="query",
            on_text_changed=self._on_text_changed,
        )
        self.results = ResultsList(session, self.options, on_click=self._on_click)

        self._kb_manager: KeyBindingManager | None = None

        # Application (created in create_application())
        self.app: Application[LauncherResult] | None = None

    def _on_text_changed(self, buffer: Buffer) -> None:
        if self.session.is_active:
            self.session.set_query(buffer.text)

    def _on_click(self, index: int) -> None:
        """Select and submit a clicked row."""
        if not self.session.is_active:
            return
        self.session.select(index)
        self.session.submit()
        self._exit()

    def _create_keybindings(self) -> KeyBindings:
        self._kb_manager = KeyBindingManager(self.config, self)
        return self._kb_manager.get_bindings(MODE)

    def _create_style(self) -> Style:
        if not self.options.color:
            return Style([])
        return Style.from_dict(build_style_dict(self.theme))

    def _create_layout(self) -> Layout:
        """Create the input line, separator and results list."""
        input_window = Window(
            content=BufferControl(
                buffer=self.buffer,
                input_processors=[
                    BeforeInput(self.options.prompt, style=style_class("ui:prompt")),
                    PlaceholderProcessor(self.options.placeholder),
                ],
            ),
            height=1,
            style=style_class("ui:query"),
        )

        results_window = Window(
            content=FormattedTextControl(
                self.results.get_formatted_text,
                focusable=False,
                show_cursor=False,
            ),
            height=lambda: Dimension.exact(max(self.results.visible_count, 1)),
        )

        has_results = Condition(lambda: bool(self.session.filtered_items))

        body = HSplit(
            [
                input_window,
                ConditionalContainer(
                    HSplit(
                        [
                            Window(height=1, char="─", style=style_class("ui:separator")),
                            results_window,
                        ]
                    ),
                    filter=has_results,
                ),
            ],
            width=Dimension.exact(self.options.width) if self.options.width else None,
        )
        return Layout(body, focused_element=input_window)

    def create_application(
        self,
        input: Input | None = None,
        output: Output | None = None,
    ) -> Application[LauncherResult]:
        """Create the prompt_toolkit application for this window."""
        self.app = Application(
            layout=self._create_layout(),
            key_bindings=self._create_keybindings(),
            style=self._create_style(),
            full_screen=False,
            mouse_support=self.options.mouse_support,
            erase_when_done=True,
            input=input,
            output=output,
        )
        return self.app

    def run(self, input: Input | None = None, output: Output | None = None) -> LauncherResult:
        """Run the window until the session closes.

        Returns:
            The session outcome
        """
        if not self.session.is_active:
            return self.session.result or LauncherResult.dismissed()

        app = self.create_application(input=input, output=output)
        try:
            app.run(pre_run=self._exit_if_closed)
        finally:
            self._finish()
        return self.session.result or LauncherResult.dismissed()

    async def run_async(
        self, input: Input | None = None, output: Output | None = None
    ) -> LauncherResult:
        """Run the window inside an existing event loop."""
        if not self.session.is_active:
            return self.session.result or LauncherResult.dismissed()

        app = self.create_application(input=input, output=output)
        try:
            await app.run_async(pre_run=self._exit_if_closed)
        finally:
            self._finish()
        return self.session.result or LauncherResult.dismissed()

    def close(self) -> None:
        """Dismiss the session and hide the window."""
        if self.session.is_active:
            self.session.dismiss()
        self._exit()

    def _exit(self) -> None:
        if self.app is not None and self.app.is_running and not self.app.is_done:
            self.app.exit(result=self.session.result)

    def _exit_if_closed(self) -> None:
        # close() can land between create_application() and the first frame
        if not self.session.is_active:
            self._exit()

    def _finish(self) -> None:
        # The application can stop without a command (EOF, interrupt)
        if self.session.is_active:
            logger.debug("Application stopped with an open session; dismissing")
            self.session.dismiss()
