"""Rendering of the launcher result rows."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.mouse_events import MouseEvent, MouseEventType

from launcher.core.color import ColorParser

if TYPE_CHECKING:
    from launcher.config.schema import LauncherOptions, Theme
    from launcher.core.items import Item
    from launcher.core.session import LauncherSession


def style_class(name: str) -> str:
    """Convert a ui element name ("ui:selected") to a style class."""
    class_name = name.lower().replace(":", "-").replace(" ", "-")
    return f"class:{class_name}"


def build_style_dict(theme: Theme) -> dict[str, str]:
    """Build a prompt_toolkit style dictionary from a theme."""
    parser = ColorParser()
    styles: dict[str, str] = {}

    for name, color_spec in theme.styles.items():
        # Style.from_dict keys are class names without the "class:" prefix
        key = style_class(name)[len("class:"):]
        styles[key] = parser.parse(color_spec).to_prompt_toolkit_style()

    return styles


class ResultsList:
    """Formatted text for the visible slice of the filtered items."""

    def __init__(
        self,
        session: LauncherSession,
        options: LauncherOptions,
        on_click: Callable[[int], None] | None = None,
    ) -> None:
        """Initialize results list.

        Args:
            session: Session providing filtered items and selection
            options: Launcher options (icons, row count, width)
            on_click: Called with the filtered index of a clicked row
        """
        self.session = session
        self.options = options
        self.on_click = on_click

    @property
    def visible_count(self) -> int:
        """Number of rows currently displayed."""
        start, stop = self.session.visible_window(self.options.max_visible_items)
        return stop - start

    def get_formatted_text(self) -> StyleAndTextTuples:
        """Get styled text for all visible rows."""
        fragments: StyleAndTextTuples = []
        start, stop = self.session.visible_window(self.options.max_visible_items)

        for index in range(start, stop):
            if index > start:
                fragments.append(("", "\n"))
            item = self.session.filtered_items[index]
            fragments.extend(self._render_row(index, item, index == self.session.selected_index))

        return fragments

    def _render_row(self, index: int, item: Item, selected: bool) -> StyleAndTextTuples:
        """Render a single row as icon, title and subtitle."""
        handler = self._make_mouse_handler(index)
        row_style = style_class("ui:selected") if selected else ""
        subtitle_style = style_class("ui:selected-subtitle" if selected else "ui:subtitle")

        fragments: StyleAndTextTuples = [(row_style, " ", handler)]

        if self.options.show_icons:
            icon = item.icon or self.options.fallback_icon
            icon_style = row_style or style_class("ui:icon")
            fragments.append((icon_style, f"{icon} ", handler))

        fragments.append((row_style or style_class("ui:title"), item.title, handler))

        if item.subtitle:
            fragments.append((subtitle_style, f"  {item.subtitle}", handler))

        if selected and self.options.width:
            used = sum(len(text) for _style, text, *_rest in fragments)
            padding = self.options.width - used
            if padding > 0:
                fragments.append((row_style, " " * padding, handler))

        return fragments

    def _make_mouse_handler(self, index: int) -> Callable[[MouseEvent], object]:
        def handler(mouse_event: MouseEvent) -> object:
            if mouse_event.event_type == MouseEventType.MOUSE_UP and self.on_click:
                self.on_click(index)
                return None
            return NotImplemented

        return handler
