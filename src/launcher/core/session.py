"""Per-show launcher session holding query and selection state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum, auto

from launcher.core.items import Item, LauncherAction, LauncherResult
from launcher.core.matcher import filter_and_rank, move_selection, submit

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle state of a session."""

    IDLE = auto()
    ACTIVE = auto()
    CLOSED = auto()


class SessionStateError(RuntimeError):
    """Raised when a session is driven outside its active state."""


class LauncherSession:
    """Query text, filtered items and selection cursor for one show.

    A session moves IDLE -> ACTIVE -> CLOSED. While active, every query
    change recomputes the filtered items and resets the cursor; cursor
    moves leave the filtered items alone. Closing records exactly one
    LauncherResult.
    """

    def __init__(self, items: Iterable[Item] = ()) -> None:
        """Initialize session.

        Args:
            items: Candidate items; the session keeps its own copy
        """
        self.items: list[Item] = list(items)
        self.state = SessionState.IDLE
        self.query_text = ""
        self.filtered_items: list[Item] = []
        self.selected_index = -1
        self.result: LauncherResult | None = None
        self._callbacks: list[Callable[[LauncherResult], None]] = []

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    @property
    def is_closed(self) -> bool:
        return self.state == SessionState.CLOSED

    @property
    def selected_item(self) -> Item | None:
        """Get the item under the cursor, if any."""
        if 0 <= self.selected_index < len(self.filtered_items):
            return self.filtered_items[self.selected_index]
        return None

    def start(self) -> None:
        """Activate the session with an empty query."""
        if self.state != SessionState.IDLE:
            raise SessionStateError(f"Cannot start a session in state {self.state.name}")

        self.state = SessionState.ACTIVE
        logger.debug("Session started with %d item(s)", len(self.items))
        self._refilter("")

    def set_query(self, text: str) -> None:
        """Replace the query text and recompute the filtered items."""
        self._require_active("set_query")
        self._refilter(text)

    def move_selection(self, delta: int) -> None:
        """Move the cursor by delta, wrapping at both ends."""
        self._require_active("move_selection")
        if not self.filtered_items:
            return
        self.selected_index = move_selection(self.selected_index, delta, len(self.filtered_items))

    def select(self, index: int) -> None:
        """Put the cursor on a specific row (pointer selection)."""
        self._require_active("select")
        if 0 <= index < len(self.filtered_items):
            self.selected_index = index

    def submit(self, action: LauncherAction = LauncherAction.SUBMITTED) -> LauncherResult:
        """Close the session with the selected item or typed query."""
        if self.result is not None:
            return self.result
        self._require_active("submit")

        outcome = submit(self.filtered_items, self.selected_index, self.query_text, action)
        return self._close(outcome)

    def dismiss(self) -> LauncherResult:
        """Close the session without a selection."""
        if self.result is not None:
            return self.result
        self._require_active("dismiss")
        return self._close(LauncherResult.dismissed())

    def add_done_callback(self, callback: Callable[[LauncherResult], None]) -> None:
        """Register a callback for the session outcome.

        Callbacks registered after the session closed are called at once.
        """
        if self.result is not None:
            callback(self.result)
            return
        self._callbacks.append(callback)

    def visible_window(self, max_visible: int) -> tuple[int, int]:
        """Get the slice of filtered items to display.

        The window holds at most max_visible rows and always contains the
        selected row.

        Returns:
            Tuple of (start, stop) indices into filtered_items
        """
        count = len(self.filtered_items)
        if count <= max_visible or max_visible <= 0:
            return 0, count

        start = 0
        if self.selected_index >= max_visible:
            start = self.selected_index - max_visible + 1
        return start, start + max_visible

    def _refilter(self, text: str) -> None:
        """Recompute filtered items for text and reset the cursor."""
        self.query_text = text
        self.filtered_items = filter_and_rank(self.items, text)
        self.selected_index = 0 if self.filtered_items else -1

    def _close(self, result: LauncherResult) -> LauncherResult:
        self.state = SessionState.CLOSED
        self.result = result
        logger.debug("Session closed: %s", result.action.value)

        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(result)
        return result

    def _require_active(self, operation: str) -> None:
        if self.state != SessionState.ACTIVE:
            raise SessionStateError(f"Cannot {operation} in state {self.state.name}")
