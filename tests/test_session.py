"""Tests for launcher sessions."""

import pytest

from launcher.core.items import Item, LauncherAction
from launcher.core.session import LauncherSession, SessionState, SessionStateError


@pytest.fixture
def session(sample_items):
    """An active session over the sample items."""
    session = LauncherSession(sample_items)
    session.start()
    return session


class TestLifecycle:
    """Tests for session state transitions."""

    def test_new_session_is_idle(self, sample_items):
        """Test that sessions start idle with no selection."""
        session = LauncherSession(sample_items)

        assert session.state == SessionState.IDLE
        assert session.filtered_items == []
        assert session.selected_index == -1
        assert session.result is None

    def test_start(self, session, sample_items):
        """Test that start shows every item with the first selected."""
        assert session.is_active
        assert session.filtered_items == sample_items
        assert session.selected_index == 0
        assert session.query_text == ""

    def test_start_with_no_items(self):
        """Test that an empty session has nothing selected."""
        session = LauncherSession()
        session.start()

        assert session.filtered_items == []
        assert session.selected_index == -1
        assert session.selected_item is None

    def test_start_twice_raises(self, session):
        """Test that a running session cannot be started again."""
        with pytest.raises(SessionStateError):
            session.start()

    def test_operations_require_active(self, sample_items):
        """Test that an idle session rejects input."""
        session = LauncherSession(sample_items)

        with pytest.raises(SessionStateError):
            session.set_query("a")
        with pytest.raises(SessionStateError):
            session.move_selection(1)
        with pytest.raises(SessionStateError):
            session.select(0)
        with pytest.raises(SessionStateError):
            session.submit()
        with pytest.raises(SessionStateError):
            session.dismiss()

    def test_closed_session_rejects_input(self, session):
        """Test that query and cursor changes fail after close."""
        session.dismiss()

        with pytest.raises(SessionStateError):
            session.set_query("a")
        with pytest.raises(SessionStateError):
            session.move_selection(1)

    def test_items_are_copied(self, sample_items):
        """Test that later changes to the caller's list are not seen."""
        session = LauncherSession(sample_items)
        sample_items.append(Item(id="d", title="Delta"))
        session.start()

        assert len(session.filtered_items) == 3


class TestQuery:
    """Tests for query changes."""

    def test_set_query_filters(self, session):
        """Test filtering and ranking on query change."""
        session.set_query("al")

        assert [item.title for item in session.filtered_items] == ["Alpha", "Gamma Alpha"]
        assert session.query_text == "al"

    def test_set_query_resets_cursor(self, session):
        """Test that a query change puts the cursor back on the first row."""
        session.move_selection(2)
        session.set_query("a")

        assert session.selected_index == 0

    def test_no_results_clears_cursor(self, session):
        """Test that an empty result list has no selection."""
        session.set_query("zzz")

        assert session.filtered_items == []
        assert session.selected_index == -1

    def test_clearing_query_restores_items(self, session, sample_items):
        """Test returning to the empty query."""
        session.set_query("beta")
        session.set_query("")

        assert session.filtered_items == sample_items


class TestSelection:
    """Tests for cursor movement."""

    def test_move_down(self, session, sample_items):
        """Test moving the cursor down."""
        session.move_selection(1)

        assert session.selected_index == 1
        assert session.selected_item == sample_items[1]

    def test_move_wraps_up(self, session):
        """Test wrapping from the first to the last row."""
        session.move_selection(-1)

        assert session.selected_index == 2

    def test_move_wraps_down(self, session):
        """Test wrapping from the last to the first row."""
        session.move_selection(-1)
        session.move_selection(1)

        assert session.selected_index == 0

    def test_move_keeps_filtered_items(self, session):
        """Test that cursor moves do not refilter."""
        session.set_query("al")
        before = list(session.filtered_items)

        session.move_selection(1)

        assert session.filtered_items == before

    def test_move_with_no_results(self, session):
        """Test that moving in an empty list is a no-op."""
        session.set_query("zzz")
        session.move_selection(1)

        assert session.selected_index == -1

    def test_select(self, session):
        """Test pointer selection."""
        session.select(2)

        assert session.selected_index == 2

    def test_select_out_of_range_ignored(self, session):
        """Test that invalid rows leave the cursor alone."""
        session.select(5)
        session.select(-1)

        assert session.selected_index == 0


class TestClose:
    """Tests for submit and dismiss."""

    def test_submit_selected(self, session, sample_items):
        """Test submitting the selected item."""
        session.move_selection(1)

        result = session.submit()

        assert result.action == LauncherAction.SUBMITTED
        assert result.selected_item == sample_items[1]
        assert session.is_closed

    def test_submit_query_only(self, session):
        """Test submitting text that matched nothing."""
        session.set_query("  zzz ")

        result = session.submit()

        assert result.selected_item is None
        assert result.query == "zzz"

    def test_submit_with_action(self, session):
        """Test that modifier actions are recorded."""
        assert session.submit(LauncherAction.COMMAND).action == LauncherAction.COMMAND

    def test_empty_submit_dismisses(self):
        """Test that submitting with nothing to submit is a dismissal."""
        session = LauncherSession()
        session.start()

        assert session.submit().is_dismissed

    def test_dismiss(self, session):
        """Test dismissing."""
        result = session.dismiss()

        assert result.is_dismissed
        assert session.result is result

    def test_first_outcome_wins(self, session):
        """Test that closing twice keeps the first outcome."""
        first = session.submit()
        second = session.dismiss()

        assert second is first
        assert session.submit(LauncherAction.OPTION) is first


class TestCallbacks:
    """Tests for done callbacks."""

    def test_callback_called_once(self, session):
        """Test that callbacks receive the outcome exactly once."""
        received = []
        session.add_done_callback(received.append)

        session.submit()
        session.dismiss()

        assert len(received) == 1
        assert received[0].action == LauncherAction.SUBMITTED

    def test_callbacks_in_order(self, session):
        """Test that callbacks fire in registration order."""
        calls = []
        session.add_done_callback(lambda result: calls.append("first"))
        session.add_done_callback(lambda result: calls.append("second"))

        session.dismiss()

        assert calls == ["first", "second"]

    def test_late_callback_called_immediately(self, session):
        """Test registering after close."""
        session.dismiss()
        received = []

        session.add_done_callback(received.append)

        assert received == [session.result]


class TestVisibleWindow:
    """Tests for visible_window."""

    @pytest.fixture
    def long_session(self):
        session = LauncherSession(Item(id=str(n), title=f"Item {n}") for n in range(10))
        session.start()
        return session

    def test_short_list(self, session):
        """Test that short lists are shown entirely."""
        assert session.visible_window(8) == (0, 3)

    def test_top(self, long_session):
        """Test the window at the top of the list."""
        assert long_session.visible_window(3) == (0, 3)

    def test_scrolls_with_selection(self, long_session):
        """Test that the selected row stays visible."""
        long_session.select(5)

        assert long_session.visible_window(3) == (3, 6)

    def test_bottom(self, long_session):
        """Test the window after wrapping to the last row."""
        long_session.move_selection(-1)

        assert long_session.visible_window(3) == (7, 10)

    def test_empty(self):
        """Test the window with no items."""
        session = LauncherSession()
        session.start()

        assert session.visible_window(8) == (0, 0)
