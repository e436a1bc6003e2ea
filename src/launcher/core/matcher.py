"""Fuzzy matching, ranking and selection for launcher items."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from launcher.core.items import Item, LauncherAction, LauncherResult

PREFIX_BASE = 1000
SUBSTRING_BASE = 500
LENGTH_PIVOT = 100
FUZZY_CHAR_SCORE = 10
FUZZY_CONSECUTIVE_STEP = 5


class MatchScore(NamedTuple):
    """Result of matching a query against a piece of text."""

    matches: bool
    score: int


NO_MATCH = MatchScore(False, 0)


def fuzzy_match(query: str, text: str) -> MatchScore:
    """Match a query against text using three tiers.

    Prefix hits score highest, then substring hits, then in-order
    subsequence hits. Shorter texts score higher within the first two
    tiers; the length penalty is not clamped for texts longer than 100.

    Args:
        query: The search query
        text: Text to match against

    Returns:
        MatchScore with the first tier that matched
    """
    if not query:
        return MatchScore(True, 0)

    query = query.lower()
    text = text.lower()

    if text.startswith(query):
        return MatchScore(True, PREFIX_BASE + (LENGTH_PIVOT - len(text)))

    if query in text:
        return MatchScore(True, SUBSTRING_BASE + (LENGTH_PIVOT - len(text)))

    query_index = 0
    score = 0
    consecutive_bonus = 0

    for char in text:
        if query_index < len(query) and char == query[query_index]:
            score += FUZZY_CHAR_SCORE + consecutive_bonus
            consecutive_bonus += FUZZY_CONSECUTIVE_STEP
            query_index += 1
        else:
            consecutive_bonus = 0

    if query_index < len(query):
        return NO_MATCH
    return MatchScore(True, score)


def score_item(query: str, item: Item) -> MatchScore:
    """Score an item by the better of its title and subtitle matches."""
    title_match = fuzzy_match(query, item.title)
    if item.subtitle is None:
        return title_match

    subtitle_match = fuzzy_match(query, item.subtitle)
    return MatchScore(
        title_match.matches or subtitle_match.matches,
        max(title_match.score, subtitle_match.score),
    )


def filter_and_rank(items: Sequence[Item], query: str) -> list[Item]:
    """Filter items by query and order them by score.

    An empty query keeps every item in caller order. Otherwise only
    matching items are returned, best score first; equal scores keep
    their relative input order.

    Args:
        items: Candidate items (not modified)
        query: Current query text

    Returns:
        New list of matching items
    """
    if not query:
        return list(items)

    scored: list[tuple[Item, int]] = []
    for item in items:
        result = score_item(query, item)
        if result.matches:
            scored.append((item, result.score))

    # sorted() is stable, including with reverse=True
    scored = sorted(scored, key=lambda pair: pair[1], reverse=True)
    return [item for item, _score in scored]


def move_selection(current_index: int, delta: int, count: int) -> int:
    """Move a selection cursor by delta, wrapping around both ends.

    Args:
        current_index: Current cursor position
        delta: Offset to apply (negative moves up)
        count: Number of selectable rows

    Returns:
        New cursor position, or -1 when there is nothing to select
    """
    if count <= 0:
        return -1
    return (current_index + delta) % count


def submit(
    items: Sequence[Item],
    selected_index: int,
    query_text: str | None,
    action: LauncherAction = LauncherAction.SUBMITTED,
) -> LauncherResult:
    """Build the outcome of a submit gesture.

    Args:
        items: The currently filtered items
        selected_index: Cursor position into items
        query_text: Raw text of the search box
        action: Action tag chosen by the presentation layer

    Returns:
        LauncherResult carrying the selected item and/or trimmed query,
        or a dismissed result when there is neither
    """
    query = (query_text or "").strip()

    if 0 <= selected_index < len(items):
        return LauncherResult(action=action, query=query, selected_item=items[selected_index])

    if query:
        return LauncherResult(action=action, query=query)

    return LauncherResult.dismissed()
