"""Ordinal tracking for numbered lists rendered from Google Docs."""

import logging

logger = logging.getLogger(__name__)


class ListNumberingTracker:
    """
    Hands out the next ordinal for a numbered list item.

    Counters are kept per list id and nesting level. Advancing a level drops the
    counters of every deeper level of the same list, so a nested sub-list that
    is revisited after its parent advanced starts again at 1.

    A tracker belongs to one traversal scope: one per document conversion and a
    fresh one per table cell. A non-list paragraph ends the list run and the
    caller resets the tracker.
    """

    def __init__(self) -> None:
        self._counters: dict[str, dict[int, int]] = {}

    def next_number(self, list_id: str, nesting_level: int) -> int:
        """Advance the counter for (list_id, nesting_level) and return it."""
        levels = self._counters.setdefault(list_id, {})

        for level in [lvl for lvl in levels if lvl > nesting_level]:
            del levels[level]

        levels[nesting_level] = levels.get(nesting_level, 0) + 1
        return levels[nesting_level]

    def reset(self) -> None:
        """Forget every list's counters."""
        if self._counters:
            logger.debug(f"Resetting list counters for {len(self._counters)} list(s)")
        self._counters.clear()
