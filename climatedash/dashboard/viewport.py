"""
Synchronized Viewport

One zoom window shared by every chart. Charts report brush gestures through
set_range() and all of them render visible_range(), so a zoom on any chart is
reflected by the others. Mutation only happens on the event loop thread.
"""

import logging
from typing import NamedTuple, Optional, Tuple

logger = logging.getLogger("climatedash.dashboard")


class VisibleRange(NamedTuple):
    start: int
    end: int


class SyncedViewport:
    """Index-based zoom window over the current series."""

    def __init__(self, data_length: int = 0):
        self._window: Optional[Tuple[int, int]] = None
        self.data_length = max(0, int(data_length))

    def set_data_length(self, data_length: int) -> None:
        """Rebase onto a new series length; the stored window is clamped lazily."""
        self.data_length = max(0, int(data_length))

    def visible_range(self) -> VisibleRange:
        n = self.data_length
        if self._window is None or n == 0:
            return VisibleRange(0, n - 1)

        start, end = self._window
        last = n - 1
        return VisibleRange(
            min(max(0, start), last),
            min(max(0, end), last),
        )

    def set_range(self, start: int, end: int) -> None:
        """Store a new window. Bounds are not checked here; reversed pairs are swapped."""
        start, end = int(start), int(end)
        if start > end:
            start, end = end, start
        self._window = (start, end)
        logger.debug(f"viewport: range set to {start}..{end} (length {self.data_length})")

    def reset_zoom(self) -> None:
        self._window = None

    @property
    def is_zoomed(self) -> bool:
        return self._window is not None

    @property
    def window(self) -> Optional[Tuple[int, int]]:
        return self._window
