"""Sheet allocation and per-sheet cursor state for the shelf packer."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class SheetContext:
    """Mutable cursor state for the sheet currently being filled.

    Rows (shelves) run along the sheet length. ``cursor_x`` is where the
    next part in the current row starts, ``cursor_y`` is the bottom of the
    current row, and ``row_height`` is the tallest part placed in the row.

    Attributes:
        index: Zero-based sheet index within the material group.
        cursor_x: X position for the next part.
        cursor_y: Y position of the current row.
        row_height: Height of the current row so far.
        placed_count: Number of parts placed on this sheet.
    """

    index: int
    cursor_x: float = 0.0
    cursor_y: float = 0.0
    row_height: float = 0.0
    placed_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.placed_count == 0

    def start_new_row(self, kerf: float = 0.0) -> None:
        """Wrap to a new row above the current one."""
        self.cursor_y += self.row_height + kerf
        self.cursor_x = 0.0
        self.row_height = 0.0

    def place(self, length: float, width: float, kerf: float = 0.0) -> tuple[float, float]:
        """Record a part at the cursor and advance along the row.

        Returns:
            The ``(x, y)`` position the part was placed at.
        """
        position = (self.cursor_x, self.cursor_y)
        self.cursor_x += length + kerf
        self.row_height = max(self.row_height, width)
        self.placed_count += 1
        return position


class SheetAllocator:
    """Hands out sheets for one material group, one at a time.

    Advancing starts a fresh sheet with a reset cursor. Earlier sheets are
    never revisited, so gaps left on them are not backfilled.
    """

    def __init__(self) -> None:
        self._current = SheetContext(index=0)
        self._used_sheets = 0

    @property
    def current(self) -> SheetContext:
        return self._current

    @property
    def sheet_count(self) -> int:
        """Number of sheets holding at least one placement."""
        return self._used_sheets + (0 if self._current.is_empty else 1)

    def advance(self) -> SheetContext:
        """Close the current sheet and start the next one.

        An empty sheet is never closed, so sheet indices stay contiguous.
        """
        if self._current.is_empty:
            return self._current
        self._used_sheets += 1
        next_index = self._current.index + 1
        logger.debug(
            "Sheet %d full after %d parts, starting sheet %d",
            self._current.index,
            self._current.placed_count,
            next_index,
        )
        self._current = SheetContext(index=next_index)
        return self._current
