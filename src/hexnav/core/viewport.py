from __future__ import annotations

import logging
from collections.abc import Callable

from hexnav.core.layout import Layout

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LINES = 10

# Rows kept between the cursor and the top/bottom edge while scrolling
SCROLL_MARGIN = 2

KEYS_UP = frozenset({"up", "k"})
KEYS_DOWN = frozenset({"down", "j"})
KEYS_LEFT = frozenset({"left", "h"})
KEYS_RIGHT = frozenset({"right", "l"})
KEYS_PAGE_DOWN = frozenset({"ctrl+d", "pagedown"})
KEYS_PAGE_UP = frozenset({"ctrl+u", "pageup"})
KEYS_END = frozenset({"G"})


class Viewport:
    """Cursor and scroll state of the hex pane.

    Positions are kept in grid units: `row` is the line of the file, `col` is a
    raw column inside the hex pane (byte `i` of a row occupies columns `3i` and
    `3i+1`, column `3i+2` is the gap before the next byte). `scroll` is the
    first visible line.

    Companion panes are kept in sync through `on_change(offset, scroll)`, called
    after every change of position or scroll.
    """

    def __init__(
        self,
        size: int,
        width: int,
        height: int,
        *,
        page_lines: int = DEFAULT_PAGE_LINES,
        on_change: Callable[[int, int], None] | None = None,
    ) -> None:
        self.size = size
        self.width = width
        self.height = height
        self.page_lines = page_lines
        self.layout = Layout.compute(size, width)
        self.on_change = on_change
        self.row = 0
        self.col = 0
        self.scroll = 0

    @property
    def bytes_per_line(self) -> int:
        return self.layout.bytes_per_line

    def get_byte_idx(self) -> int:
        return self.row * self.bytes_per_line + self.col // 3

    def resize(self, width: int, height: int) -> None:
        offset = self.get_byte_idx()
        self.width = width
        self.height = height
        self.layout = Layout.compute(self.size, width)
        logger.debug("viewport resized to %dx%d (%d bytes/line)", width, height, self.bytes_per_line)
        self.move_cursor_offset(offset)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.get_byte_idx(), self.scroll)

    # ---- Offset based movement ----
    def move_cursor_offset(self, offset: int) -> None:
        """Jump to byte `offset`, scrolling as little as possible."""
        if self.size == 0:
            offset = 0
        else:
            offset = max(0, min(offset, self.size - 1))

        bpl = self.bytes_per_line
        self.row = offset // bpl
        self.col = (offset % bpl) * 3

        min_scroll = max(0, self.row - self.height + 3)
        max_scroll = max(0, self.row - 3)
        if self.scroll > max_scroll:
            self.scroll = max_scroll
        if self.scroll < min_scroll:
            self.scroll = min_scroll
        # Only matters for panes shorter than the margins
        self.scroll = min(self.scroll, self.row)

        self._notify()

    def try_center_scroll(self) -> None:
        top = self.row - self.height // 2
        if top >= 0:
            self.scroll = top
            self._notify()

    # ---- Key based movement ----
    def move_by_key(self, key: str) -> bool:
        """Apply a navigation key. Returns whether the key was consumed."""
        if key in KEYS_UP:
            self._up()
        elif key in KEYS_DOWN:
            self._down()
        elif key in KEYS_LEFT:
            self._left()
        elif key in KEYS_RIGHT:
            self._right()
        elif key in KEYS_PAGE_DOWN:
            self._page(self.page_lines)
        elif key in KEYS_PAGE_UP:
            self._page(-self.page_lines)
        elif key in KEYS_END:
            if self.size > 0:
                self.move_cursor_offset(self.size - 1)
        else:
            return False
        return True

    def _move_next_line(self) -> None:
        # Caller guarantees a next row exists. Keep the column inside the
        # ragged last row.
        if self.row + 1 == self.layout.last_row:
            last_col = self.layout.last_col(self.row + 1)
            if self.col >= last_col:
                self.col = last_col - 1
        self.row += 1

    def _up(self) -> None:
        if self.size == 0:
            return
        if self.row > self.scroll + SCROLL_MARGIN:
            self.row -= 1
        elif self.scroll > 0:
            self.scroll -= 1
            self.row -= 1
        elif self.row > 0:
            self.row -= 1
        else:
            return
        self._notify()

    def _down(self) -> None:
        last_row = self.layout.last_row
        if self.size == 0:
            return
        if self.row < self.scroll + self.height - 1 - SCROLL_MARGIN and self.row < last_row:
            self._move_next_line()
        elif self.scroll + self.height <= last_row:
            # More content below the window: scroll, the cursor follows
            self.scroll += 1
            self._move_next_line()
        elif self.row < last_row:
            self._move_next_line()
        else:
            return
        self._notify()

    def _left(self) -> None:
        if self.col == 0:
            return
        self.col -= 1
        if (self.col + 1) % 3 == 0:
            # Landed on a gap, step onto the previous byte's second digit
            self.col -= 1
        self._notify()

    def _right(self) -> None:
        if self.size == 0:
            return
        next_on_gap = (self.col + 2) % 3 == 0
        target = self.col + 2 if next_on_gap else self.col + 1
        if target <= self.layout.last_col(self.row):
            self.col = target
            self._notify()

    def _page(self, lines: int) -> None:
        if self.size == 0:
            return
        offset = self.get_byte_idx() + lines * self.bytes_per_line
        self.move_cursor_offset(max(0, min(offset, self.size - 1)))
