"""Companion panes mirroring the hex grid cursor.

Neither pane navigates on its own: the session forwards every viewport change
through `move_cursor_offset` and `set_scroll`.
"""

from __future__ import annotations


class AsciiView:
    """ASCII pane: one column per byte, same rows as the hex grid."""

    def __init__(self, bytes_per_line: int, height: int) -> None:
        self.bytes_per_line = bytes_per_line
        self.height = height
        self.row = 0
        self.col = 0
        self.scroll = 0

    def move_cursor_offset(self, offset: int) -> None:
        self.row = offset // self.bytes_per_line
        self.col = offset % self.bytes_per_line

    def set_scroll(self, scroll: int) -> None:
        self.scroll = scroll

    def resize(self, bytes_per_line: int, height: int) -> None:
        self.bytes_per_line = bytes_per_line
        self.height = height


class LinesView:
    """Address gutter: highlights the row holding the cursor."""

    def __init__(self, bytes_per_line: int, height: int, digits: int) -> None:
        self.bytes_per_line = bytes_per_line
        self.height = height
        self.digits = digits
        self.cursor = 0
        self.scroll = 0

    @property
    def width(self) -> int:
        # "0x" prefix plus the address digits
        return self.digits + 2

    def move_cursor_offset(self, offset: int) -> None:
        self.cursor = offset

    def set_scroll(self, scroll: int) -> None:
        self.scroll = scroll

    def resize(self, bytes_per_line: int, height: int) -> None:
        self.bytes_per_line = bytes_per_line
        self.height = height

    def cursor_row(self) -> int:
        return self.cursor // self.bytes_per_line

    def address(self, row: int) -> str:
        return f"0x{row * self.bytes_per_line:0{self.digits}X}"
