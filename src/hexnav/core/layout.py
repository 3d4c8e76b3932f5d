from __future__ import annotations

from dataclasses import dataclass


def bytes_per_line(width: int) -> int:
    """How many bytes fit in a hex pane `width` columns wide.

    Every byte takes three columns (two digits and a gap) except the last one on
    a row, which doesn't need the trailing gap. Never less than one.
    """
    n = width // 3
    if width % 3 == 2:
        n += 1
    return max(1, n)


def cols_per_line(bpl: int) -> int:
    # Effective width of a row, ignoring the unusable trailing gap
    return bpl * 3 - 1


def total_lines(size: int, bpl: int) -> int:
    """Rows needed to draw `size` bytes. Zero for an empty buffer."""
    return (size + bpl - 1) // bpl


def last_line_bytes(size: int, bpl: int) -> int:
    """Bytes on the last row, or 0 when the last row is full."""
    return size % bpl


@dataclass(frozen=True)
class Layout:
    size: int
    bytes_per_line: int

    @classmethod
    def compute(cls, size: int, width: int) -> Layout:
        return cls(size=size, bytes_per_line=bytes_per_line(width))

    @property
    def cols_per_line(self) -> int:
        return cols_per_line(self.bytes_per_line)

    @property
    def total_lines(self) -> int:
        return total_lines(self.size, self.bytes_per_line)

    @property
    def last_line_bytes(self) -> int:
        return last_line_bytes(self.size, self.bytes_per_line)

    @property
    def last_row(self) -> int:
        # -1 for an empty buffer
        return self.total_lines - 1

    def row_bytes(self, row: int) -> int:
        """Bytes rendered on `row` (0 outside the buffer)."""
        if row < 0 or row > self.last_row:
            return 0
        if row == self.last_row and self.last_line_bytes:
            return self.last_line_bytes
        return self.bytes_per_line

    def last_col(self, row: int) -> int:
        """Rightmost column the cursor may reach on `row`."""
        return (self.row_bytes(row) - 1) * 3 + 2
