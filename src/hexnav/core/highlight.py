from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class HighlightSet:
    """Search matches to paint: ascending start offsets of equal-length spans."""

    matches: tuple[int, ...] = ()
    match_len: int = 0

    def __bool__(self) -> bool:
        return bool(self.matches) and self.match_len > 0

    def sweep(self) -> HighlightSweep:
        return HighlightSweep(self.matches, self.match_len)


class HighlightSweep:
    """Forward-only match lookup for one render pass.

    Cells must be queried with non-decreasing byte offsets, which holds for a
    row-major, left-to-right traversal. The match index never moves back, so a
    whole pass costs O(cells + matches).
    """

    def __init__(self, matches: Sequence[int], match_len: int) -> None:
        self._matches = matches
        self._len = match_len
        self._idx = 0

    def _advance(self, byte_idx: int) -> None:
        matches = self._matches
        while self._idx < len(matches) and matches[self._idx] + self._len <= byte_idx:
            self._idx += 1

    def contains(self, byte_idx: int) -> bool:
        self._advance(byte_idx)
        if self._idx >= len(self._matches):
            return False
        start = self._matches[self._idx]
        return start <= byte_idx < start + self._len

    def gap_after(self, byte_idx: int) -> bool:
        """Whether the gap between `byte_idx` and the next byte is in the same match."""
        if not self.contains(byte_idx):
            return False
        return byte_idx + 1 < self._matches[self._idx] + self._len
