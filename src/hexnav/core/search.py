from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from hexnav.core.io import ByteBuffer

logger = logging.getLogger(__name__)

HEX_DIGITS = "0123456789abcdefABCDEF"


def find_offsets(data: bytes | ByteBuffer, pattern: bytes) -> list[int]:
    """Return the start offsets of non-overlapping occurrences of `pattern`.

    Scans forward from offset 0; after a match the scan resumes right after the
    matched bytes, so overlapping occurrences are not reported. The result is
    strictly ascending.
    """
    if not pattern:
        return []
    offsets: list[int] = []
    step = len(pattern)
    pos = data.find(pattern)
    while pos != -1:
        offsets.append(pos)
        pos = data.find(pattern, pos + step)
    return offsets


def next_match(matches: Sequence[int], offset: int) -> int | None:
    """First match strictly after `offset`, wrapping to the first match."""
    if not matches:
        return None
    i = bisect_right(matches, offset)
    return matches[i] if i < len(matches) else matches[0]


def prev_match(matches: Sequence[int], offset: int) -> int | None:
    """Last match strictly before `offset`, wrapping to the last match."""
    if not matches:
        return None
    i = bisect_left(matches, offset)
    return matches[i - 1] if i > 0 else matches[-1]


class SearchMode(Enum):
    ASCII = "ascii"
    HEX = "hex"


class Nibble(Enum):
    MS = "ms"  # more significant half
    LS = "ls"  # less significant half


@dataclass(frozen=True)
class SearchRet:
    kind: Literal["continue", "abort", "highlight"]
    focus: int = 0
    matches: tuple[int, ...] = ()
    match_len: int = 0

    @classmethod
    def highlight(cls, focus: int, matches: Sequence[int], match_len: int) -> SearchRet:
        return cls("highlight", focus, tuple(matches), match_len)


CONTINUE = SearchRet("continue")
ABORT = SearchRet("abort")


@dataclass
class SearchOverlay:
    """Pattern entry box with an ASCII and a hex side.

    Tab switches which side receives typed characters; both sides always show
    the same pattern. In hex mode the pattern is edited one nibble at a time.
    """

    data: bytes | ByteBuffer
    pattern: bytearray = field(default_factory=bytearray)
    byte_cursor: int = 0
    nibble: Nibble = Nibble.MS
    mode: SearchMode = SearchMode.ASCII

    def keypressed(self, key: str) -> SearchRet:
        if key == "escape":
            return ABORT
        if key == "enter":
            if not self.pattern:
                return CONTINUE
            matches = find_offsets(self.data, bytes(self.pattern))
            logger.debug("search for %d byte(s) found %d match(es)", len(self.pattern), len(matches))
            return SearchRet.highlight(self.byte_cursor, matches, len(self.pattern))
        if key == "tab":
            self.mode = SearchMode.HEX if self.mode is SearchMode.ASCII else SearchMode.ASCII
        elif key == "backspace":
            if self.mode is SearchMode.ASCII:
                self._backspace_ascii()
            else:
                self._backspace_hex()
        elif len(key) == 1:
            if self.mode is SearchMode.ASCII:
                self._insert_ascii(key)
            else:
                self._insert_hex(key)
        return CONTINUE

    def _insert_ascii(self, ch: str) -> None:
        code = ord(ch)
        if code > 0xFF:
            return
        self.pattern.append(code)
        self.byte_cursor += 1
        self.nibble = Nibble.MS

    def _insert_hex(self, ch: str) -> None:
        if ch not in HEX_DIGITS:
            return
        value = int(ch, 16)
        if self.byte_cursor >= len(self.pattern):
            self.pattern.append(0)
        current = self.pattern[self.byte_cursor]
        if self.nibble is Nibble.MS:
            self.pattern[self.byte_cursor] = (current & 0x0F) | (value << 4)
            self.nibble = Nibble.LS
        else:
            self.pattern[self.byte_cursor] = (current & 0xF0) | value
            self.nibble = Nibble.MS
            self.byte_cursor += 1

    def _backspace_ascii(self) -> None:
        if not self.pattern:
            return
        self.pattern.pop()
        if self.byte_cursor != 0:
            self.byte_cursor -= 1

    def _backspace_hex(self) -> None:
        if self.nibble is Nibble.LS and self.byte_cursor < len(self.pattern):
            # Half-typed byte: clear the low nibble, keep the byte
            self.pattern[self.byte_cursor] &= 0xF0
            self.nibble = Nibble.MS
            return
        if not self.pattern:
            self.byte_cursor = 0
            self.nibble = Nibble.MS
            return
        self.pattern.pop()
        if self.byte_cursor > len(self.pattern):
            self.byte_cursor = len(self.pattern)
        if self.byte_cursor > 0:
            self.byte_cursor -= 1
            self.nibble = Nibble.LS
        else:
            self.nibble = Nibble.MS
