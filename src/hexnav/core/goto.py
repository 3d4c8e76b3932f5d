from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class OverlayRet:
    kind: Literal["continue", "abort", "beginning", "jump"]
    offset: int = 0


class GotoOverlay:
    """Decimal byte offset entry.

    Only ASCII digits ever reach `input`, so parsing on enter cannot fail. The
    returned offset is not bounds-checked here; the viewport clamps it.
    """

    def __init__(self) -> None:
        self.input = ""

    def keypressed(self, key: str) -> OverlayRet:
        if key == "escape":
            return OverlayRet("abort")
        if key == "enter":
            if not self.input:
                return OverlayRet("abort")
            return OverlayRet("jump", int(self.input))
        if key == "backspace":
            self.input = self.input[:-1]
        elif key == "g" and not self.input:
            # vi-style gg
            return OverlayRet("beginning")
        elif len(key) == 1 and "0" <= key <= "9":
            self.input += key
        return OverlayRet("continue")
