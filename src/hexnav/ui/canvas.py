from __future__ import annotations

from rich.style import Style
from rich.text import Text

Cell = tuple[str, str | None, str | None]  # glyph, fg, bg

_BLANK: Cell = (" ", None, None)


class Canvas:
    """Grid of styled cells, filled by the render pass and shown as rich Text."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._rows: list[list[Cell]] = [[_BLANK] * self.width for _ in range(self.height)]

    def change_cell(self, x: int, y: int, glyph: str, fg: str | None = None, bg: str | None = None) -> None:
        # Out of bounds draws are dropped so panes never have to clip
        if 0 <= x < self.width and 0 <= y < self.height:
            self._rows[y][x] = (glyph, fg, bg)

    def cell(self, x: int, y: int) -> Cell:
        return self._rows[y][x]

    def row_text(self, y: int) -> str:
        return "".join(c[0] for c in self._rows[y])

    def to_text(self) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        for y, row in enumerate(self._rows):
            if y:
                text.append("\n")
            run = ""
            run_style: tuple[str | None, str | None] = (None, None)
            for glyph, fg, bg in row:
                if (fg, bg) != run_style and run:
                    text.append(run, style=_style(*run_style))
                    run = ""
                run_style = (fg, bg)
                run += glyph
            if run:
                text.append(run, style=_style(*run_style))
        return text


def _style(fg: str | None, bg: str | None) -> Style | None:
    if fg is None and bg is None:
        return None
    return Style(color=fg, bgcolor=bg)
