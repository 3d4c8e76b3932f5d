from __future__ import annotations

import logging
from dataclasses import dataclass

from hexnav.core.goto import GotoOverlay
from hexnav.core.highlight import HighlightSet
from hexnav.core.io import ByteBuffer
from hexnav.core.layout import bytes_per_line
from hexnav.core.search import SearchOverlay, next_match, prev_match
from hexnav.core.viewport import DEFAULT_PAGE_LINES, Viewport
from hexnav.core.views import AsciiView, LinesView

logger = logging.getLogger(__name__)

Overlay = GotoOverlay | SearchOverlay | None


@dataclass(frozen=True)
class Geometry:
    """Column layout of the screen: gutter | hex grid | ascii, info line below."""

    gutter_width: int
    hex_x: int
    hex_width: int
    ascii_x: int
    ascii_width: int
    pane_height: int
    info_y: int

    @classmethod
    def compute(cls, size: int, width: int, height: int) -> Geometry:
        digits = len(f"{size:X}")
        gutter = digits + 2
        # One separator column on each side of the hex grid. Every byte takes
        # three hex columns and one ascii column.
        unit = max(1, (width - gutter - 2) // 4)
        hex_x = gutter + 1
        hex_width = unit * 3
        return cls(
            gutter_width=gutter,
            hex_x=hex_x,
            hex_width=hex_width,
            ascii_x=hex_x + hex_width + 1,
            ascii_width=unit,
            pane_height=max(1, height - 1),
            info_y=max(0, height - 1),
        )


class HexSession:
    """Everything one viewer window knows: panes, overlay, search highlights.

    `keypressed` is the single entry point for input. While an overlay is open
    it receives every key; otherwise a few global bindings are checked before
    the key falls through to the viewport.
    """

    def __init__(
        self,
        buffer: ByteBuffer,
        path: str,
        width: int,
        height: int,
        *,
        page_lines: int = DEFAULT_PAGE_LINES,
        elf_tag: str | None = None,
    ) -> None:
        self.buffer = buffer
        self.path = path
        self.width = width
        self.height = height
        self.elf_tag = elf_tag
        self.has_focus = True
        self.highlight = HighlightSet()
        self.overlay: Overlay = None
        self.pending_z = False

        self.geometry = Geometry.compute(buffer.size, width, height)
        g = self.geometry
        self.viewport = Viewport(
            buffer.size,
            g.hex_width,
            g.pane_height,
            page_lines=page_lines,
            on_change=self._viewport_changed,
        )
        bpl = self.viewport.bytes_per_line
        self.lines = LinesView(bpl, g.pane_height, g.gutter_width - 2)
        self.ascii_view = AsciiView(bpl, g.pane_height)

    @property
    def size(self) -> int:
        return self.buffer.size

    def _viewport_changed(self, offset: int, scroll: int) -> None:
        for view in (self.lines, self.ascii_view):
            view.move_cursor_offset(offset)
            view.set_scroll(scroll)

    def resize(self, width: int, height: int) -> None:
        if (width, height) == (self.width, self.height):
            return
        self.width = width
        self.height = height
        self.geometry = g = Geometry.compute(self.size, width, height)
        bpl = bytes_per_line(g.hex_width)
        self.lines.resize(bpl, g.pane_height)
        self.ascii_view.resize(bpl, g.pane_height)
        self.viewport.resize(g.hex_width, g.pane_height)

    def info_line(self) -> str:
        vp = self.viewport
        text = f"{self.path} - {vp.row}: {vp.col}"
        if self.highlight:
            n = len(self.highlight.matches)
            text += f"  [{n} match{'es' if n != 1 else ''}]"
        if self.elf_tag:
            text += f"  [{self.elf_tag}]"
        return text

    # ---- Input ----
    def keypressed(self, key: str) -> bool:
        """Handle one key. Returns True when the viewer should quit."""
        overlay = self.overlay
        if overlay is None:
            if key == "q":
                return True
            self._keypressed_no_overlay(key)
        elif isinstance(overlay, GotoOverlay):
            ret = overlay.keypressed(key)
            if ret.kind == "jump":
                logger.debug("goto offset %d", ret.offset)
                self.viewport.move_cursor_offset(ret.offset)
            elif ret.kind == "beginning":
                self.viewport.move_cursor_offset(0)
            if ret.kind != "continue":
                self._close_overlay()
        else:
            ret = overlay.keypressed(key)
            if ret.kind == "highlight":
                self.highlight = HighlightSet(ret.matches, ret.match_len)
            if ret.kind != "continue":
                self._close_overlay()
        return False

    def _keypressed_no_overlay(self, key: str) -> None:
        if key == "z":
            if self.pending_z:
                self.viewport.try_center_scroll()
            self.pending_z = not self.pending_z
            return

        self.pending_z = False
        if key == "g":
            self._open_overlay(GotoOverlay())
        elif key == "/":
            self._open_overlay(SearchOverlay(self.buffer))
        elif key == "n":
            self._jump_to(next_match(self.highlight.matches, self.viewport.get_byte_idx()))
        elif key == "N":
            self._jump_to(prev_match(self.highlight.matches, self.viewport.get_byte_idx()))
        else:
            self.viewport.move_by_key(key)

    def _jump_to(self, offset: int | None) -> None:
        if offset is not None:
            self.viewport.move_cursor_offset(offset)

    def _open_overlay(self, overlay: GotoOverlay | SearchOverlay) -> None:
        logger.debug("open %s", type(overlay).__name__)
        self.overlay = overlay

    def _close_overlay(self) -> None:
        logger.debug("close %s", type(self.overlay).__name__)
        self.overlay = None
