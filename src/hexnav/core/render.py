"""Render pass: turns session state into per-cell draw requests.

Everything here decides *what* goes where; the target only needs
`change_cell(x, y, glyph, fg, bg)`. Colours come from the palette passed in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from hexnav.core.goto import GotoOverlay
from hexnav.core.search import Nibble, SearchMode, SearchOverlay

if TYPE_CHECKING:
    from hexnav.core.session import HexSession
    from hexnav.ui.palette import Palette

HEX_CHARS = "0123456789ABCDEF"
VSPLIT = "│"

OVERLAY_MAX_WIDTH = 50
OVERLAY_MAX_HEIGHT = 10


class DrawTarget(Protocol):
    def change_cell(self, x: int, y: int, glyph: str, fg: str | None = None, bg: str | None = None) -> None:
        ...


def printable(b: int) -> str:
    return chr(b) if 32 <= b <= 126 else "."


def put_text(
    target: DrawTarget, x: int, y: int, text: str, fg: str | None = None, bg: str | None = None
) -> None:
    for i, ch in enumerate(text):
        target.change_cell(x + i, y, ch, fg, bg)


def draw_session(session: HexSession, target: DrawTarget, palette: Palette) -> None:
    draw_lines(session, target, palette)
    draw_separators(session, target, palette)
    draw_hex_grid(session, target, palette)
    draw_ascii(session, target, palette)
    draw_info_line(session, target, palette)
    if isinstance(session.overlay, GotoOverlay):
        draw_goto_overlay(session, session.overlay, target, palette)
    elif isinstance(session.overlay, SearchOverlay):
        draw_search_overlay(session, session.overlay, target, palette)


def _cursor_colors(session: HexSession, palette: Palette) -> tuple[str, str]:
    if session.has_focus:
        return palette.cursor_focus_fg, palette.cursor_focus_bg
    return palette.cursor_nofocus_fg, palette.cursor_nofocus_bg


def draw_lines(session: HexSession, target: DrawTarget, palette: Palette) -> None:
    lines = session.lines
    cursor_row = lines.cursor_row()
    for y in range(lines.height):
        row = lines.scroll + y
        if row * lines.bytes_per_line >= session.size:
            break
        fg = palette.gutter_cursor_fg if row == cursor_row else palette.gutter_fg
        put_text(target, 0, y, lines.address(row), fg, palette.text_bg)


def draw_separators(session: HexSession, target: DrawTarget, palette: Palette) -> None:
    g = session.geometry
    for y in range(g.pane_height):
        target.change_cell(g.gutter_width, y, VSPLIT, palette.frame_fg, palette.text_bg)
        target.change_cell(g.ascii_x - 1, y, VSPLIT, palette.frame_fg, palette.text_bg)


def draw_hex_grid(session: HexSession, target: DrawTarget, palette: Palette) -> None:
    vp = session.viewport
    x0 = session.geometry.hex_x
    bpl = vp.bytes_per_line
    cursor_fg, cursor_bg = _cursor_colors(session, palette)
    hl = session.highlight.sweep()

    for y in range(vp.height):
        row = vp.scroll + y
        chunk = session.buffer.read(row * bpl, bpl)
        if not chunk:
            break
        for col, byte in enumerate(chunk):
            byte_idx = row * bpl + col
            lit = hl.contains(byte_idx)
            digits = (HEX_CHARS[byte >> 4], HEX_CHARS[byte & 0x0F])
            for i, digit in enumerate(digits):
                if row == vp.row and col * 3 + i == vp.col:
                    fg, bg = cursor_fg, cursor_bg
                elif lit:
                    fg, bg = palette.highlight_fg, palette.highlight_bg
                else:
                    fg, bg = palette.text_fg, palette.text_bg
                target.change_cell(x0 + col * 3 + i, y, digit, fg, bg)
            # Paint the gap too so a match reads as one block
            if col < bpl - 1 and hl.gap_after(byte_idx):
                target.change_cell(x0 + col * 3 + 2, y, " ", palette.highlight_fg, palette.highlight_bg)


def draw_ascii(session: HexSession, target: DrawTarget, palette: Palette) -> None:
    view = session.ascii_view
    x0 = session.geometry.ascii_x
    cols = view.bytes_per_line
    cursor_fg, cursor_bg = _cursor_colors(session, palette)
    hl = session.highlight.sweep()

    for y in range(view.height):
        row = view.scroll + y
        chunk = session.buffer.read(row * cols, cols)
        if not chunk:
            break
        for col, byte in enumerate(chunk):
            if row == view.row and col == view.col:
                fg, bg = cursor_fg, cursor_bg
            elif hl.contains(row * cols + col):
                fg, bg = palette.highlight_fg, palette.highlight_bg
            else:
                fg, bg = palette.text_fg, palette.text_bg
            target.change_cell(x0 + col, y, printable(byte), fg, bg)


def draw_info_line(session: HexSession, target: DrawTarget, palette: Palette) -> None:
    y = session.geometry.info_y
    fg, bg = palette.status_bar_fg, palette.status_bar_bg
    put_text(target, 0, y, " " * session.width, fg, bg)
    put_text(target, 0, y, session.info_line(), fg, bg)


def overlay_box(session: HexSession) -> tuple[int, int, int, int]:
    """(x, y, width, height) of an overlay centred on the screen."""
    avail_w, avail_h = session.width // 2, session.height // 2
    w = min(avail_w, OVERLAY_MAX_WIDTH)
    h = min(avail_h, OVERLAY_MAX_HEIGHT)
    x = session.width // 4 + (avail_w - w) // 2
    y = session.height // 4 + (avail_h - h) // 2
    return x, y, w, h


def draw_box(target: DrawTarget, x: int, y: int, w: int, h: int, palette: Palette) -> None:
    if w < 2 or h < 2:
        return
    fg, bg = palette.overlay_border, palette.overlay_bg
    for yy in range(y, y + h):
        put_text(target, x, yy, " " * w, palette.overlay_fg, bg)
    put_text(target, x, y, "┌" + "─" * (w - 2) + "┐", fg, bg)
    put_text(target, x, y + h - 1, "└" + "─" * (w - 2) + "┘", fg, bg)
    for yy in range(y + 1, y + h - 1):
        target.change_cell(x, yy, "│", fg, bg)
        target.change_cell(x + w - 1, yy, "│", fg, bg)


def draw_goto_overlay(
    session: HexSession, overlay: GotoOverlay, target: DrawTarget, palette: Palette
) -> None:
    x, y, w, h = overlay_box(session)
    draw_box(target, x, y, w, h, palette)
    fg, bg = palette.overlay_fg, palette.overlay_bg
    put_text(target, x + 5, y + 3, "Goto byte offset:", fg, bg)
    put_text(target, x + 5, y + 5, "> " + overlay.input, fg, bg)
    target.change_cell(x + 7 + len(overlay.input), y + 5, " ", palette.cursor_focus_fg, palette.cursor_focus_bg)


def draw_search_overlay(
    session: HexSession, overlay: SearchOverlay, target: DrawTarget, palette: Palette
) -> None:
    x, y, w, h = overlay_box(session)
    draw_box(target, x, y, w, h, palette)
    fg, bg = palette.overlay_fg, palette.overlay_bg
    mid = w // 2

    # Divider between the ascii (left) and hex (right) halves
    target.change_cell(x + mid, y, "┬", palette.overlay_border, bg)
    for yy in range(y + 1, y + h - 1):
        target.change_cell(x + mid, yy, "│", palette.overlay_border, bg)
    target.change_cell(x + mid, y + h - 1, "┴", palette.overlay_border, bg)
    put_text(target, x + 2, y, " ascii ", palette.overlay_border, bg)
    put_text(target, x + mid + 2, y, " hex ", palette.overlay_border, bg)

    focus = (palette.cursor_focus_fg, palette.cursor_focus_bg)
    nofocus = (palette.cursor_nofocus_fg, palette.cursor_nofocus_bg)
    pattern = overlay.pattern
    at_end = overlay.byte_cursor >= len(pattern)

    # ASCII half
    ascii_w = max(1, (w - 1) // 2)
    for i, byte in enumerate(pattern):
        target.change_cell(x + 1 + i % ascii_w, y + 1 + i // ascii_w, printable(byte), fg, bg)
    cur_fg, cur_bg = focus if overlay.mode is SearchMode.ASCII else nofocus
    glyph = " " if at_end else printable(pattern[overlay.byte_cursor])
    target.change_cell(
        x + 1 + overlay.byte_cursor % ascii_w,
        y + 1 + overlay.byte_cursor // ascii_w,
        glyph,
        cur_fg,
        cur_bg,
    )

    # Hex half
    hex_bpl = max(1, (mid - 1) // 3)
    for i, byte in enumerate(pattern):
        hx = x + mid + 1 + (i % hex_bpl) * 3
        hy = y + 1 + i // hex_bpl
        put_text(target, hx, hy, f"{byte:02X}", fg, bg)
    ls = overlay.nibble is Nibble.LS
    if at_end:
        glyph = " "
    else:
        byte = pattern[overlay.byte_cursor]
        glyph = HEX_CHARS[byte & 0x0F] if ls else HEX_CHARS[byte >> 4]
    cur_fg, cur_bg = focus if overlay.mode is SearchMode.HEX else nofocus
    target.change_cell(
        x + mid + 1 + (overlay.byte_cursor % hex_bpl) * 3 + (1 if ls else 0),
        y + 1 + overlay.byte_cursor // hex_bpl,
        glyph,
        cur_fg,
        cur_bg,
    )
