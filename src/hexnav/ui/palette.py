from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    # None means the terminal default
    text_fg: str | None
    text_bg: str | None
    frame_fg: str
    gutter_fg: str
    gutter_cursor_fg: str
    cursor_focus_fg: str
    cursor_focus_bg: str
    cursor_nofocus_fg: str
    cursor_nofocus_bg: str
    highlight_fg: str
    highlight_bg: str
    status_bar_fg: str
    status_bar_bg: str
    overlay_fg: str
    overlay_bg: str
    overlay_border: str


DEFAULT = Palette(
    text_fg="#d8dee9",
    text_bg=None,
    frame_fg="#3b4252",
    gutter_fg="#8892a0",
    gutter_cursor_fg="#ffa657",
    cursor_focus_fg="#ffffff",
    cursor_focus_bg="#2e7d32",
    cursor_nofocus_fg="#ffffff",
    cursor_nofocus_bg="#b36b00",
    highlight_fg="#0f1117",
    highlight_bg="#5ea1ff",
    status_bar_fg="#ffffff",
    status_bar_bg="#9b2c2c",
    overlay_fg="#d8dee9",
    overlay_bg="#1f2430",
    overlay_border="#5ea1ff",
)

DIM = Palette(
    text_fg="#cccccc",
    text_bg=None,
    frame_fg="#444444",
    gutter_fg="#777777",
    gutter_cursor_fg="#bbbbbb",
    cursor_focus_fg="#ffffff",
    cursor_focus_bg="#555555",
    cursor_nofocus_fg="#ffffff",
    cursor_nofocus_bg="#7a7a7a",
    highlight_fg="#000000",
    highlight_bg="#a0a0a0",
    status_bar_fg="#cccccc",
    status_bar_bg="#2b2b2b",
    overlay_fg="#e0e0e0",
    overlay_bg="#1a1a1a",
    overlay_border="#888888",
)

HIGH_CONTRAST = Palette(
    text_fg="#ffffff",
    text_bg="#000000",
    frame_fg="#888888",
    gutter_fg="#aaaaaa",
    gutter_cursor_fg="#ffff00",
    cursor_focus_fg="#000000",
    cursor_focus_bg="#00ff00",
    cursor_nofocus_fg="#000000",
    cursor_nofocus_bg="#ffff00",
    highlight_fg="#000000",
    highlight_bg="#00ffff",
    status_bar_fg="#ffffff",
    status_bar_bg="#ff0000",
    overlay_fg="#ffffff",
    overlay_bg="#000000",
    overlay_border="#00ffff",
)

THEMES = {
    "default": DEFAULT,
    "dim": DIM,
    "high_contrast": HIGH_CONTRAST,
}

# Selected palette for now
PALETTE = DEFAULT


def get_palette(name: str) -> Palette:
    return THEMES.get(name, DEFAULT)
