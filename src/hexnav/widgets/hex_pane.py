from __future__ import annotations

from rich.text import Text
from textual.widget import Widget

from hexnav.core.render import draw_session
from hexnav.core.session import HexSession
from hexnav.ui.canvas import Canvas
from hexnav.ui.palette import PALETTE, Palette

# Keys passed on by name; any other printable key is passed as its character
NAMED_KEYS = frozenset(
    {
        "enter",
        "escape",
        "tab",
        "backspace",
        "up",
        "down",
        "left",
        "right",
        "pageup",
        "pagedown",
        "ctrl+d",
        "ctrl+u",
    }
)


def key_token(event) -> str:  # type: ignore[no-untyped-def]
    """Reduce a Textual key event to the token the session understands."""
    key = event.key
    if key in NAMED_KEYS:
        return key
    if event.is_printable and event.character:
        return event.character
    return key


class HexPane(Widget):
    """Full-screen viewer: address gutter, hex grid, ascii pane and info line.

    All state lives in the `HexSession`; the widget only forwards keys and paints
    the session into a `Canvas` on every render.
    """

    can_focus = True

    def __init__(self, session: HexSession, *, palette: Palette = PALETTE) -> None:
        super().__init__()
        self.session = session
        self.palette = palette

    def _sync_size(self) -> None:
        w, h = self.size.width, self.size.height
        if w and h:
            self.session.resize(w, h)

    def on_resize(self, event) -> None:  # type: ignore[override]
        self._sync_size()
        self.refresh()

    def on_focus(self, event) -> None:  # type: ignore[override]
        self.session.has_focus = True
        self.refresh()

    def on_blur(self, event) -> None:  # type: ignore[override]
        self.session.has_focus = False
        self.refresh()

    def render(self) -> Text:
        self._sync_size()
        canvas = Canvas(self.session.width, self.session.height)
        draw_session(self.session, canvas, self.palette)
        return canvas.to_text()

    def on_key(self, event) -> None:  # type: ignore[override]
        token = key_token(event)
        event.prevent_default()
        event.stop()
        if token == "?" and self.session.overlay is None:
            if hasattr(self.app, "action_open_help"):
                self.app.action_open_help()  # type: ignore[attr-defined]
            return
        if self.session.keypressed(token):
            self.app.exit()
            return
        self.refresh()
