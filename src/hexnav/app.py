from __future__ import annotations

import logging
import os

from textual.app import App, ComposeResult
from textual.screen import ModalScreen
from textual.widgets import Static

from hexnav.core import elf
from hexnav.core.config import Settings
from hexnav.core.io import ByteBuffer
from hexnav.core.session import HexSession
from hexnav.ui.palette import get_palette
from hexnav.widgets.hex_pane import HexPane

logger = logging.getLogger(__name__)


def detect_elf(buffer: ByteBuffer) -> str | None:
    """Short ELF description for the info line, or None for other files."""
    try:
        info = elf.parse(buffer.slice(0, buffer.size))
    except elf.ElfError as e:
        if not isinstance(e, elf.NotElf):
            logger.debug("not decoding ELF structure: %s", e)
        return None
    logger.debug("detected %s", info.summary())
    return info.summary()


class HexnavApp(App):
    """Textual application shell for hexnav."""

    CSS = """
    HexPane {
        width: 1fr;
        height: 1fr;
    }
    HelpScreen {
        align: center middle;
    }
    HelpScreen > Static {
        width: auto;
        padding: 1 2;
        border: round $accent;
        background: $panel;
    }
    """

    def __init__(self, path: str, *, settings: Settings | None = None) -> None:
        super().__init__()
        self._path = path
        self._settings = settings or Settings()
        self._buffer: ByteBuffer | None = None
        self.session: HexSession | None = None
        self.hex_pane: HexPane | None = None
        self.title = f"hexnav - {os.path.basename(path)}"

    def compose(self) -> ComposeResult:  # noqa: D401 - Textual API
        # Delay opening until compose to give clear UI errors
        try:
            self._buffer = ByteBuffer.from_path(self._path)
        except FileNotFoundError:
            yield Static(f"Error: file not found: {self._path}")
            return

        # Real dimensions arrive with the first resize
        self.session = HexSession(
            self._buffer,
            self._path,
            80,
            24,
            page_lines=self._settings.page_lines,
            elf_tag=detect_elf(self._buffer),
        )
        self.hex_pane = HexPane(self.session, palette=get_palette(self._settings.theme))
        yield self.hex_pane

    def on_mount(self) -> None:
        if self.hex_pane is not None:
            self.set_focus(self.hex_pane)

    def on_unmount(self) -> None:
        if self._buffer is not None:
            self._buffer.close()

    def action_open_help(self) -> None:
        self.push_screen(HelpScreen())


class HelpScreen(ModalScreen[None]):
    def compose(self) -> ComposeResult:  # type: ignore[override]
        text = (
            "Navigation: h/j/k/l, arrows\n"
            "Pages: Ctrl+D / Ctrl+U (PgDn / PgUp), G end of file\n"
            "Goto: g, then a decimal offset and Enter (g again: start of file)\n"
            "Search: / then type; Tab switches ASCII/hex entry, Enter highlights\n"
            "Matches: n next, N previous\n"
            "View: zz centre the cursor line\n"
            "Quit: q"
        )
        yield Static(text)

    def on_key(self, event) -> None:  # type: ignore[override]
        if event.key in {"escape", "enter", "q", "question_mark"}:
            self.dismiss(None)
