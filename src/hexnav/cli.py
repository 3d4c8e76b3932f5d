from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace

from rich.console import Console

from hexnav.app import HexnavApp
from hexnav.core import elf
from hexnav.core.config import THEMES, ConfigError, Settings, load_settings
from hexnav.core.io import ByteBuffer
from hexnav.ui.elf_table import elf_tables


def configure_logging(settings: Settings) -> None:
    # Never log to the terminal: it belongs to the TUI
    logger = logging.getLogger("hexnav")
    if settings.log_file:
        handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(settings.log_level_value)
    else:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False


def print_elf(path: str) -> int:
    console = Console()
    with ByteBuffer.from_path(path) as buffer:
        try:
            info = elf.parse(buffer.read(0, buffer.size))
        except elf.NotElf:
            console.print(f"hexnav: not an ELF file: {path}", style="red")
            return 1
        except elf.ElfError as e:
            console.print(f"hexnav: malformed ELF file: {e}", style="red")
            return 1
    for table in elf_tables(info):
        console.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="hexnav", description="hexnav hex/ASCII file viewer (Textual)")
    parser.add_argument("path", help="Path to binary file")
    parser.add_argument("--config", help="Settings file (YAML)")
    parser.add_argument("--theme", choices=THEMES, help="Colour theme")
    parser.add_argument("--elf", action="store_true", help="Print the ELF structure and exit")
    args = parser.parse_args(argv)

    if not os.path.exists(args.path):
        print(f"hexnav: file not found: {args.path}", file=sys.stderr)
        return 2

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"hexnav: {e}", file=sys.stderr)
        return 2
    if args.theme:
        settings = replace(settings, theme=args.theme)
    configure_logging(settings)

    if args.elf:
        return print_elf(args.path)

    app = HexnavApp(args.path, settings=settings)
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
