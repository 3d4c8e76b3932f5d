from __future__ import annotations

from rich.table import Table

from hexnav.core.elf import ElfFile
from hexnav.ui.palette import PALETTE


def header_table(info: ElfFile) -> Table:
    h = info.header
    table = Table(title="ELF header", show_header=False, title_style=f"bold {PALETTE.overlay_border}")
    table.add_column("field", style=PALETTE.gutter_fg)
    table.add_column("value")
    rows = [
        ("class", f"ELF{h.bits}"),
        ("data", f"{h.endianness} endian"),
        ("OS/ABI", h.os_abi_name),
        ("type", h.obj_type_name),
        ("machine", h.machine_name),
        ("entry", f"0x{h.entry:X}"),
        ("program headers", f"{h.phnum} at 0x{h.phoff:X}"),
        ("section headers", f"{h.shnum} at 0x{h.shoff:X}"),
        ("flags", f"0x{h.flags:X}"),
    ]
    for name, value in rows:
        table.add_row(name, value)
    return table


def program_header_table(info: ElfFile) -> Table:
    table = Table(title="Program headers", title_style=f"bold {PALETTE.overlay_border}")
    for col in ("type", "flags", "offset", "vaddr", "filesz", "memsz", "align"):
        table.add_column(col, justify="left" if col in ("type", "flags") else "right")
    for ph in info.program_headers:
        table.add_row(
            ph.type_name,
            ph.flags_str,
            f"0x{ph.offset:X}",
            f"0x{ph.vaddr:X}",
            f"0x{ph.filesz:X}",
            f"0x{ph.memsz:X}",
            f"0x{ph.align:X}",
        )
    return table


def section_header_table(info: ElfFile) -> Table:
    table = Table(title="Section headers", title_style=f"bold {PALETTE.overlay_border}")
    for col in ("#", "name", "type", "addr", "offset", "size"):
        table.add_column(col, justify="left" if col in ("name", "type") else "right")
    for i, sh in enumerate(info.section_headers):
        table.add_row(
            str(i),
            sh.name,
            sh.type_name,
            f"0x{sh.addr:X}",
            f"0x{sh.offset:X}",
            f"0x{sh.size:X}",
        )
    return table


def elf_tables(info: ElfFile) -> list[Table]:
    tables = [header_table(info)]
    if info.program_headers:
        tables.append(program_header_table(info))
    if info.section_headers:
        tables.append(section_header_table(info))
    return tables
