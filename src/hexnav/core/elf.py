"""Minimal ELF structure decoder.

Decodes the file header, the program header table and the section header table
(with section names resolved through the section name string table). Only used
for auxiliary display; the viewer works the same on non-ELF files.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, replace

ELF_MAGIC = b"\x7fELF"

OS_ABIS = {
    0x00: "System V",
    0x01: "HP-UX",
    0x02: "NetBSD",
    0x03: "Linux",
    0x06: "Solaris",
    0x07: "AIX",
    0x08: "IRIX",
    0x09: "FreeBSD",
    0x0C: "OpenBSD",
    0x0D: "OpenVMS",
}

OBJ_TYPES = {
    0: "none",
    1: "relocatable",
    2: "executable",
    3: "shared",
    4: "core",
}

MACHINES = {
    0x00: "none",
    0x02: "SPARC",
    0x03: "x86",
    0x08: "MIPS",
    0x14: "PowerPC",
    0x28: "ARM",
    0x2A: "SuperH",
    0x32: "IA-64",
    0x3E: "x86-64",
    0xB7: "AArch64",
    0xF3: "RISC-V",
}

SEGMENT_TYPES = {
    0: "NULL",
    1: "LOAD",
    2: "DYNAMIC",
    3: "INTERP",
    4: "NOTE",
    5: "SHLIB",
    6: "PHDR",
    7: "TLS",
    0x6474E550: "GNU_EH_FRAME",
    0x6474E551: "GNU_STACK",
    0x6474E552: "GNU_RELRO",
    0x6474E553: "GNU_PROPERTY",
}

SECTION_TYPES = {
    0: "NULL",
    1: "PROGBITS",
    2: "SYMTAB",
    3: "STRTAB",
    4: "RELA",
    5: "HASH",
    6: "DYNAMIC",
    7: "NOTE",
    8: "NOBITS",
    9: "REL",
    10: "SHLIB",
    11: "DYNSYM",
    14: "INIT_ARRAY",
    15: "FINI_ARRAY",
    16: "PREINIT_ARRAY",
    17: "GROUP",
    18: "SYMTAB_SHNDX",
}

# Field layouts after e_ident, without the endianness prefix
_HEADER_32 = "HHIIIIIHHHHHH"
_HEADER_64 = "HHIQQQIHHHHHH"
_PHDR_32 = "IIIIIIII"  # type offset vaddr paddr filesz memsz flags align
_PHDR_64 = "IIQQQQQQ"  # type flags offset vaddr paddr filesz memsz align
_SHDR_32 = "IIIIIIIIII"
_SHDR_64 = "IIQQQQIIQQ"


class ElfError(ValueError):
    """Raised when an ELF file is truncated or malformed."""


class NotElf(ElfError):
    """Raised when the data does not start with the ELF magic."""


def _name(table: dict[int, str], value: int) -> str:
    return table.get(value, f"0x{value:X}")


@dataclass(frozen=True)
class ProgramHeader:
    type: int
    flags: int
    offset: int
    vaddr: int
    paddr: int
    filesz: int
    memsz: int
    align: int

    @property
    def type_name(self) -> str:
        return _name(SEGMENT_TYPES, self.type)

    @property
    def flags_str(self) -> str:
        return "".join(c if self.flags & bit else "-" for c, bit in (("R", 4), ("W", 2), ("X", 1)))


@dataclass(frozen=True)
class SectionHeader:
    name_offset: int
    type: int
    flags: int
    addr: int
    offset: int
    size: int
    link: int
    info: int
    addralign: int
    entsize: int
    name: str = ""

    @property
    def type_name(self) -> str:
        return _name(SECTION_TYPES, self.type)


@dataclass(frozen=True)
class ElfHeader:
    bits: int  # 32 or 64
    endianness: str  # "little" or "big"
    os_abi: int
    obj_type: int
    machine: int
    version: int
    entry: int
    phoff: int
    shoff: int
    flags: int
    ehsize: int
    phentsize: int
    phnum: int
    shentsize: int
    shnum: int
    shstrndx: int

    @property
    def os_abi_name(self) -> str:
        return _name(OS_ABIS, self.os_abi)

    @property
    def obj_type_name(self) -> str:
        return _name(OBJ_TYPES, self.obj_type)

    @property
    def machine_name(self) -> str:
        return _name(MACHINES, self.machine)


@dataclass(frozen=True)
class ElfFile:
    header: ElfHeader
    program_headers: list[ProgramHeader] = field(default_factory=list)
    section_headers: list[SectionHeader] = field(default_factory=list)

    def summary(self) -> str:
        h = self.header
        return f"ELF{h.bits} {h.machine_name} {h.obj_type_name}"


def _unpack(fmt: str, data: bytes | memoryview, offset: int) -> tuple[int, ...]:
    try:
        return struct.unpack_from(fmt, data, offset)
    except struct.error as e:
        raise ElfError(f"truncated ELF structure at 0x{offset:X}") from e


def parse_header(data: bytes | memoryview) -> ElfHeader:
    if data[:4] != ELF_MAGIC:
        raise NotElf("missing ELF magic")
    if len(data) < 16:
        raise ElfError("truncated ELF identification")
    ei_class, ei_data, _ei_version, ei_osabi = data[4], data[5], data[6], data[7]
    if ei_class == 1:
        bits, layout = 32, _HEADER_32
    elif ei_class == 2:
        bits, layout = 64, _HEADER_64
    else:
        raise ElfError(f"invalid ELF class {ei_class}")
    if ei_data == 1:
        endianness, prefix = "little", "<"
    elif ei_data == 2:
        endianness, prefix = "big", ">"
    else:
        raise ElfError(f"invalid ELF data encoding {ei_data}")

    fields = _unpack(prefix + layout, data, 16)
    return ElfHeader(bits, endianness, ei_osabi, *fields)


def parse(data: bytes | memoryview) -> ElfFile:
    """Decode an ELF image. Raises `NotElf` or `ElfError`."""
    header = parse_header(data)
    prefix = "<" if header.endianness == "little" else ">"
    is64 = header.bits == 64

    phdrs: list[ProgramHeader] = []
    if header.phoff and header.phnum:
        fmt = prefix + (_PHDR_64 if is64 else _PHDR_32)
        for i in range(header.phnum):
            raw = _unpack(fmt, data, header.phoff + i * header.phentsize)
            if is64:
                p_type, p_flags, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz, p_align = raw
            else:
                p_type, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz, p_flags, p_align = raw
            phdrs.append(
                ProgramHeader(p_type, p_flags, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz, p_align)
            )

    shdrs: list[SectionHeader] = []
    if header.shoff and header.shnum:
        fmt = prefix + (_SHDR_64 if is64 else _SHDR_32)
        for i in range(header.shnum):
            shdrs.append(SectionHeader(*_unpack(fmt, data, header.shoff + i * header.shentsize)))
        if header.shstrndx < len(shdrs):
            strtab = shdrs[header.shstrndx]
            names = bytes(data[strtab.offset : strtab.offset + strtab.size])
            shdrs = [_with_name(sh, names) for sh in shdrs]

    return ElfFile(header, phdrs, shdrs)


def _with_name(sh: SectionHeader, names: bytes) -> SectionHeader:
    if sh.name_offset >= len(names):
        return sh
    end = names.find(b"\x00", sh.name_offset)
    raw = names[sh.name_offset : end if end != -1 else len(names)]
    return replace(sh, name=raw.decode("ascii", errors="replace"))
