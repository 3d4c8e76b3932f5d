from __future__ import annotations

import os
from contextlib import suppress

try:
    import mmap as _mmap_mod  # type: ignore
except Exception:  # pragma: no cover - platform-specific
    _mmap_mod = None  # type: ignore


class InvalidOffset(ValueError):
    """Raised when an invalid (e.g., negative) offset is provided."""


class ByteBuffer:
    """Read-only bytes of the file being viewed.

    File-backed buffers prefer a read-only `mmap`; otherwise (or for empty files,
    which can't be mapped) the file is read once. The contents never change for
    the lifetime of the buffer.
    """

    def __init__(self, data: bytes | bytearray = b"", *, path: str = "") -> None:
        self._path = path
        self._data: bytes | memoryview = bytes(data)
        self._fh = None
        self._mmap = None

    @classmethod
    def from_path(cls, path: str, *, use_mmap: bool = True) -> ByteBuffer:
        try:
            st = os.stat(path)
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None

        buf = cls(path=path)
        size = int(st.st_size)
        buf._fh = open(path, "rb", buffering=0)  # noqa: SIM115
        if use_mmap and _mmap_mod is not None and size > 0:
            try:
                buf._mmap = _mmap_mod.mmap(buf._fh.fileno(), length=0, access=_mmap_mod.ACCESS_READ)
            except Exception:
                # Fall back to reading the file if mmap fails.
                buf._mmap = None
        if buf._mmap is not None:
            buf._data = memoryview(buf._mmap)
        else:
            buf._data = buf._fh.read()
            with suppress(Exception):
                buf._fh.close()
            buf._fh = None
        return buf

    def close(self) -> None:
        if isinstance(self._data, memoryview):
            self._data.release()
            self._data = b""
        if self._mmap is not None:
            with suppress(Exception):
                self._mmap.close()
            self._mmap = None
        if self._fh is not None:
            with suppress(Exception):
                self._fh.close()
            self._fh = None

    def __enter__(self) -> ByteBuffer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._data)

    @property
    def size(self) -> int:
        """Buffer size in bytes."""
        return len(self._data)

    @property
    def path(self) -> str:
        return self._path

    def find(self, pattern: bytes, start: int = 0) -> int:
        if self._mmap is not None:
            return self._mmap.find(pattern, start)
        return self._data.find(pattern, start)  # type: ignore[union-attr]

    def read(self, offset: int, length: int) -> bytes:
        """Read up to `length` bytes starting at `offset`.

        - Negative `offset` or `length` raises `InvalidOffset`.
        - If `offset` >= size, returns b"".
        - Reading past the end returns the truncated data.
        """
        if offset < 0:
            raise InvalidOffset("offset must be >= 0")
        if length < 0:
            raise InvalidOffset("length must be >= 0")
        if length == 0 or offset >= self.size:
            return b""
        return bytes(self._data[offset : min(self.size, offset + length)])

    def byte_at(self, offset: int) -> int | None:
        """Return the byte value at `offset`, or None past the end."""
        if offset < 0:
            raise InvalidOffset("offset must be >= 0")
        if offset >= self.size:
            return None
        return self._data[offset]

    def slice(self, offset: int, length: int) -> memoryview | bytes:
        """Return a cheap slice view when possible, else bytes.

        - Negative `offset`/`length` raises `InvalidOffset`.
        - If `offset` >= size, returns empty bytes.
        - Truncates at the end of the buffer.
        """
        if offset < 0:
            raise InvalidOffset("offset must be >= 0")
        if length < 0:
            raise InvalidOffset("length must be >= 0")
        if length == 0 or offset >= self.size:
            return b""
        return self._data[offset : min(self.size, offset + length)]
