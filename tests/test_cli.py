from __future__ import annotations

import struct
from pathlib import Path

import pytest

pytest.importorskip("textual")

from hexnav.cli import main  # noqa: E402
from hexnav.core.config import CONFIG_ENV  # noqa: E402


@pytest.fixture(autouse=True)
def no_user_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(CONFIG_ENV, raising=False)


def write_elf(tmp_path: Path) -> Path:
    ident = b"\x7fELF" + bytes([2, 1, 1, 0]) + bytes(8)
    data = ident + struct.pack("<HHIQQQIHHHHHH", 3, 0xB7, 1, 0x1000, 0, 0, 0, 64, 56, 0, 64, 0, 0)
    p = tmp_path / "lib.so"
    p.write_bytes(data)
    return p


def test_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path / "missing.bin")]) == 2
    assert "file not found" in capsys.readouterr().err


def test_elf_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(write_elf(tmp_path)), "--elf"]) == 0
    out = capsys.readouterr().out
    assert "ELF header" in out
    assert "AArch64" in out
    assert "shared" in out


def test_elf_report_on_other_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "plain.bin"
    p.write_bytes(b"just some bytes")
    assert main([str(p), "--elf"]) == 1
    assert "not an ELF file" in capsys.readouterr().out


def test_elf_report_on_truncated_file(tmp_path: Path) -> None:
    p = tmp_path / "broken.so"
    p.write_bytes(write_elf(tmp_path).read_bytes()[:24])
    assert main([str(p), "--elf"]) == 1


def test_bad_settings_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("theme: neon\n", encoding="utf-8")
    assert main([str(write_elf(tmp_path)), "--config", str(cfg), "--elf"]) == 2
    assert "unknown theme" in capsys.readouterr().err


def test_unknown_theme_flag(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        main([str(write_elf(tmp_path)), "--theme", "neon"])
    assert exc.value.code == 2
