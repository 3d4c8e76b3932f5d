from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hexnav.core.config import CONFIG_ENV, ConfigError, Settings, load_settings, parse_settings


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    return home


def test_defaults() -> None:
    s = Settings()
    assert s.theme == "default"
    assert s.page_lines == 10
    assert s.log_file is None
    assert s.log_level == "WARNING"
    assert s.log_level_value == logging.WARNING


def test_parse_empty_document() -> None:
    assert parse_settings("") == Settings()
    assert parse_settings("# nothing here\n") == Settings()


def test_parse_values() -> None:
    s = parse_settings("theme: dim\npage_lines: 25\nlog_file: /tmp/hexnav.log\nlog_level: debug\n")
    assert s.theme == "dim"
    assert s.page_lines == 25
    assert s.log_file == "/tmp/hexnav.log"
    assert s.log_level == "DEBUG"
    assert s.log_level_value == logging.DEBUG


@pytest.mark.parametrize(
    "text",
    [
        "theme: neon\n",
        "page_lines: 0\n",
        "page_lines: -3\n",
        "page_lines: ten\n",
        "page_lines: true\n",
        "log_level: chatty\n",
        "log_file: 12\n",
        "colour: red\n",
        "- theme\n- dim\n",
        "theme: [unclosed\n",
    ],
)
def test_parse_rejects_bad_settings(text: str) -> None:
    with pytest.raises(ConfigError):
        parse_settings(text, source="cfg.yaml")


def test_unknown_keys_are_named() -> None:
    with pytest.raises(ConfigError, match="colour"):
        parse_settings("colour: red\ntheme: dim\n")


def test_load_explicit_path(tmp_path: Path) -> None:
    p = tmp_path / "hexnav.yaml"
    p.write_text("theme: high_contrast\n", encoding="utf-8")
    assert load_settings(str(p)).theme == "high_contrast"


def test_load_missing_explicit_path(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / "nope.yaml"))


def test_load_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    p = tmp_path / "env.yaml"
    p.write_text("page_lines: 3\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(p))
    assert load_settings().page_lines == 3


def test_explicit_path_beats_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env = tmp_path / "env.yaml"
    env.write_text("page_lines: 3\n", encoding="utf-8")
    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("page_lines: 7\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(env))
    assert load_settings(str(explicit)).page_lines == 7


def test_default_location(isolated_home: Path) -> None:
    assert load_settings() == Settings()
    cfg = isolated_home / ".config" / "hexnav" / "config.yaml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text("theme: dim\n", encoding="utf-8")
    assert load_settings().theme == "dim"
