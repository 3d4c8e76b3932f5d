from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

CONFIG_ENV = "HEXNAV_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/hexnav/config.yaml")

THEMES = ("default", "dim", "high_contrast")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when a settings file can't be read or holds invalid values."""


@dataclass(frozen=True)
class Settings:
    theme: str = "default"
    page_lines: int = 10
    log_file: str | None = None
    log_level: str = "WARNING"

    def validate(self) -> Settings:
        if self.theme not in THEMES:
            raise ConfigError(f"unknown theme {self.theme!r} (expected one of {', '.join(THEMES)})")
        if isinstance(self.page_lines, bool) or not isinstance(self.page_lines, int) or self.page_lines <= 0:
            raise ConfigError("page_lines must be a positive integer")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigError("log_file must be a path")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {self.log_level!r}")
        return replace(self, log_level=self.log_level.upper())

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def resolve_config_path(path: str | None = None) -> Path | None:
    """Pick the settings file: explicit path, then $HEXNAV_CONFIG, then the default if it exists."""
    if path:
        return Path(path).expanduser()
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.exists() else None


def load_settings(path: str | None = None) -> Settings:
    cfg_path = resolve_config_path(path)
    if cfg_path is None:
        return Settings()
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read settings file {cfg_path}: {e}") from e
    return parse_settings(text, source=str(cfg_path))


def parse_settings(text: str, *, source: str = "<string>") -> Settings:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {source}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: settings must be a mapping")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(str(k) for k in set(data) - known)
    if unknown:
        raise ConfigError(f"{source}: unknown setting(s): {', '.join(unknown)}")
    return Settings(**data).validate()
