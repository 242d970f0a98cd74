from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from todotrack.domain.errors import ConfigError

ENV_PREFIX = "TODOTRACK_"
CONFIG_ENV_VAR = "TODOTRACK_CONFIG"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def default_config_path() -> Path:
    return Path.home() / ".config" / "todotrack" / "config"


@dataclass(frozen=True)
class Settings:
    list_file: Path
    unicode_glyphs: bool = False
    week_headers: bool = False
    log_level: str = "WARNING"
    log_dir: Path = Path.home() / ".local" / "state" / "todotrack"


KNOWN_KEYS = ("LIST_FILE", "UNICODE_GLYPHS", "WEEK_HEADERS", "LOG_LEVEL", "LOG_DIR")


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigError(f"{key} must be one of {sorted(TRUE_VALUES | FALSE_VALUES)}, got {raw!r}")


def _parse_path(key: str, raw: str) -> Path:
    if not raw.strip():
        raise ConfigError(f"{key} cannot be empty")
    return Path(raw.strip()).expanduser()


def _read_file(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    values: dict[str, str] = {}
    for key, value in dotenv_values(path).items():
        if key not in KNOWN_KEYS:
            raise ConfigError(f"unknown key {key!r} in {path}")
        if value is None:
            raise ConfigError(f"key {key!r} in {path} has no value")
        values[key] = value
    return values


def _read_env(environ: Mapping[str, str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for key in KNOWN_KEYS:
        raw = environ.get(ENV_PREFIX + key)
        if raw is not None:
            values[key] = raw
    return values


def resolve_config_path(explicit: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Path:
    environ = os.environ if environ is None else environ
    if explicit:
        return Path(explicit).expanduser()
    from_env = environ.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env).expanduser()
    return default_config_path()


def load_settings(config_path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Build the settings once: defaults, then the config file, then TODOTRACK_* variables."""
    environ = os.environ if environ is None else environ
    path = resolve_config_path(config_path, environ)
    raw = {**_read_file(path), **_read_env(environ)}

    log_level = raw.get("LOG_LEVEL", "WARNING").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {sorted(LOG_LEVELS)}, got {raw['LOG_LEVEL']!r}")

    settings = Settings(
        list_file=_parse_path("LIST_FILE", raw["LIST_FILE"]) if "LIST_FILE" in raw else Path.home() / ".todolist",
        unicode_glyphs=_parse_bool("UNICODE_GLYPHS", raw["UNICODE_GLYPHS"]) if "UNICODE_GLYPHS" in raw else False,
        week_headers=_parse_bool("WEEK_HEADERS", raw["WEEK_HEADERS"]) if "WEEK_HEADERS" in raw else False,
        log_level=log_level,
        log_dir=_parse_path("LOG_DIR", raw["LOG_DIR"]) if "LOG_DIR" in raw else Settings.log_dir,
    )
    logging.getLogger(__name__).debug("Settings loaded from %s: %s", path, settings)
    return settings
