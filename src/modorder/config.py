"""Host configuration (``openzt.toml``-style) for the command-line tool.

Only the ``[mod_loading]`` and ``[logging]`` sections are read::

    [mod_loading]
    order = ["finn.core", "finn.savanna"]
    disabled = ["old.mod"]
    auto_resolve_new_mods = true
    warn_on_conflicts = true

    [logging]
    level = "warn"

Every section and every field is optional; anything absent takes its
default, so an empty file is a valid configuration.  Unknown sections
are ignored.
"""
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from modorder.errors import ConfigError

logger = logging.getLogger(__name__)


class LogLevel(Enum):
    """Log level names accepted in the ``[logging]`` section."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    def to_logging_level(self) -> int:
        """Map to a stdlib ``logging`` level; ``trace`` has no equivalent and maps to DEBUG."""
        return {
            LogLevel.TRACE: logging.DEBUG,
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARN: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
        }[self]


@dataclass
class ModLoadingConfig:
    """The ``[mod_loading]`` section.

    Attributes
    ----------
    order:
        Persisted load order, user-controlled.
    disabled:
        Mods present on disk that must not be activated.
    auto_resolve_new_mods:
        When ``False``, newly discovered mods are reported but not
        inserted into the order.
    warn_on_conflicts:
        When ``False``, resolution warnings are not displayed.
    """

    order: list[str] = field(default_factory=list)
    disabled: list[str] = field(default_factory=list)
    auto_resolve_new_mods: bool = True
    warn_on_conflicts: bool = True


@dataclass
class LoggingConfig:
    """The ``[logging]`` section."""

    level: LogLevel = LogLevel.WARN


@dataclass
class ModOrderConfig:
    """The whole configuration document."""

    mod_loading: ModLoadingConfig = field(default_factory=ModLoadingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _section(data: dict[str, Any], name: str, path: Path | None) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table", path)
    return section


def _str_list(section: dict[str, Any], key: str, path: Path | None) -> list[str]:
    value = section.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' must be an array of strings", path)
    return list(value)


def _bool(section: dict[str, Any], key: str, default: bool, path: Path | None) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean", path)
    return value


def config_from_dict(data: dict[str, Any], path: Path | None = None) -> ModOrderConfig:
    """Build a ``ModOrderConfig`` from a decoded TOML document.

    Raises
    ------
    ConfigError
        If a present field has the wrong type or an unknown log level.
    """
    loading = _section(data, "mod_loading", path)
    log_section = _section(data, "logging", path)

    level_text = log_section.get("level", LogLevel.WARN.value)
    try:
        level = LogLevel(str(level_text).lower())
    except ValueError as exc:
        choices = ", ".join(lvl.value for lvl in LogLevel)
        raise ConfigError(f"unknown log level {level_text!r}; expected one of {choices}", path) from exc

    return ModOrderConfig(
        mod_loading=ModLoadingConfig(
            order=_str_list(loading, "order", path),
            disabled=_str_list(loading, "disabled", path),
            auto_resolve_new_mods=_bool(loading, "auto_resolve_new_mods", True, path),
            warn_on_conflicts=_bool(loading, "warn_on_conflicts", True, path),
        ),
        logging=LoggingConfig(level=level),
    )


def load_config(path: str | Path | None) -> ModOrderConfig:
    """Load the configuration file at ``path``.

    A ``None`` path or a file that does not exist yields the defaults.

    Raises
    ------
    ConfigError
        If the file cannot be read or is not valid TOML.
    """
    if path is None:
        return ModOrderConfig()

    config_path = Path(path)
    if not config_path.exists():
        logger.info("No configuration found at %s, using defaults", config_path)
        return ModOrderConfig()

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read file: {exc}", config_path) from exc

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}", config_path) from exc

    config = config_from_dict(data, config_path)
    logger.info("Loaded configuration from %s", config_path)
    return config
