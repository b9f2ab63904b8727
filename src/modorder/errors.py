"""Exception hierarchy for mod-order.

The resolver itself never raises for dependency problems (those are
reported as ``ResolutionWarning`` values).  The exceptions below cover
the outer layers: reading metadata files, parsing version strings, and
loading the host configuration.
"""
from __future__ import annotations

from pathlib import Path


class ModOrderError(Exception):
    """Base class for every error raised by mod-order."""


class VersionParseError(ModOrderError, ValueError):
    """Raised when a version string is not of the form ``x.y.z``."""

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Invalid version string {text!r} (expected 'x.y.z' e.g. '1.0.0'){detail}"
        )


class MetaParseError(ModOrderError):
    """Raised when a mod metadata record cannot be turned into a ``Meta``.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    path:
        The file the record came from, when known.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        location = f"{path}: " if path is not None else ""
        super().__init__(f"{location}{message}")


class ConfigError(ModOrderError):
    """Raised when the host configuration file is unreadable or malformed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        location = f"{path}: " if path is not None else ""
        super().__init__(f"{location}{message}")
