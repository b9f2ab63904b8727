"""Warning and result types produced by the dependency resolver.

``ResolutionWarning`` is a closed union of four frozen dataclasses, each
tagged with a ``WarningKind``.  Warnings are pure data: the resolver
never raises for dependency problems, it reports them here and always
returns a usable order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union


class WarningKind(Enum):
    """Discriminator for the ``ResolutionWarning`` union."""

    CIRCULAR_DEPENDENCY = auto()
    MISSING_OPTIONAL_DEPENDENCY = auto()
    MISSING_REQUIRED_DEPENDENCY = auto()
    CONFLICTING_CONSTRAINTS = auto()


class Severity(Enum):
    """Display severity of a warning.  Never used to abort resolution."""

    WARNING = auto()
    INFORMATION = auto()


@dataclass(frozen=True)
class CircularDependency:
    """New mods that depend on each other in a loop.

    They are appended to the end of the order in alphabetical order.
    """

    cycle: tuple[str, ...] = ()
    kind: WarningKind = field(default=WarningKind.CIRCULAR_DEPENDENCY, init=False)

    @property
    def severity(self) -> Severity:
        return Severity.WARNING

    def __str__(self) -> str:
        return f"Circular dependency between {', '.join(self.cycle)}"


@dataclass(frozen=True)
class MissingOptionalDependency:
    """An optional prerequisite of ``mod_id`` is not installed."""

    mod_id: str = ""
    missing: str = ""
    kind: WarningKind = field(default=WarningKind.MISSING_OPTIONAL_DEPENDENCY, init=False)

    @property
    def severity(self) -> Severity:
        return Severity.INFORMATION

    def __str__(self) -> str:
        return f"Mod '{self.mod_id}' has optional dependency '{self.missing}' which is not present"


@dataclass(frozen=True)
class MissingRequiredDependency:
    """A required prerequisite of ``mod_id`` is not installed."""

    mod_id: str = ""
    missing: str = ""
    kind: WarningKind = field(default=WarningKind.MISSING_REQUIRED_DEPENDENCY, init=False)

    @property
    def severity(self) -> Severity:
        return Severity.WARNING

    def __str__(self) -> str:
        return f"Mod '{self.mod_id}' requires missing dependency '{self.missing}'"


@dataclass(frozen=True)
class ConflictingConstraints:
    """No slot satisfies every constraint on ``mod_id``; it was placed last."""

    mod_id: str = ""
    details: str = ""
    kind: WarningKind = field(default=WarningKind.CONFLICTING_CONSTRAINTS, init=False)

    @property
    def severity(self) -> Severity:
        return Severity.WARNING

    def __str__(self) -> str:
        return f"Conflicting dependency constraints for mod '{self.mod_id}': {self.details}"


ResolutionWarning = Union[
    CircularDependency,
    MissingOptionalDependency,
    MissingRequiredDependency,
    ConflictingConstraints,
]


@dataclass(frozen=True)
class ResolutionResult:
    """Final load order plus every warning raised while computing it.

    Parameters
    ----------
    order:
        Mod ids in load order.  Contains no duplicates.
    warnings:
        Diagnostics for the host to log or display.
    """

    order: list[str] = field(default_factory=list)
    warnings: list[ResolutionWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def warnings_of(self, kind: WarningKind) -> list[ResolutionWarning]:
        """Return the warnings whose ``kind`` equals ``kind``."""
        return [w for w in self.warnings if w.kind is kind]
