"""Metadata records describing one mod and its declared dependencies.

Every record is a frozen dataclass so that metadata handed to the
resolver cannot be mutated while an ordering is being computed.  Only
``Meta.mod_id`` and ``Meta.dependencies`` take part in resolution; the
remaining fields are carried for display and validation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from modorder.errors import VersionParseError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Ordering(Enum):
    """Relative ordering requested by a dependency declaration.

    BEFORE
        The declaring mod must load before the target.
    AFTER
        The declaring mod must load after the target.
    NONE
        The target must exist, but no sequencing is implied.
    """

    BEFORE = "before"
    AFTER = "after"
    NONE = "none"


class IdentifierKind(Enum):
    """How a dependency names its target."""

    MOD_ID = "mod_id"
    ZTD_NAME = "ztd_name"
    DLL_NAME = "dll_name"


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True, slots=True)
class Version:
    """A ``major.minor.patch`` version number, compared field by field."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse ``"x.y.z"`` into a ``Version``.

        Raises
        ------
        VersionParseError
            If ``text`` does not have exactly three integer parts.
        """
        parts = text.strip().split(".")
        if len(parts) != 3:
            raise VersionParseError(text)
        try:
            major, minor, patch = (int(part) for part in parts)
        except ValueError as exc:
            raise VersionParseError(text, str(exc)) from exc
        if min(major, minor, patch) < 0:
            raise VersionParseError(text, "components must be non-negative")
        return cls(major=major, minor=minor, patch=patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


# ---------------------------------------------------------------------------
# Dependency / Meta
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Dependency:
    """One dependency declared by a mod.

    Parameters
    ----------
    target:
        The identifier of the depended-upon mod (a mod id, an archive
        name, or a DLL name depending on ``kind``).
    optional:
        Whether the mod still works when ``target`` is absent.
    ordering:
        Sequencing constraint between the declaring mod and ``target``.
    kind:
        How ``target`` should be interpreted.
    name:
        Display name of the dependency.
    min_version:
        Minimum acceptable version of ``target``.  Only meaningful for
        ``IdentifierKind.MOD_ID`` dependencies.
    """

    target: str
    optional: bool = False
    ordering: Ordering = Ordering.NONE
    kind: IdentifierKind = IdentifierKind.MOD_ID
    name: str = ""
    min_version: Version | None = None

    @property
    def is_ordering(self) -> bool:
        """Return True if this dependency constrains the load order."""
        return self.ordering is not Ordering.NONE and self.kind is not IdentifierKind.DLL_NAME


@dataclass(frozen=True, slots=True)
class Meta:
    """Metadata record for one discovered mod."""

    mod_id: str
    dependencies: tuple[Dependency, ...] = ()
    name: str = ""
    description: str = ""
    authors: tuple[str, ...] = ()
    version: Version = field(default_factory=lambda: Version(0, 0, 0))
    link: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.mod_id

    def dependencies_on(self, target: str) -> list[Dependency]:
        """Return every dependency of this mod that names ``target``."""
        return [d for d in self.dependencies if d.target == target]
