"""Diagnostic types for the load-order validator.

A ``Diagnostic`` is an annotated message attached to one mod of the
order being checked.  Unlike resolution warnings, diagnostics carry a
severity so that CI-style callers can fail on errors.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics, aligned with LSP conventions."""

    ERROR = auto()
    WARNING = auto()
    INFORMATION = auto()
    HINT = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding.

    Parameters
    ----------
    severity:
        How serious this finding is.
    code:
        A short machine-readable identifier, e.g. ``"MOD001"``.
    message:
        Human-readable description of the problem.
    mod_id:
        The mod the finding is about.
    position:
        Index of ``mod_id`` in the checked order, or ``-1`` when the
        finding is not tied to one slot.
    suggestion:
        Optional human-readable fix suggestion.
    rule:
        The rule name that produced this diagnostic.
    """

    severity: DiagnosticSeverity
    code: str
    message: str
    mod_id: str
    position: int = field(default=-1)
    suggestion: str | None = field(default=None)
    rule: str = field(default="")

    def __str__(self) -> str:
        loc = f"#{self.position}" if self.position >= 0 else "-"
        prefix = f"[{self.code}] {self.severity.name}"
        suggestion_part = f" (hint: {self.suggestion})" if self.suggestion else ""
        return f"{prefix} at {loc}: {self.message}{suggestion_part}"

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic should fail validation."""
        return self.severity == DiagnosticSeverity.ERROR
