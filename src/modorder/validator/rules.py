"""Individual validation rules for the load-order validator.

Each rule is a callable that accepts a ``LoadOrderContext`` and returns
a list of ``Diagnostic`` objects.  Rules are composed into the
``Validator`` class which runs them all and aggregates results.

Rule codes use the ``MOD`` prefix followed by a three-digit number:

    MOD001  Required dependency missing
    MOD002  Optional dependency missing
    MOD003  Installed dependency older than min_version
    MOD004  Before/After constraint violated by the order
    MOD005  Mod in the order but not installed
    MOD006  Circular dependency among ordered mods

Only ``mod_id`` dependencies are checked: archive-name and DLL
dependencies cannot be mapped to a mod id without discovery data.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Callable

from modorder.meta.models import Dependency, IdentifierKind, Meta, Ordering
from modorder.resolver.cycles import detect_cycles
from modorder.resolver.graph import build_dependency_graph
from modorder.validator.diagnostics import Diagnostic, DiagnosticSeverity


@dataclass(frozen=True)
class LoadOrderContext:
    """The order under validation together with the installed mods."""

    order: tuple[str, ...]
    mods: Mapping[str, Meta]
    positions: dict[str, int] = field(default_factory=dict)

    @classmethod
    def build(cls, order: Sequence[str], mods: Mapping[str, Meta]) -> "LoadOrderContext":
        positions: dict[str, int] = {}
        for index, mod_id in enumerate(order):
            positions.setdefault(mod_id, index)
        return cls(order=tuple(order), mods=mods, positions=positions)

    def ordered_mods(self) -> list[tuple[int, str, Meta]]:
        """Return ``(position, mod_id, meta)`` for every installed mod in the order."""
        return [
            (index, mod_id, self.mods[mod_id])
            for index, mod_id in enumerate(self.order)
            if mod_id in self.mods
        ]


Rule = Callable[[LoadOrderContext], list[Diagnostic]]


def _mod_id_dependencies(meta: Meta) -> list[Dependency]:
    return [d for d in meta.dependencies if d.kind is IdentifierKind.MOD_ID]


def _make(
    code: str,
    severity: DiagnosticSeverity,
    message: str,
    mod_id: str,
    position: int,
    suggestion: str | None = None,
    rule: str = "",
) -> Diagnostic:
    return Diagnostic(
        severity=severity,
        code=code,
        message=message,
        mod_id=mod_id,
        position=position,
        suggestion=suggestion,
        rule=rule,
    )


# ---------------------------------------------------------------------------
# MOD001 / MOD002 — missing dependencies
# ---------------------------------------------------------------------------

def rule_missing_dependencies(ctx: LoadOrderContext) -> list[Diagnostic]:
    """MOD001/MOD002: Every mod_id dependency must be installed."""
    diagnostics: list[Diagnostic] = []
    for position, mod_id, meta in ctx.ordered_mods():
        for dep in _mod_id_dependencies(meta):
            if dep.target in ctx.mods:
                continue
            if dep.optional:
                diagnostics.append(_make(
                    "MOD002",
                    DiagnosticSeverity.INFORMATION,
                    f"Mod {mod_id!r} has optional dependency {dep.target!r} which is not present",
                    mod_id,
                    position,
                    rule="missing_dependencies",
                ))
            else:
                diagnostics.append(_make(
                    "MOD001",
                    DiagnosticSeverity.ERROR,
                    f"Mod {mod_id!r} requires missing dependency {dep.target!r}",
                    mod_id,
                    position,
                    suggestion=f"Install {dep.name or dep.target!r} or disable {mod_id!r}",
                    rule="missing_dependencies",
                ))
    return diagnostics


# ---------------------------------------------------------------------------
# MOD003 — version mismatch
# ---------------------------------------------------------------------------

def rule_version_mismatch(ctx: LoadOrderContext) -> list[Diagnostic]:
    """MOD003: Installed dependencies must satisfy min_version."""
    diagnostics: list[Diagnostic] = []
    for position, mod_id, meta in ctx.ordered_mods():
        for dep in _mod_id_dependencies(meta):
            if dep.min_version is None or dep.target not in ctx.mods:
                continue
            found = ctx.mods[dep.target].version
            if found < dep.min_version:
                diagnostics.append(_make(
                    "MOD003",
                    DiagnosticSeverity.WARNING,
                    f"Mod {mod_id!r} requires {dep.target!r} >= {dep.min_version}, "
                    f"but found version {found}",
                    mod_id,
                    position,
                    suggestion=f"Update {dep.target!r} to version {dep.min_version} or later",
                    rule="version_mismatch",
                ))
    return diagnostics


# ---------------------------------------------------------------------------
# MOD004 — ordering violations
# ---------------------------------------------------------------------------

def rule_ordering_violations(ctx: LoadOrderContext) -> list[Diagnostic]:
    """MOD004: Before/After declarations must hold in the order."""
    diagnostics: list[Diagnostic] = []
    for position, mod_id, meta in ctx.ordered_mods():
        for dep in _mod_id_dependencies(meta):
            other = ctx.positions.get(dep.target)
            if other is None:
                continue
            if dep.ordering is Ordering.AFTER and position < other:
                relation = "after"
            elif dep.ordering is Ordering.BEFORE and position > other:
                relation = "before"
            else:
                continue
            diagnostics.append(_make(
                "MOD004",
                DiagnosticSeverity.WARNING,
                f"Mod {mod_id!r} at position {position} should load {relation} "
                f"{dep.target!r} (currently at position {other})",
                mod_id,
                position,
                suggestion=f"Adjust the order of {mod_id!r} relative to {dep.target!r}",
                rule="ordering_violations",
            ))
    return diagnostics


# ---------------------------------------------------------------------------
# MOD005 — unknown mods in the order
# ---------------------------------------------------------------------------

def rule_unknown_mods(ctx: LoadOrderContext) -> list[Diagnostic]:
    """MOD005: Every mod in the order should be installed."""
    return [
        _make(
            "MOD005",
            DiagnosticSeverity.WARNING,
            f"Mod {mod_id!r} is in the load order but was not found in available mods",
            mod_id,
            position,
            suggestion="Remove it from the order or reinstall it",
            rule="unknown_mods",
        )
        for position, mod_id in enumerate(ctx.order)
        if mod_id not in ctx.mods
    ]


# ---------------------------------------------------------------------------
# MOD006 — circular dependencies
# ---------------------------------------------------------------------------

def rule_circular_dependencies(ctx: LoadOrderContext) -> list[Diagnostic]:
    """MOD006: Ordered mods must not form an ordering cycle."""
    ordered = {mod_id: meta for _, mod_id, meta in ctx.ordered_mods()}
    graph = build_dependency_graph(ordered)
    diagnostics: list[Diagnostic] = []
    for cycle in detect_cycles(graph, sorted(ordered)):
        members = sorted(cycle, key=lambda mid: ctx.positions[mid])
        first = members[0]
        diagnostics.append(_make(
            "MOD006",
            DiagnosticSeverity.ERROR,
            f"Circular dependency detected: {' -> '.join(members)}",
            first,
            ctx.positions[first],
            suggestion="Remove one of the before/after declarations in the cycle",
            rule="circular_dependencies",
        ))
    return diagnostics


DEFAULT_RULES: list[Rule] = [
    rule_missing_dependencies,
    rule_version_mismatch,
    rule_ordering_violations,
    rule_unknown_mods,
    rule_circular_dependencies,
]
