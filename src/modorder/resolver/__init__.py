"""Dependency resolution engine.

Exports the ``DependencyResolver`` orchestrator, the ``resolve_order``
convenience function, the building blocks it composes, and the
``ResolutionWarning`` union member types.
"""
from __future__ import annotations

from modorder.resolver.cycles import detect_cycles
from modorder.resolver.diagnostics import (
    CircularDependency,
    ConflictingConstraints,
    MissingOptionalDependency,
    MissingRequiredDependency,
    ResolutionResult,
    ResolutionWarning,
    Severity,
    WarningKind,
)
from modorder.resolver.graph import DependencyGraph, build_dependency_graph
from modorder.resolver.inserter import find_insert_position, insert_new_mods
from modorder.resolver.resolver import DependencyResolver, resolve_order

__all__ = [
    "DependencyResolver",
    "resolve_order",
    "DependencyGraph",
    "build_dependency_graph",
    "detect_cycles",
    "find_insert_position",
    "insert_new_mods",
    "ResolutionResult",
    "ResolutionWarning",
    "WarningKind",
    "Severity",
    "CircularDependency",
    "MissingOptionalDependency",
    "MissingRequiredDependency",
    "ConflictingConstraints",
]
