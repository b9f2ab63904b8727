"""Dependency graph built from declared Before/After constraints.

The graph keeps two views of one edge set:

``before[X]``
    mods that X must load *after* (its prerequisites)
``after[X]``
    mods that X must load *before* (its successors)

A declaration ``A: before B`` yields ``after[A] ∋ B`` and ``before[B] ∋ A``;
``A: after B`` yields ``before[A] ∋ B`` and ``after[B] ∋ A``.  Edge targets
are not checked for existence here: a target may be a disabled or a
missing mod, and the inserter decides what to do with it.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field

from modorder.meta.models import Dependency, IdentifierKind, Meta, Ordering

logger = logging.getLogger(__name__)


@dataclass
class DependencyGraph:
    """Prerequisite/successor adjacency for one resolution call."""

    before: dict[str, list[str]] = field(default_factory=lambda: defaultdict(list))
    after: dict[str, list[str]] = field(default_factory=lambda: defaultdict(list))
    # Optional targets per mod.  Recorded for completeness; the inserter
    # re-reads optionality from the metadata instead.
    optional: dict[str, set[str]] = field(default_factory=lambda: defaultdict(set))

    def prerequisites(self, mod_id: str) -> list[str]:
        """Return the mods ``mod_id`` must load after."""
        return self.before.get(mod_id, [])

    def successors(self, mod_id: str) -> list[str]:
        """Return the mods ``mod_id`` must load before."""
        return self.after.get(mod_id, [])

    def add_edge(self, first: str, second: str) -> None:
        """Record that ``first`` must load before ``second``."""
        self.after[first].append(second)
        self.before[second].append(first)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.after.values())


def resolve_target(
    dependency: Dependency,
    aliases: Mapping[str, str] | None = None,
) -> str | None:
    """Map a dependency to the mod id it refers to.

    Returns ``None`` for DLL dependencies, which never take part in load
    ordering.  An archive name with no known alias resolves to itself so
    that it is later reported as missing.
    """
    if dependency.kind is IdentifierKind.DLL_NAME:
        return None
    if dependency.kind is IdentifierKind.ZTD_NAME:
        return (aliases or {}).get(dependency.target, dependency.target)
    return dependency.target


def build_dependency_graph(
    mods: Mapping[str, Meta],
    aliases: Mapping[str, str] | None = None,
) -> DependencyGraph:
    """Build the graph from the declarations of ``mods``.

    Parameters
    ----------
    mods:
        The *enabled* mods.  Only their declarations produce edges, but
        edges may point at any id.
    aliases:
        Archive name to mod id, for ``ztd_name`` dependencies.
    """
    graph = DependencyGraph()

    for mod_id, meta in mods.items():
        for dep in meta.dependencies:
            if dep.min_version is not None and dep.kind is not IdentifierKind.MOD_ID:
                logger.warning(
                    "Dependency %r (%s) of mod %r has min_version specified, which is only "
                    "supported for mod_id dependencies. Version will be ignored.",
                    dep.target,
                    dep.kind.value,
                    mod_id,
                )

            target = resolve_target(dep, aliases)
            if target is None:
                logger.debug("DLL dependency %r of mod %r does not affect load order", dep.target, mod_id)
                if dep.optional:
                    graph.optional[mod_id].add(dep.target)
                continue

            if dep.ordering is Ordering.BEFORE:
                graph.add_edge(mod_id, target)
            elif dep.ordering is Ordering.AFTER:
                graph.add_edge(target, mod_id)

            if dep.optional:
                graph.optional[mod_id].add(target)

    logger.debug("Built dependency graph with %d edge(s) over %d mod(s)", graph.edge_count, len(mods))
    return graph
