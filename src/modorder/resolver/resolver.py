"""Dependency resolver: computes the final mod load order.

``DependencyResolver`` composes the graph builder, the cycle detector
and the inserter.  The user's existing order is kept as-is (minus mods
that no longer exist); only newly discovered mods are placed, so a
hand-edited order survives every run.

Usage
-----
::

    from modorder.resolver import DependencyResolver

    resolver = DependencyResolver(mods)
    result = resolver.resolve_order(existing_order, disabled_mods)
    for warning in result.warnings:
        print(warning)
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from modorder.meta.models import Meta
from modorder.resolver.cycles import detect_cycles
from modorder.resolver.diagnostics import (
    CircularDependency,
    ResolutionResult,
    ResolutionWarning,
)
from modorder.resolver.graph import build_dependency_graph
from modorder.resolver.inserter import insert_new_mods

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Resolves the load order for a fixed set of known mods.

    Parameters
    ----------
    mods:
        Mod id to metadata for every mod currently present.  Treated as
        read-only.
    aliases:
        Archive name to mod id, used to resolve ``ztd_name`` dependencies.
    """

    def __init__(
        self,
        mods: Mapping[str, Meta],
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._mods: Mapping[str, Meta] = mods
        self._aliases: dict[str, str] = dict(aliases or {})

    @property
    def mods(self) -> Mapping[str, Meta]:
        return self._mods

    def new_mods(
        self,
        existing_order: Sequence[str],
        disabled_mods: Iterable[str] = (),
    ) -> list[str]:
        """Return the enabled mods missing from ``existing_order``, sorted."""
        disabled = set(disabled_mods)
        existing = set(existing_order)
        return sorted(mid for mid in self._mods if mid not in existing and mid not in disabled)

    def resolve_order(
        self,
        existing_order: Sequence[str],
        disabled_mods: Iterable[str] = (),
    ) -> ResolutionResult:
        """Compute the load order.

        Parameters
        ----------
        existing_order:
            The previously persisted order.  Its relative order is kept.
        disabled_mods:
            Mods that must not be activated.  A disabled mod already in
            ``existing_order`` keeps its slot; a new disabled mod is not
            added.

        Returns
        -------
        ResolutionResult
            The order to persist and any warnings.  Never raises for
            missing, conflicting, or cyclic dependencies.
        """
        disabled = set(disabled_mods)
        new_mods = self.new_mods(existing_order, disabled)
        valid_existing = [mid for mid in existing_order if mid in self._mods]

        if not new_mods:
            return ResolutionResult(order=valid_existing, warnings=[])

        logger.info("Discovered %d new mod(s): %s", len(new_mods), ", ".join(new_mods))

        enabled = {mid: meta for mid, meta in self._mods.items() if mid not in disabled}
        graph = build_dependency_graph(enabled, self._aliases)

        warnings: list[ResolutionWarning] = []
        cycles = detect_cycles(graph, new_mods)
        for cycle in cycles:
            logger.warning("Circular dependency detected: %s", ", ".join(cycle))
            warnings.append(CircularDependency(cycle=tuple(cycle)))

        order, insert_warnings = insert_new_mods(
            valid_existing,
            new_mods,
            graph,
            self._mods,
            cycles,
            self._aliases,
        )
        warnings.extend(insert_warnings)

        return ResolutionResult(order=order, warnings=warnings)


def resolve_order(
    mods: Mapping[str, Meta],
    existing_order: Sequence[str] = (),
    disabled_mods: Iterable[str] = (),
    aliases: Mapping[str, str] | None = None,
) -> ResolutionResult:
    """Convenience function: resolve with a throwaway ``DependencyResolver``."""
    return DependencyResolver(mods, aliases).resolve_order(existing_order, disabled_mods)
