"""Insertion of newly discovered mods into an existing load order.

New mods are placed one at a time, alphabetically, into the earliest
slot that satisfies their constraints against the mods already placed.
Mods that are part of a cycle are not placed by constraint; they are
appended to the end, alphabetically.
"""
from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field

from modorder.meta.models import Meta
from modorder.resolver.cycles import cyclic_members
from modorder.resolver.diagnostics import (
    ConflictingConstraints,
    MissingOptionalDependency,
    MissingRequiredDependency,
    ResolutionWarning,
)
from modorder.resolver.graph import DependencyGraph, resolve_target

logger = logging.getLogger(__name__)


@dataclass
class _Placement:
    position: int
    upper_bound: int
    warnings: list[ResolutionWarning] = field(default_factory=list)


def _is_optional(
    meta: Meta | None,
    missing: str,
    aliases: Mapping[str, str] | None,
) -> bool:
    if meta is None:
        return False
    return any(
        dep.optional
        for dep in meta.dependencies
        if dep.target == missing or resolve_target(dep, aliases) == missing
    )


def _place(
    mod_id: str,
    current_order: Sequence[str],
    graph: DependencyGraph,
    all_mods: Mapping[str, Meta],
    aliases: Mapping[str, str] | None,
) -> _Placement:
    warnings: list[ResolutionWarning] = []
    positions = {mid: i for i, mid in enumerate(current_order)}
    min_position = 0
    max_position = len(current_order)

    for dep in graph.prerequisites(mod_id):
        if dep in positions:
            min_position = max(min_position, positions[dep] + 1)
        elif dep not in all_mods:
            if _is_optional(all_mods.get(mod_id), dep, aliases):
                logger.debug("Optional dependency %r for mod %r not found", dep, mod_id)
                warnings.append(MissingOptionalDependency(mod_id=mod_id, missing=dep))
            else:
                logger.warning("Required dependency %r for mod %r not found", dep, mod_id)
                warnings.append(MissingRequiredDependency(mod_id=mod_id, missing=dep))

    # Successors only bound the slot; absent successors are not reported.
    for dep in graph.successors(mod_id):
        if dep in positions:
            max_position = min(max_position, positions[dep])

    if min_position > max_position:
        logger.warning(
            "Conflicting dependency constraints for mod %r: must be in range [%d, %d]",
            mod_id,
            min_position,
            max_position,
        )
        warnings.append(
            ConflictingConstraints(
                mod_id=mod_id,
                details=f"Required position range [{min_position}, {max_position}] is invalid",
            )
        )
        end = len(current_order)
        return _Placement(position=end, upper_bound=end, warnings=warnings)

    return _Placement(position=min_position, upper_bound=max_position, warnings=warnings)


def find_insert_position(
    mod_id: str,
    current_order: Sequence[str],
    graph: DependencyGraph,
    all_mods: Mapping[str, Meta],
    aliases: Mapping[str, str] | None = None,
) -> tuple[int, list[ResolutionWarning]]:
    """Find the earliest valid slot for ``mod_id`` in ``current_order``.

    Parameters
    ----------
    mod_id:
        The mod being placed.
    current_order:
        The order built so far.  Not modified.
    graph:
        Prerequisite/successor edges for this resolution call.
    all_mods:
        Every known mod, enabled or not.  A prerequisite missing from both
        ``current_order`` and ``all_mods`` is reported as missing.
    aliases:
        Archive name to mod id mapping used when matching a missing
        prerequisite back to its declaration.

    Returns
    -------
    tuple[int, list[ResolutionWarning]]
        The insertion index and any warnings.  When no slot satisfies
        every constraint the index is ``len(current_order)``.
    """
    placement = _place(mod_id, current_order, graph, all_mods, aliases)
    logger.debug("Inserting mod %r at position %d", mod_id, placement.position)
    return placement.position, placement.warnings


def insert_new_mods(
    existing_order: Sequence[str],
    new_mods: Collection[str],
    graph: DependencyGraph,
    all_mods: Mapping[str, Meta],
    cycles: Sequence[Sequence[str]],
    aliases: Mapping[str, str] | None = None,
) -> tuple[list[str], list[ResolutionWarning]]:
    """Merge ``new_mods`` into ``existing_order``.

    Acyclic mods are inserted alphabetically, each one seeing the mods
    inserted before it.  Mods whose earliest slot is the front are kept
    in alphabetical order among themselves by shifting each one past the
    previous front insertions, never beyond its own successors.  Cyclic
    mods go last.

    Returns
    -------
    tuple[list[str], list[ResolutionWarning]]
        The new order and the warnings raised while placing mods.
    """
    order = list(existing_order)
    warnings: list[ResolutionWarning] = []

    in_cycle = cyclic_members(cycles)
    acyclic = sorted(mid for mid in new_mods if mid not in in_cycle)
    cyclic = sorted(mid for mid in new_mods if mid in in_cycle)

    insert_offset = 0
    for mod_id in acyclic:
        placement = _place(mod_id, order, graph, all_mods, aliases)
        warnings.extend(placement.warnings)

        position = placement.position
        if position == 0 and insert_offset > 0:
            position = min(insert_offset, placement.upper_bound)
        logger.debug("Inserting mod %r at position %d", mod_id, position)
        order.insert(position, mod_id)

        if placement.position == 0:
            insert_offset += 1

    for mod_id in cyclic:
        logger.info("Appending cyclic mod %r at the end of the load order", mod_id)
        order.append(mod_id)

    return order, warnings
