"""Cycle detection among newly discovered mods (Tarjan's SCC algorithm).

Only the mods in the given subset are examined, and only prerequisite
edges whose target is also in the subset are followed.  Mods already in
the user's order are assumed to be consistent and are never re-examined.

The traversal uses an explicit work stack rather than recursion so that
a long dependency chain cannot exhaust the interpreter's recursion limit.
"""
from __future__ import annotations

from collections.abc import Sequence

from modorder.resolver.graph import DependencyGraph


def detect_cycles(graph: DependencyGraph, subset: Sequence[str]) -> list[list[str]]:
    """Return every group of two or more mods in ``subset`` that form a cycle.

    Parameters
    ----------
    graph:
        The dependency graph for this resolution call.
    subset:
        Mods to examine, in the order traversal should start from.  Pass
        them sorted to get deterministic output.

    Returns
    -------
    list[list[str]]
        One list per strongly connected component of size > 1, in the
        order the components were completed.  Member order inside a
        component follows stack pop order.
    """
    members = set(subset)
    index_of: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    on_stack: set[str] = set()
    stack: list[str] = []
    components: list[list[str]] = []
    counter = 0

    def edges(node: str) -> list[str]:
        return [dep for dep in graph.prerequisites(node) if dep in members]

    for root in subset:
        if root in index_of:
            continue

        # Each frame is (node, remaining neighbours, next neighbour index).
        work: list[tuple[str, list[str], int]] = []
        index_of[root] = lowlink[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)
        work.append((root, edges(root), 0))

        while work:
            node, neighbours, position = work[-1]

            if position < len(neighbours):
                work[-1] = (node, neighbours, position + 1)
                child = neighbours[position]
                if child not in index_of:
                    index_of[child] = lowlink[child] = counter
                    counter += 1
                    stack.append(child)
                    on_stack.add(child)
                    work.append((child, edges(child), 0))
                elif child in on_stack:
                    lowlink[node] = min(lowlink[node], index_of[child])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])

            if lowlink[node] == index_of[node]:
                component: list[str] = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node:
                        break
                components.append(component)

    return [component for component in components if len(component) > 1]


def cyclic_members(cycles: Sequence[Sequence[str]]) -> set[str]:
    """Flatten detected cycles into the set of mods that belong to any of them."""
    return {member for cycle in cycles for member in cycle}
