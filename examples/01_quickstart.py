#!/usr/bin/env python3
"""Example: Quickstart — mod-order

Minimal working example: describe a few mods, compute a load order from
scratch, then add a new mod to a persisted order.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install mod-order
"""
from __future__ import annotations

import modorder
from modorder.meta import Dependency, Meta, Ordering

MODS = {
    "finn.core": Meta(mod_id="finn.core", name="Core"),
    "finn.savanna": Meta(
        mod_id="finn.savanna",
        name="Savanna Pack",
        dependencies=(Dependency("finn.core", ordering=Ordering.AFTER),),
    ),
    "ana.tweaks": Meta(
        mod_id="ana.tweaks",
        name="Tweaks",
        dependencies=(
            Dependency("finn.savanna", ordering=Ordering.BEFORE),
            Dependency("ana.textures", ordering=Ordering.AFTER, optional=True),
        ),
    ),
}


def main() -> None:
    print(f"mod-order version: {modorder.__version__}")

    # Step 1: Resolve from scratch
    result = modorder.resolve_order(MODS)
    print(f"Fresh order: {result.order}")
    for warning in result.warnings:
        print(f"  [{warning.severity.name}] {warning}")

    # Step 2: A new mod shows up next to the persisted order
    mods = dict(MODS)
    mods["finn.ui"] = Meta(
        mod_id="finn.ui",
        dependencies=(Dependency("finn.savanna", ordering=Ordering.AFTER),),
    )
    updated = modorder.resolve_order(mods, existing_order=result.order)
    print(f"\nUpdated order: {updated.order}")

    # Step 3: Disabled mods keep their slot but are never inserted
    disabled = modorder.resolve_order(
        mods, existing_order=updated.order, disabled_mods=["ana.tweaks"]
    )
    print(f"With ana.tweaks disabled: {disabled.order}")


if __name__ == "__main__":
    main()
