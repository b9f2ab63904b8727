#!/usr/bin/env python3
"""Example: Load-order validation

Demonstrates checking a hand-edited load order in normal and strict
modes, and interpreting diagnostic messages.

Usage:
    python examples/02_validation.py

Requirements:
    pip install mod-order
"""
from __future__ import annotations

import modorder
from modorder.meta import Dependency, Meta, Ordering, Version
from modorder.validator import Diagnostic

MODS = {
    "finn.core": Meta(mod_id="finn.core", version=Version(1, 4, 0)),
    "finn.savanna": Meta(
        mod_id="finn.savanna",
        dependencies=(
            Dependency("finn.core", ordering=Ordering.AFTER, min_version=Version(2, 0, 0)),
            Dependency("finn.grass", optional=True),
        ),
    ),
}

GOOD_ORDER = ["finn.core", "finn.savanna"]
BAD_ORDER = ["finn.savanna", "finn.core", "old.removed"]


def print_diagnostics(label: str, diagnostics: list[Diagnostic]) -> None:
    print(f"\n{label} ({len(diagnostics)} diagnostics):")
    if not diagnostics:
        print("  No issues found.")
        return
    for diag in diagnostics:
        print(f"  {diag}")


def main() -> None:
    print(f"mod-order version: {modorder.__version__}")

    print_diagnostics("Good order", modorder.validate(GOOD_ORDER, MODS).diagnostics)

    lenient = modorder.validate(BAD_ORDER, MODS)
    print_diagnostics("Bad order (normal mode)", lenient.diagnostics)
    print(f"  valid: {lenient.is_valid}")

    strict = modorder.validate(BAD_ORDER, MODS, strict=True)
    print_diagnostics("Bad order (strict mode)", strict.diagnostics)
    print(f"  valid: {strict.is_valid}")


if __name__ == "__main__":
    main()
