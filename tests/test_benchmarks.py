"""Structural tests for the mod-order benchmark module."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "benchmarks"))


def test_bench_latency_importable() -> None:
    """Verify bench_latency module can be imported."""
    mod = importlib.import_module("bench_latency")
    assert hasattr(mod, "bench_resolve_latency")
    assert hasattr(mod, "build_layered_mods")


def test_layered_mods_resolve_cleanly() -> None:
    """The synthetic mod set has no missing or cyclic dependencies."""
    from bench_latency import build_layered_mods

    from modorder.resolver.resolver import resolve_order

    mods = build_layered_mods(layers=3, width=4)
    result = resolve_order(mods)
    assert len(result.order) == 12
    assert result.warnings == []
    for meta in mods.values():
        for dep in meta.dependencies:
            assert result.order.index(dep.target) < result.order.index(meta.mod_id)


def test_resolve_latency_returns_expected_keys() -> None:
    """Verify bench_resolve_latency returns expected result keys."""
    from bench_latency import bench_resolve_latency

    result = bench_resolve_latency(iterations=3)
    assert result["iterations"] == 3
    assert result["mods"] == 500
    for key in ("operation", "ops_per_second", "avg_latency_ms", "p50_ms", "p95_ms"):
        assert key in result
    assert float(result["ops_per_second"]) > 0  # type: ignore[arg-type]
