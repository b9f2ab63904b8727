"""Benchmark: resolve_order latency (p50/p95/mean).

Measures per-call latency of a from-scratch resolution and of adding a
handful of new mods to a persisted order, on a synthetic layered mod set.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from modorder.meta.models import Dependency, Meta, Ordering
from modorder.resolver.resolver import resolve_order

_WARMUP: int = 5
_ITERATIONS: int = 100

_LAYERS: int = 10
_WIDTH: int = 50


def build_layered_mods(layers: int = _LAYERS, width: int = _WIDTH) -> dict[str, Meta]:
    """Return ``layers * width`` mods where each one loads after two mods of the layer below."""
    mods: dict[str, Meta] = {}
    for layer in range(layers):
        for slot in range(width):
            mod_id = f"l{layer:02d}.m{slot:03d}"
            deps: tuple[Dependency, ...] = ()
            if layer > 0:
                deps = tuple(
                    Dependency(f"l{layer - 1:02d}.m{s:03d}", ordering=Ordering.AFTER)
                    for s in {slot, (slot + 1) % width}
                )
            mods[mod_id] = Meta(mod_id=mod_id, dependencies=deps)
    return mods


def _percentiles(latencies_ms: list[float]) -> tuple[float, float, float]:
    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    return (
        sorted_lats[int(n * 0.50)],
        sorted_lats[min(int(n * 0.95), n - 1)],
        sum(latencies_ms) / n,
    )


def bench_resolve_latency(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark ``resolve_order`` on the layered mod set.

    Returns
    -------
    dict with keys: operation, mods, iterations, total_seconds,
    ops_per_second, avg_latency_ms, p50_ms, p95_ms, incremental_p50_ms.
    """
    mods = build_layered_mods()

    for _ in range(_WARMUP):
        resolve_order(mods)

    latencies_ms: list[float] = []
    for _ in range(iterations):
        t0 = time.perf_counter()
        resolve_order(mods)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    # Incremental case: everything persisted except the top layer.
    top = f"l{_LAYERS - 1:02d}."
    persisted = [m for m in resolve_order(mods).order if not m.startswith(top)]
    incremental_ms: list[float] = []
    for _ in range(iterations):
        t0 = time.perf_counter()
        resolve_order(mods, existing_order=persisted)
        incremental_ms.append((time.perf_counter() - t0) * 1000)

    p50, p95, mean = _percentiles(latencies_ms)
    incremental_p50, _, _ = _percentiles(incremental_ms)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "resolve_order_layered",
        "mods": len(mods),
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(mean, 4),
        "p50_ms": round(p50, 4),
        "p95_ms": round(p95, 4),
        "incremental_p50_ms": round(incremental_p50, 4),
    }
    print(
        f"[bench_latency] {result['operation']} ({result['mods']} mods): "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms  "
        f"incremental p50={result['incremental_p50_ms']:.4f}ms"
    )
    return result


if __name__ == "__main__":
    result = bench_resolve_latency()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
