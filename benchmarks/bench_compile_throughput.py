"""Benchmark: permission graph compilation throughput — batches per second.

Compiles a realistic group policy (full databases, per-schema and
per-table grants, downloads, collections and blocks) repeatedly and
reports how many batches compile per second.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from permission_graph.graph.compiler import PermissionGraphCompiler

_ITERATIONS: int = 200


def _make_batch() -> list[str]:
    """Build a policy of a few hundred permission strings."""
    batch: list[str] = ["/db/1/", "/block/db/2/", "/collection/root/read/"]
    for db in range(3, 8):
        batch.append(f"/db/{db}/native/")
        batch.append(f"/download/limited/db/{db}/")
        for schema in ("PUBLIC", "SALES", "FINANCE"):
            batch.append(f"/db/{db}/schema/{schema}/")
            for table in range(10):
                batch.append(f"/db/{db}/schema/{schema}/table/{table}/query/segmented/")
                batch.append(f"/download/db/{db}/schema/{schema}/table/{table}/")
    batch.extend(f"/collection/{n}/" for n in range(50))
    return batch


def bench_compile_throughput() -> dict[str, object]:
    """Benchmark PermissionGraphCompiler.compile() throughput.

    Returns
    -------
    dict with keys: operation, iterations, batch_size, total_seconds,
    ops_per_second, avg_latency_ms.
    """
    compiler = PermissionGraphCompiler()
    batch = _make_batch()

    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        compiler.compile(batch)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "compile_throughput",
        "iterations": _ITERATIONS,
        "batch_size": len(batch),
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
    }
    print(
        f"[bench_compile_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} batches/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_compile_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "compile_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
