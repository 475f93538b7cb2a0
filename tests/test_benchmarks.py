"""Structural tests for permission-graph benchmarks.

Verifies that each benchmark function is callable and returns a dict
with the expected required keys.
"""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "benchmarks"))

_REQUIRED_KEYS = {"operation", "ops_per_second", "avg_latency_ms"}


def test_bench_compile_throughput_returns_expected_keys() -> None:
    """run_benchmark returns a dict with required keys."""
    from bench_compile_throughput import run_benchmark

    result = run_benchmark()
    assert isinstance(result, dict)
    for key in _REQUIRED_KEYS:
        assert key in result, f"Missing key: {key!r}"


def test_bench_compile_throughput_batch_compiles_cleanly() -> None:
    """The benchmark policy contains only valid permission strings."""
    from bench_compile_throughput import _make_batch

    from permission_graph.graph.compiler import PermissionGraphCompiler

    assert PermissionGraphCompiler().compile(_make_batch()).ok
