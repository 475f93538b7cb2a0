#!/usr/bin/env python3
"""Example: Quickstart — permission-graph

Minimal working example: compile a handful of permission strings,
inspect the graph and see which strings were dropped.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install permission-graph
"""
from __future__ import annotations

import json

import permission_graph as pg


def main() -> None:
    print(f"permission-graph version: {pg.__version__}")

    # Step 1: Compile a batch of grants
    compiler = pg.PermissionGraphCompiler()
    result = compiler.compile([
        "/db/3/",
        "/db/3/schema/PUBLIC/",          # absorbed by /db/3/
        "/db/4/schema/SALES/table/12/query/segmented/",
        "/download/limited/db/4/",
        "/collection/root/read/",
        "/db/oops/",                     # dropped: not a valid permission
    ])

    # Step 2: Show the graph
    print("\nCompiled graph:")
    print(json.dumps(pg.graph_to_jsonable(result.graph), indent=2))

    # Step 3: Show the diagnostics
    print(f"\nCompiled {result.compiled_count} permission(s)")
    for diagnostic in result.diagnostics:
        print(f"  dropped {diagnostic.permission!r}: {diagnostic.message}")

    # Step 4: Grants are additive
    perms = pg.PermissionGraph(["/collection/5/read/"])
    perms.grant("/collection/5/")
    print(f"\nCollection 5 after upgrade: {pg.graph_to_jsonable(perms.graph)}")


if __name__ == "__main__":
    main()
