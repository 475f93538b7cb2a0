"""Permission graph reduction and the batch compiler.

Example
-------
::

    from permission_graph.graph import PermissionGraphCompiler

    result = PermissionGraphCompiler().compile(["/db/1/schema/A/", "/db/1/schema/B/"])
    result.graph
"""
from __future__ import annotations

from permission_graph.graph.absorption import (
    ABSORPTION_ORDER,
    absorbing_marker,
    is_absorbing,
)
from permission_graph.graph.compiler import (
    CompilationDiagnostic,
    CompilationResult,
    PermissionCompilationError,
    PermissionGraphCompiler,
    permissions_to_graph,
)
from permission_graph.graph.reducer import (
    Graph,
    InvalidPathError,
    compile_paths,
    graph_to_jsonable,
    merge_graphs,
    paths_from_graph,
)

__all__ = [
    # Absorption
    "ABSORPTION_ORDER",
    "absorbing_marker",
    "is_absorbing",
    # Reduction
    "Graph",
    "InvalidPathError",
    "compile_paths",
    "graph_to_jsonable",
    "merge_graphs",
    "paths_from_graph",
    # Compiler
    "CompilationDiagnostic",
    "CompilationResult",
    "PermissionCompilationError",
    "PermissionGraphCompiler",
    "permissions_to_graph",
]
