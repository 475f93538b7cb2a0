"""permission-graph — compile permission strings into a permission graph.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import permission_graph as pg
>>> pg.__version__
'0.1.0'
>>> result = pg.PermissionGraphCompiler().compile(["/db/3/", "/db/3/schema/PUBLIC/"])
>>> result.graph == pg.permissions_to_graph(["/db/3/"])
True
"""
from __future__ import annotations

__version__: str = "0.1.0"

from permission_graph.convenience import PermissionGraph

# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------
from permission_graph.grammar.parser import (
    ParseFailure,
    PermissionParser,
    PermissionSyntaxError,
)
from permission_graph.grammar.tree import PermissionNode, describe_tree

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
from permission_graph.paths.extractor import (
    MalformedIdentifierError,
    UnrecognizedBranchError,
    extract_paths,
)
from permission_graph.paths.segments import Marker, Path, Segment, format_path

# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
from permission_graph.graph.absorption import ABSORPTION_ORDER, absorbing_marker
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

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
from permission_graph.config.loader import PolicyConfigError, PolicyLoader
from permission_graph.config.models import CompilerConfig, PolicyDocument

__all__ = [
    "__version__",
    "PermissionGraph",
    # Grammar
    "ParseFailure",
    "PermissionNode",
    "PermissionParser",
    "PermissionSyntaxError",
    "describe_tree",
    # Paths
    "MalformedIdentifierError",
    "Marker",
    "Path",
    "Segment",
    "UnrecognizedBranchError",
    "extract_paths",
    "format_path",
    # Graph
    "ABSORPTION_ORDER",
    "CompilationDiagnostic",
    "CompilationResult",
    "Graph",
    "InvalidPathError",
    "PermissionCompilationError",
    "PermissionGraphCompiler",
    "absorbing_marker",
    "compile_paths",
    "graph_to_jsonable",
    "merge_graphs",
    "paths_from_graph",
    "permissions_to_graph",
    # Config
    "CompilerConfig",
    "PolicyConfigError",
    "PolicyDocument",
    "PolicyLoader",
]
