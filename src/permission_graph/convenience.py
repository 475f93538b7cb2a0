"""Convenience API for permission-graph — 3-line quickstart.

Example
-------
::

    from permission_graph import PermissionGraph
    perms = PermissionGraph(["/db/3/", "/collection/root/read/"])
    print(perms.graph)

"""
from __future__ import annotations

from typing import Any, Iterable


class PermissionGraph:
    """Accumulates permission strings and exposes their compiled graph.

    Grants are additive: adding more strings later gives the same graph
    as compiling every string in one batch. Strings that fail to compile
    are skipped and kept in :attr:`diagnostics`.

    Parameters
    ----------
    permissions:
        Optional initial permission strings.

    Example
    -------
    ::

        perms = PermissionGraph()
        perms.grant("/db/1/schema/A/")
        perms.grant("/db/1/")
        perms.graph  # {Marker.DB: {1: {Marker.DATA: {...}}}}
    """

    def __init__(self, permissions: Iterable[str] | None = None) -> None:
        from permission_graph.graph.compiler import PermissionGraphCompiler

        self._compiler = PermissionGraphCompiler()
        self._permissions: list[str] = []
        self._result: Any = None
        if permissions is not None:
            self.grant(*permissions)

    def grant(self, *permissions: str) -> None:
        """Add one or more permission strings."""
        self._permissions.extend(permissions)
        self._result = None

    @property
    def permissions(self) -> list[str]:
        return list(self._permissions)

    @property
    def graph(self) -> Any:
        """The compiled permission graph."""
        return self._compile().graph

    @property
    def diagnostics(self) -> list[Any]:
        """Diagnostics for strings dropped from the graph."""
        return self._compile().diagnostics

    def _compile(self) -> Any:
        if self._result is None:
            self._result = self._compiler.compile(self._permissions)
        return self._result

    def __repr__(self) -> str:
        return f"PermissionGraph(permissions={len(self._permissions)})"
