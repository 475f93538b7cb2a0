"""Reduce permission paths into a permission graph.

Paths are grouped by their first segment, then recursively by the next,
building a nested mapping. A path whose last segment is consumed leaves a
terminal marker at that level; if any terminal is absorbing (see
:mod:`permission_graph.graph.absorption`) the whole level collapses to it.

Example
-------
::

    compile_paths([
        (Marker.DB, 3, Marker.DATA, Marker.SCHEMAS, Marker.ALL),
        (Marker.DB, 3, Marker.DATA, Marker.SCHEMAS, "PUBLIC", Marker.ALL),
    ])
    # {Marker.DB: {3: {Marker.DATA: {Marker.SCHEMAS: Marker.ALL}}}}

The result does not depend on path order and reduction is a closure:
``compile_paths(paths_from_graph(graph)) == graph``.
"""
from __future__ import annotations

from itertools import chain
from typing import Iterable, Union

from permission_graph.graph.absorption import absorbing_marker
from permission_graph.paths.segments import Marker, Path, Segment, format_path, format_segment

Graph = Union[Marker, dict]


class InvalidPathError(ValueError):
    """Raised for a path that cannot be placed in a graph.

    Attributes
    ----------
    path:
        The offending path, or the partial path at the point of failure.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid permission path {format_path(path)!r}: {reason}")


def _flatten(paths: Iterable[Path | list[Path]]) -> list[Path]:
    flat: list[Path] = []
    for item in paths:
        if isinstance(item, list):
            flat.extend(item)
        else:
            flat.append(item)
    return flat


def _reduce(paths: list[Path], prefix: Path) -> Graph:
    children: dict[Segment, list[Path]] = {}
    for path in paths:
        head, rest = path[0], path[1:]
        remainders = children.setdefault(head, [])
        if rest:
            remainders.append(rest)

    terminals = [segment for segment, remainders in children.items() if not remainders]
    marker = absorbing_marker(terminals)
    if marker is not None:
        return marker
    if terminals:
        raise InvalidPathError(
            prefix + (terminals[0],),
            f"path ends in {format_segment(terminals[0])!r}, not a leaf marker",
        )
    return {
        segment: _reduce(remainders, prefix + (segment,))
        for segment, remainders in children.items()
    }


def compile_paths(paths: Iterable[Path | list[Path]]) -> Graph:
    """Reduce *paths* into a single permission graph.

    *paths* may mix single paths and lists of paths (as returned by
    :func:`~permission_graph.paths.extract_paths`); lists are flattened
    first. An empty input yields an empty graph.

    Raises
    ------
    InvalidPathError
        If a path is empty or does not end in an absorbing leaf marker.
    """
    flat = _flatten(paths)
    for path in flat:
        if not path:
            raise InvalidPathError(path, "path is empty")
    if not flat:
        return {}
    return _reduce(flat, ())


def paths_from_graph(graph: Graph) -> list[Path]:
    """Flatten a compiled graph back into the paths it represents."""
    if isinstance(graph, Marker):
        return [(graph,)]
    return [
        (segment,) + path
        for segment, subgraph in graph.items()
        for path in paths_from_graph(subgraph)
    ]


def merge_graphs(*graphs: Graph) -> Graph:
    """Return the graph granting the union of every graph in *graphs*."""
    return compile_paths(chain.from_iterable(paths_from_graph(g) for g in graphs))


def graph_to_jsonable(graph: Graph) -> object:
    """Convert a graph to plain strings and dicts for JSON output.

    Markers render as their names and ids as decimal strings, e.g.
    ``{"db": {"3": {"data": {"schemas": "all"}}}}``.
    """
    if isinstance(graph, Marker):
        return graph.value
    return {format_segment(k): graph_to_jsonable(v) for k, v in graph.items()}
