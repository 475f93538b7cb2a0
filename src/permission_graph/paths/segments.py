"""Path segment types shared by the extractor and the graph compiler.

A path is a tuple of segments. Each segment is either a :class:`Marker`
(a scope or verb token such as ``db`` or ``all``) or an identifier: an
``int`` for database, table and collection ids, or a ``str`` for schema
names.

``Marker`` is deliberately a plain :class:`~enum.Enum` rather than a
``str`` enum, so a schema literally named ``"all"`` never compares equal
to :attr:`Marker.ALL` and the two never share a graph key.

Example
-------
>>> path: Path = (Marker.DB, 3, Marker.DATA, Marker.SCHEMAS, "PUBLIC", Marker.ALL)
>>> format_path(path)
'db 3 data schemas PUBLIC all'
"""
from __future__ import annotations

from enum import Enum
from typing import Union


class Marker(Enum):
    """Symbolic path segments."""

    # Scope tokens
    DB = "db"
    DATA = "data"
    NATIVE = "native"
    SCHEMAS = "schemas"
    DOWNLOAD = "download"
    COLLECTION = "collection"
    QUERY = "query"
    ROOT = "root"

    # Leaf tokens
    ALL = "all"
    WRITE = "write"
    READ = "read"
    SEGMENTED = "segmented"
    FULL = "full"
    LIMITED = "limited"
    BLOCK = "block"

    def __repr__(self) -> str:
        return f"Marker.{self.name}"


# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

Segment = Union[Marker, int, str]
Path = tuple[Segment, ...]


def format_segment(segment: Segment) -> str:
    """Render one segment as display text."""
    if isinstance(segment, Marker):
        return segment.value
    return str(segment)


def format_path(path: Path) -> str:
    """Render a path as space separated segments."""
    return " ".join(format_segment(s) for s in path)
