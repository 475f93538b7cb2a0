"""Convert permission parse trees into permission paths.

Dispatch is by node type *and* shape: the same rule means different
things depending on which optional children were matched. A bare
``/db/3/`` grants everything under database 3 and expands into two
independent paths (native write and all schemas), while ``/db/3/native/``
is the single narrower path.

Download grants mirror the data grammar under a separate ``download``
branch. Their nested paths carry no verb of their own; the enclosing
``download`` node appends ``full`` or ``limited`` to every one of them.

Leaf resolution for table permissions:

====================  ====================
parsed token          path suffix
====================  ====================
``read``              ``read all``
``query``             ``query all``
``query/segmented``   ``query segmented``
(none)                ``all``
====================  ====================

Example
-------
>>> from permission_graph.grammar import PermissionParser
>>> extract_paths(PermissionParser().parse("/db/5/schema/PUBLIC/table/10/read/"))
[(Marker.DB, 5, Marker.DATA, Marker.SCHEMAS, 'PUBLIC', 10, Marker.READ, Marker.ALL)]
"""
from __future__ import annotations

import logging

from permission_graph.grammar.tree import (
    AllNode,
    BlockNode,
    CollectionNode,
    DbNode,
    DlDbNode,
    DlLimitedNode,
    DlNativeNode,
    DlSchemaNode,
    DlSchemasNode,
    DlTableNode,
    DownloadNode,
    NativeNode,
    PermissionNode,
    SchemaNode,
    SchemasNode,
    TableNode,
    TablePermNode,
)
from permission_graph.paths.segments import Marker, Path, Segment

logger = logging.getLogger(__name__)

# Ids are unsigned 64-bit integers.
MAX_IDENTIFIER: int = 2**64 - 1

_TABLE_PERM_LEAVES: dict[str, Path] = {
    "read": (Marker.READ, Marker.ALL),
    "query": (Marker.QUERY, Marker.ALL),
    "query/segmented": (Marker.QUERY, Marker.SEGMENTED),
}


class MalformedIdentifierError(ValueError):
    """Raised when a captured id token is not a valid unsigned integer.

    Attributes
    ----------
    token:
        The captured text.
    kind:
        What the token identifies (``"database"``, ``"table"``,
        ``"collection"``).
    """

    def __init__(self, token: str, kind: str) -> None:
        self.token = token
        self.kind = kind
        super().__init__(f"Malformed {kind} id {token!r}: expected an unsigned 64-bit integer")


class UnrecognizedBranchError(TypeError):
    """Raised for a tree shape the extractor has no rule for.

    Only reachable when the grammar and the extractor disagree, so it is
    a programming error rather than bad input.
    """

    def __init__(self, node: object) -> None:
        self.node = node
        super().__init__(f"No path rule for parse tree node {node!r}")


# ---------------------------------------------------------------------------
# Identifier conversion
# ---------------------------------------------------------------------------


def parse_unsigned(token: str, kind: str) -> int:
    """Convert *token* to an unsigned 64-bit integer.

    Raises
    ------
    MalformedIdentifierError
        If *token* is empty, not ASCII digits, or out of range.
    """
    if not token or not token.isascii() or not token.isdigit():
        raise MalformedIdentifierError(token, kind)
    value = int(token)
    if value > MAX_IDENTIFIER:
        raise MalformedIdentifierError(token, kind)
    return value


def collection_id(token: str) -> Segment:
    """Return :attr:`Marker.ROOT` for ``"root"``, otherwise the numeric id."""
    if token == "root":
        return Marker.ROOT
    return parse_unsigned(token, "collection")


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


def _prefixed(prefix: Path, paths: list[Path]) -> list[Path]:
    return [prefix + path for path in paths]


def _appended(paths: list[Path], leaf: Marker) -> list[Path]:
    return [path + (leaf,) for path in paths]


def extract_paths(node: object) -> list[Path]:
    """Recursively build the permission paths for a parse tree.

    Always returns a list; it holds more than one path only when the grant
    decomposes into independent scopes.

    Raises
    ------
    MalformedIdentifierError
        If an id token cannot be converted.
    UnrecognizedBranchError
        If *node* has a shape with no rule.
    """
    match node:
        case PermissionNode(grant=grant):
            return extract_paths(grant)
        case AllNode():
            return [(Marker.ALL,)]

        # -- data permissions --------------------------------------------
        case DbNode(db_id=db_id, child=None):
            db = parse_unsigned(db_id, "database")
            return [
                (Marker.DB, db, Marker.DATA, Marker.NATIVE, Marker.WRITE),
                (Marker.DB, db, Marker.DATA, Marker.SCHEMAS, Marker.ALL),
            ]
        case DbNode(db_id=db_id, child=child):
            db = parse_unsigned(db_id, "database")
            return _prefixed((Marker.DB, db), extract_paths(child))
        case NativeNode():
            return [(Marker.DATA, Marker.NATIVE, Marker.WRITE)]
        case SchemasNode(schema=None):
            return [(Marker.DATA, Marker.SCHEMAS, Marker.ALL)]
        case SchemasNode(schema=schema):
            return _prefixed((Marker.DATA, Marker.SCHEMAS), extract_paths(schema))
        case SchemaNode(name=name, table=None):
            return [(name, Marker.ALL)]
        case SchemaNode(name=name, table=table):
            return _prefixed((name,), extract_paths(table))
        case TableNode(table_id=table_id, perm=None):
            return [(parse_unsigned(table_id, "table"), Marker.ALL)]
        case TableNode(table_id=table_id, perm=perm):
            return _prefixed((parse_unsigned(table_id, "table"),), extract_paths(perm))
        case TablePermNode(perm=perm) if perm in _TABLE_PERM_LEAVES:
            return [_TABLE_PERM_LEAVES[perm]]

        # -- download permissions ----------------------------------------
        case DownloadNode(child=DlLimitedNode(db=db_node)):
            return _appended(extract_paths(db_node), Marker.LIMITED)
        case DownloadNode(child=DlDbNode() as db_node):
            return _appended(extract_paths(db_node), Marker.FULL)
        case DlDbNode(db_id=db_id, child=None):
            db = parse_unsigned(db_id, "database")
            return [
                (Marker.DB, db, Marker.DOWNLOAD, Marker.NATIVE),
                (Marker.DB, db, Marker.DOWNLOAD, Marker.SCHEMAS),
            ]
        case DlDbNode(db_id=db_id, child=child):
            db = parse_unsigned(db_id, "database")
            return _prefixed((Marker.DB, db), extract_paths(child))
        case DlNativeNode():
            return [(Marker.DOWNLOAD, Marker.NATIVE)]
        case DlSchemasNode(schema=None):
            return [(Marker.DOWNLOAD, Marker.SCHEMAS)]
        case DlSchemasNode(schema=schema):
            return _prefixed((Marker.DOWNLOAD, Marker.SCHEMAS), extract_paths(schema))
        case DlSchemaNode(name=name, table=None):
            return [(name,)]
        case DlSchemaNode(name=name, table=table):
            return _prefixed((name,), extract_paths(table))
        case DlTableNode(table_id=table_id):
            return [(parse_unsigned(table_id, "table"),)]

        # -- collections and blocks --------------------------------------
        case CollectionNode(collection_id=token, access=None):
            return [(Marker.COLLECTION, collection_id(token), Marker.WRITE)]
        case CollectionNode(collection_id=token, access="read"):
            return [(Marker.COLLECTION, collection_id(token), Marker.READ)]
        case BlockNode(db_id=db_id):
            db = parse_unsigned(db_id, "database")
            return [(Marker.DB, db, Marker.DATA, Marker.SCHEMAS, Marker.BLOCK)]

        case _:
            raise UnrecognizedBranchError(node)
