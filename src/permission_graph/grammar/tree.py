"""Parse tree node types for permission strings.

Every grammar rule has exactly one node class. Nodes are frozen
dataclasses holding the captured leaf text (always ``str``) and their
optional child node. The ``rule`` class attribute carries the grammar
rule name used in diagnostics and in :func:`describe_tree`.

The tree for ``/db/3/schema/PUBLIC/`` is::

    PermissionNode(
        grant=DbNode(
            db_id="3",
            child=SchemasNode(schema=SchemaNode(name="PUBLIC")),
        )
    )
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import ClassVar, Union


# ---------------------------------------------------------------------------
# Data permissions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AllNode:
    """``/``: full admin permissions."""

    rule: ClassVar[str] = "all"


@dataclass(frozen=True)
class NativeNode:
    rule: ClassVar[str] = "native"


@dataclass(frozen=True)
class TablePermNode:
    """One of ``read``, ``query`` or ``query/segmented``."""

    rule: ClassVar[str] = "table-perm"

    perm: str


@dataclass(frozen=True)
class TableNode:
    rule: ClassVar[str] = "table"

    table_id: str
    perm: TablePermNode | None = None


@dataclass(frozen=True)
class SchemaNode:
    rule: ClassVar[str] = "schema"

    name: str
    table: TableNode | None = None


@dataclass(frozen=True)
class SchemasNode:
    rule: ClassVar[str] = "schemas"

    schema: SchemaNode | None = None


@dataclass(frozen=True)
class DbNode:
    """``/db/<id>/`` optionally narrowed to native or schema access."""

    rule: ClassVar[str] = "db"

    db_id: str
    child: NativeNode | SchemasNode | None = None


# ---------------------------------------------------------------------------
# Download permissions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DlNativeNode:
    rule: ClassVar[str] = "dl-native"


@dataclass(frozen=True)
class DlTableNode:
    rule: ClassVar[str] = "dl-table"

    table_id: str


@dataclass(frozen=True)
class DlSchemaNode:
    rule: ClassVar[str] = "dl-schema"

    name: str
    table: DlTableNode | None = None


@dataclass(frozen=True)
class DlSchemasNode:
    rule: ClassVar[str] = "dl-schemas"

    schema: DlSchemaNode | None = None


@dataclass(frozen=True)
class DlDbNode:
    rule: ClassVar[str] = "dl-db"

    db_id: str
    child: DlNativeNode | DlSchemasNode | None = None


@dataclass(frozen=True)
class DlLimitedNode:
    rule: ClassVar[str] = "dl-limited"

    db: DlDbNode


@dataclass(frozen=True)
class DownloadNode:
    """``/download/...``: full downloads, or limited ones via :class:`DlLimitedNode`."""

    rule: ClassVar[str] = "download"

    child: DlLimitedNode | DlDbNode


# ---------------------------------------------------------------------------
# Collections and blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CollectionNode:
    """``/collection/<id>/`` with an optional ``read/`` suffix.

    ``access`` holds the captured ``"read"`` keyword, or ``None`` when the
    grant is for write access.
    """

    rule: ClassVar[str] = "collection"

    collection_id: str
    access: str | None = None


@dataclass(frozen=True)
class BlockNode:
    rule: ClassVar[str] = "block"

    db_id: str


GrantNode = Union[AllNode, DbNode, DownloadNode, CollectionNode, BlockNode]


@dataclass(frozen=True)
class PermissionNode:
    """Root of every parse tree; wraps exactly one grant category."""

    rule: ClassVar[str] = "permission"

    grant: GrantNode


ParseNode = Union[
    PermissionNode,
    AllNode,
    DbNode,
    NativeNode,
    SchemasNode,
    SchemaNode,
    TableNode,
    TablePermNode,
    DownloadNode,
    DlLimitedNode,
    DlDbNode,
    DlNativeNode,
    DlSchemasNode,
    DlSchemaNode,
    DlTableNode,
    CollectionNode,
    BlockNode,
]


def describe_tree(node: object) -> list[object]:
    """Return the tree as nested lists of rule names and leaves.

    ``None`` children are omitted, so the output lists exactly the nodes
    the grammar matched.

    >>> describe_tree(PermissionNode(grant=BlockNode(db_id="1")))
    ['permission', ['block', '1']]
    """
    rule = getattr(node, "rule", None)
    if rule is None:
        raise TypeError(f"Not a parse tree node: {node!r}")
    described: list[object] = [rule]
    for f in fields(node):  # type: ignore[arg-type]
        value = getattr(node, f.name)
        if value is None:
            continue
        if isinstance(value, str):
            described.append(value)
        else:
            described.append(describe_tree(value))
    return described
