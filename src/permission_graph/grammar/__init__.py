"""Permission string grammar: parse tree types and the parser.

Example
-------
::

    from permission_graph.grammar import PermissionParser

    tree = PermissionParser().parse("/db/3/native/")
"""
from __future__ import annotations

from permission_graph.grammar.parser import (
    ParseFailure,
    PermissionParser,
    PermissionSyntaxError,
)
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
    GrantNode,
    NativeNode,
    ParseNode,
    PermissionNode,
    SchemaNode,
    SchemasNode,
    TableNode,
    TablePermNode,
    describe_tree,
)

__all__ = [
    # Parser
    "ParseFailure",
    "PermissionParser",
    "PermissionSyntaxError",
    # Tree
    "AllNode",
    "BlockNode",
    "CollectionNode",
    "DbNode",
    "DlDbNode",
    "DlLimitedNode",
    "DlNativeNode",
    "DlSchemaNode",
    "DlSchemasNode",
    "DlTableNode",
    "DownloadNode",
    "GrantNode",
    "NativeNode",
    "ParseNode",
    "PermissionNode",
    "SchemaNode",
    "SchemasNode",
    "TableNode",
    "TablePermNode",
    "describe_tree",
]
