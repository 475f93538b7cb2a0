"""Recursive-descent parser for permission strings.

Grammar
-------
::

    permission := all | db | download | collection | block
    all        := "/"
    db         := "/db/" <digits> "/" [ native | schemas ]
    native     := "native/"
    schemas    := "schema/" [ schema ]
    schema     := <any-chars-except-"/"> "/" [ table ]
    table      := "table/" <digits> "/" [ table-perm "/" ]
    table-perm := "read" | "query" | "query/segmented"

    download   := "/download" ( "/limited" dl-db | dl-db )
    dl-db      := "/db/" <digits> "/" [ dl-native | dl-schemas ]
    dl-native  := "native/"
    dl-schemas := "schema/" [ dl-schema ]
    dl-schema  := <any-chars-except-"/"> "/" [ dl-table ]
    dl-table   := "table/" <digits> "/"

    collection := "/collection/" <any-chars-except-"/"> "/" [ "read/" ]
    block      := "/block/db/" <digits> "/"

Quoted delimiters are consumed and never appear in the tree. The whole
string must match; trailing text is a syntax error.

The compiled patterns below are module-level and never mutated, and all
cursor state lives in a per-call :class:`_ParseState`, so one
:class:`PermissionParser` can be shared freely between threads.

Example
-------
>>> parser = PermissionParser()
>>> parser.parse("/block/db/1/")
PermissionNode(grant=BlockNode(db_id='1'))
>>> parser.try_parse("/db/x/")
ParseFailure(text='/db/x/', index=4, expected=('digits',))
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

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
    PermissionNode,
    SchemaNode,
    SchemasNode,
    TableNode,
    TablePermNode,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Terminal patterns
# ---------------------------------------------------------------------------

# ASCII digits only; other Unicode decimal digits are not ids.
_DIGITS = ("digits", re.compile(r"[0-9]+"))
_NAME = ("name", re.compile(r"[^/]*"))
# Longest alternative first so "query/segmented/" is not cut short at "query".
_TABLE_PERM = ("read | query | query/segmented", re.compile(r"query/segmented|query|read"))

_END_OF_INPUT = "end of input"


# ---------------------------------------------------------------------------
# Failure signal
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParseFailure:
    """Describes why a permission string did not match the grammar.

    Attributes
    ----------
    text:
        The permission string that failed to parse.
    index:
        Offset of the furthest position the parser reached.
    expected:
        Tokens that would have allowed parsing to continue at ``index``.
    """

    text: str
    index: int
    expected: tuple[str, ...]

    @property
    def message(self) -> str:
        expected = ", ".join(self.expected) or _END_OF_INPUT
        return (
            f"Parse error at index {self.index} of {self.text!r}: "
            f"expected one of {expected}"
        )


class PermissionSyntaxError(ValueError):
    """Raised when a permission string does not match the grammar.

    Attributes
    ----------
    failure:
        The :class:`ParseFailure` describing the mismatch.
    """

    def __init__(self, failure: ParseFailure) -> None:
        self.failure = failure
        super().__init__(failure.message)

    @property
    def text(self) -> str:
        return self.failure.text


# ---------------------------------------------------------------------------
# Parser state
# ---------------------------------------------------------------------------


class _ParseState:
    """Cursor over one permission string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self._furthest = 0
        self._expected: list[str] = []

    # -- primitives -----------------------------------------------------

    def _expect(self, label: str) -> None:
        if self.pos > self._furthest:
            self._furthest = self.pos
            self._expected = [label]
        elif self.pos == self._furthest and label not in self._expected:
            self._expected.append(label)

    def literal(self, token: str) -> bool:
        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return True
        self._expect(repr(token))
        return False

    def capture(self, terminal: tuple[str, re.Pattern[str]]) -> str | None:
        label, pattern = terminal
        match = pattern.match(self.text, self.pos)
        if match is None:
            self._expect(label)
            return None
        self.pos = match.end()
        return match.group()

    def optional(self, rule: Callable[[], object]) -> object | None:
        """Apply *rule*, rewinding the cursor if it does not match."""
        start = self.pos
        node = rule()
        if node is None:
            self.pos = start
        return node

    def at_end(self) -> bool:
        if self.pos == len(self.text):
            return True
        self._expect(_END_OF_INPUT)
        return False

    def failure(self) -> ParseFailure:
        return ParseFailure(
            text=self.text,
            index=self._furthest,
            expected=tuple(self._expected),
        )

    # -- rules ------------------------------------------------------------

    def permission(self) -> PermissionNode | None:
        alternatives: tuple[Callable[[], GrantNode | None], ...] = (
            self.all,
            self.db,
            self.download,
            self.collection,
            self.block,
        )
        for alternative in alternatives:
            self.pos = 0
            grant = alternative()
            if grant is not None and self.at_end():
                return PermissionNode(grant=grant)
        return None

    def all(self) -> AllNode | None:
        return AllNode() if self.literal("/") else None

    def db(self) -> DbNode | None:
        if not self.literal("/db/"):
            return None
        db_id = self.capture(_DIGITS)
        if db_id is None or not self.literal("/"):
            return None
        child = self.optional(self.native) or self.optional(self.schemas)
        return DbNode(db_id=db_id, child=child)  # type: ignore[arg-type]

    def native(self) -> NativeNode | None:
        return NativeNode() if self.literal("native/") else None

    def schemas(self) -> SchemasNode | None:
        if not self.literal("schema/"):
            return None
        return SchemasNode(schema=self.optional(self.schema))  # type: ignore[arg-type]

    def schema(self) -> SchemaNode | None:
        name = self.capture(_NAME)
        if name is None or not self.literal("/"):
            return None
        return SchemaNode(name=name, table=self.optional(self.table))  # type: ignore[arg-type]

    def table(self) -> TableNode | None:
        if not self.literal("table/"):
            return None
        table_id = self.capture(_DIGITS)
        if table_id is None or not self.literal("/"):
            return None
        return TableNode(table_id=table_id, perm=self.optional(self.table_perm))  # type: ignore[arg-type]

    def table_perm(self) -> TablePermNode | None:
        perm = self.capture(_TABLE_PERM)
        if perm is None or not self.literal("/"):
            return None
        return TablePermNode(perm=perm)

    def download(self) -> DownloadNode | None:
        if not self.literal("/download"):
            return None
        child = self.optional(self.dl_limited) or self.optional(self.dl_db)
        if child is None:
            return None
        return DownloadNode(child=child)  # type: ignore[arg-type]

    def dl_limited(self) -> DlLimitedNode | None:
        if not self.literal("/limited"):
            return None
        db = self.dl_db()
        return DlLimitedNode(db=db) if db is not None else None

    def dl_db(self) -> DlDbNode | None:
        if not self.literal("/db/"):
            return None
        db_id = self.capture(_DIGITS)
        if db_id is None or not self.literal("/"):
            return None
        child = self.optional(self.dl_native) or self.optional(self.dl_schemas)
        return DlDbNode(db_id=db_id, child=child)  # type: ignore[arg-type]

    def dl_native(self) -> DlNativeNode | None:
        return DlNativeNode() if self.literal("native/") else None

    def dl_schemas(self) -> DlSchemasNode | None:
        if not self.literal("schema/"):
            return None
        return DlSchemasNode(schema=self.optional(self.dl_schema))  # type: ignore[arg-type]

    def dl_schema(self) -> DlSchemaNode | None:
        name = self.capture(_NAME)
        if name is None or not self.literal("/"):
            return None
        return DlSchemaNode(name=name, table=self.optional(self.dl_table))  # type: ignore[arg-type]

    def dl_table(self) -> DlTableNode | None:
        if not self.literal("table/"):
            return None
        table_id = self.capture(_DIGITS)
        if table_id is None or not self.literal("/"):
            return None
        return DlTableNode(table_id=table_id)

    def collection(self) -> CollectionNode | None:
        if not self.literal("/collection/"):
            return None
        collection_id = self.capture(_NAME)
        if collection_id is None or not self.literal("/"):
            return None
        access = "read" if self.literal("read/") else None
        return CollectionNode(collection_id=collection_id, access=access)

    def block(self) -> BlockNode | None:
        if not self.literal("/block/db/"):
            return None
        db_id = self.capture(_DIGITS)
        if db_id is None or not self.literal("/"):
            return None
        return BlockNode(db_id=db_id)


# ---------------------------------------------------------------------------
# Public parser
# ---------------------------------------------------------------------------


class PermissionParser:
    """Parses permission strings into :class:`PermissionNode` trees.

    The grammar is fixed; the parser keeps no state between calls.
    """

    def parse(self, text: str) -> PermissionNode:
        """Parse *text* into a parse tree.

        Raises
        ------
        PermissionSyntaxError
            If *text* does not match the grammar.
        """
        result = self.try_parse(text)
        if isinstance(result, ParseFailure):
            raise PermissionSyntaxError(result)
        return result

    def try_parse(self, text: str) -> PermissionNode | ParseFailure:
        """Parse *text*, returning a :class:`ParseFailure` instead of raising."""
        state = _ParseState(text)
        tree = state.permission()
        if tree is None:
            failure = state.failure()
            logger.debug("Permission %r failed to parse at index %d", text, failure.index)
            return failure
        return tree
