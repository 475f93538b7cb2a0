"""Tests for parse-tree-to-path extraction."""
from __future__ import annotations

import pytest

from permission_graph.grammar.parser import PermissionParser
from permission_graph.grammar.tree import (
    CollectionNode,
    DbNode,
    DlLimitedNode,
    DlDbNode,
    PermissionNode,
    SchemaNode,
    TablePermNode,
)
from permission_graph.paths.extractor import (
    MAX_IDENTIFIER,
    MalformedIdentifierError,
    UnrecognizedBranchError,
    collection_id,
    extract_paths,
    parse_unsigned,
)
from permission_graph.paths.segments import Marker, format_path

M = Marker


def _paths(text: str) -> list[tuple[object, ...]]:
    return extract_paths(PermissionParser().parse(text))


# ---------------------------------------------------------------------------
# Data permissions
# ---------------------------------------------------------------------------


class TestDataPaths:
    def test_root(self) -> None:
        assert _paths("/") == [(M.ALL,)]

    def test_bare_db_expands_to_two_paths(self) -> None:
        assert _paths("/db/3/") == [
            (M.DB, 3, M.DATA, M.NATIVE, M.WRITE),
            (M.DB, 3, M.DATA, M.SCHEMAS, M.ALL),
        ]

    def test_native(self) -> None:
        assert _paths("/db/3/native/") == [(M.DB, 3, M.DATA, M.NATIVE, M.WRITE)]

    def test_all_schemas(self) -> None:
        assert _paths("/db/3/schema/") == [(M.DB, 3, M.DATA, M.SCHEMAS, M.ALL)]

    def test_schema(self) -> None:
        assert _paths("/db/3/schema/PUBLIC/") == [
            (M.DB, 3, M.DATA, M.SCHEMAS, "PUBLIC", M.ALL)
        ]

    def test_schema_named_all_stays_a_string(self) -> None:
        (path,) = _paths("/db/3/schema/all/")
        assert path[4] == "all"
        assert path[4] != M.ALL

    def test_table(self) -> None:
        assert _paths("/db/5/schema/PUBLIC/table/10/") == [
            (M.DB, 5, M.DATA, M.SCHEMAS, "PUBLIC", 10, M.ALL)
        ]

    def test_table_read(self) -> None:
        (path,) = _paths("/db/5/schema/PUBLIC/table/10/read/")
        assert path[-3:] == (10, M.READ, M.ALL)

    def test_table_query(self) -> None:
        (path,) = _paths("/db/5/schema/PUBLIC/table/10/query/")
        assert path[-3:] == (10, M.QUERY, M.ALL)

    def test_table_query_segmented(self) -> None:
        (path,) = _paths("/db/5/schema/PUBLIC/table/10/query/segmented/")
        assert path[-3:] == (10, M.QUERY, M.SEGMENTED)

    def test_leading_zeros_normalised(self) -> None:
        assert _paths("/db/007/native/") == [(M.DB, 7, M.DATA, M.NATIVE, M.WRITE)]


# ---------------------------------------------------------------------------
# Download permissions
# ---------------------------------------------------------------------------


class TestDownloadPaths:
    def test_full_db(self) -> None:
        assert _paths("/download/db/2/") == [
            (M.DB, 2, M.DOWNLOAD, M.NATIVE, M.FULL),
            (M.DB, 2, M.DOWNLOAD, M.SCHEMAS, M.FULL),
        ]

    def test_limited_db(self) -> None:
        assert _paths("/download/limited/db/2/") == [
            (M.DB, 2, M.DOWNLOAD, M.NATIVE, M.LIMITED),
            (M.DB, 2, M.DOWNLOAD, M.SCHEMAS, M.LIMITED),
        ]

    def test_native(self) -> None:
        assert _paths("/download/db/2/native/") == [(M.DB, 2, M.DOWNLOAD, M.NATIVE, M.FULL)]

    def test_schemas(self) -> None:
        assert _paths("/download/limited/db/2/schema/") == [
            (M.DB, 2, M.DOWNLOAD, M.SCHEMAS, M.LIMITED)
        ]

    def test_schema(self) -> None:
        assert _paths("/download/db/2/schema/PUBLIC/") == [
            (M.DB, 2, M.DOWNLOAD, M.SCHEMAS, "PUBLIC", M.FULL)
        ]

    def test_table(self) -> None:
        assert _paths("/download/limited/db/2/schema/PUBLIC/table/9/") == [
            (M.DB, 2, M.DOWNLOAD, M.SCHEMAS, "PUBLIC", 9, M.LIMITED)
        ]

    def test_every_path_gets_qualifier(self) -> None:
        for path in _paths("/download/limited/db/2/"):
            assert path[-1] is M.LIMITED


# ---------------------------------------------------------------------------
# Collections and blocks
# ---------------------------------------------------------------------------


class TestCollectionAndBlockPaths:
    def test_collection_write(self) -> None:
        assert _paths("/collection/5/") == [(M.COLLECTION, 5, M.WRITE)]

    def test_collection_read(self) -> None:
        assert _paths("/collection/5/read/") == [(M.COLLECTION, 5, M.READ)]

    def test_root_collection_write(self) -> None:
        assert _paths("/collection/root/") == [(M.COLLECTION, M.ROOT, M.WRITE)]

    def test_root_collection_read(self) -> None:
        assert _paths("/collection/root/read/") == [(M.COLLECTION, M.ROOT, M.READ)]

    def test_block(self) -> None:
        assert _paths("/block/db/1/") == [(M.DB, 1, M.DATA, M.SCHEMAS, M.BLOCK)]

    def test_format_path(self) -> None:
        (path,) = _paths("/collection/root/read/")
        assert format_path(path) == "collection root read"


# ---------------------------------------------------------------------------
# Identifiers and errors
# ---------------------------------------------------------------------------


class TestIdentifiers:
    def test_parse_unsigned(self) -> None:
        assert parse_unsigned("42", "table") == 42

    def test_parse_unsigned_max(self) -> None:
        assert parse_unsigned(str(MAX_IDENTIFIER), "database") == MAX_IDENTIFIER

    @pytest.mark.parametrize("token", ["", "abc", "-1", "1.5", "٣", str(2**64)])
    def test_parse_unsigned_rejects(self, token: str) -> None:
        with pytest.raises(MalformedIdentifierError) as exc_info:
            parse_unsigned(token, "table")
        assert exc_info.value.token == token
        assert exc_info.value.kind == "table"

    def test_collection_id_root(self) -> None:
        assert collection_id("root") is M.ROOT

    def test_collection_id_numeric(self) -> None:
        assert collection_id("12") == 12

    def test_non_numeric_collection_is_malformed(self) -> None:
        with pytest.raises(MalformedIdentifierError, match="collection"):
            _paths("/collection/abc/")

    def test_overflowing_db_id_is_malformed(self) -> None:
        with pytest.raises(MalformedIdentifierError, match="database"):
            _paths(f"/db/{2**64}/")

    def test_malformed_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            extract_paths(PermissionNode(grant=DbNode(db_id="x")))


class TestUnrecognizedBranch:
    def test_unknown_object(self) -> None:
        with pytest.raises(UnrecognizedBranchError):
            extract_paths("/db/1/")

    def test_limited_outside_download(self) -> None:
        with pytest.raises(UnrecognizedBranchError):
            extract_paths(DlLimitedNode(db=DlDbNode(db_id="1")))

    def test_unknown_table_perm(self) -> None:
        with pytest.raises(UnrecognizedBranchError):
            extract_paths(TablePermNode(perm="write"))

    def test_unknown_collection_access(self) -> None:
        with pytest.raises(UnrecognizedBranchError):
            extract_paths(CollectionNode(collection_id="1", access="admin"))

    def test_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            extract_paths(object())

    def test_schema_node_alone_is_a_partial_path(self) -> None:
        assert extract_paths(SchemaNode(name="S")) == [("S", M.ALL)]
