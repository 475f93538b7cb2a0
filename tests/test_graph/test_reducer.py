"""Tests for path-to-graph reduction."""
from __future__ import annotations

import itertools

import pytest

from permission_graph.graph.reducer import (
    InvalidPathError,
    compile_paths,
    graph_to_jsonable,
    merge_graphs,
    paths_from_graph,
)
from permission_graph.paths.segments import Marker

M = Marker

DB3_NATIVE = (M.DB, 3, M.DATA, M.NATIVE, M.WRITE)
DB3_SCHEMAS = (M.DB, 3, M.DATA, M.SCHEMAS, M.ALL)
DB3_PUBLIC = (M.DB, 3, M.DATA, M.SCHEMAS, "PUBLIC", M.ALL)
DB3_PUBLIC_T1_READ = (M.DB, 3, M.DATA, M.SCHEMAS, "PUBLIC", 1, M.READ, M.ALL)
DB3_PUBLIC_T1_SEG = (M.DB, 3, M.DATA, M.SCHEMAS, "PUBLIC", 1, M.QUERY, M.SEGMENTED)
DB3_BLOCK = (M.DB, 3, M.DATA, M.SCHEMAS, M.BLOCK)


class TestCompilePaths:
    def test_empty(self) -> None:
        assert compile_paths([]) == {}

    def test_single_path(self) -> None:
        assert compile_paths([DB3_PUBLIC]) == {
            M.DB: {3: {M.DATA: {M.SCHEMAS: {"PUBLIC": M.ALL}}}}
        }

    def test_root_collapses_whole_graph(self) -> None:
        assert compile_paths([(M.ALL,), DB3_PUBLIC]) is M.ALL

    def test_broader_absorbs_narrower(self) -> None:
        graph = compile_paths([DB3_PUBLIC, DB3_SCHEMAS])
        assert graph == {M.DB: {3: {M.DATA: {M.SCHEMAS: M.ALL}}}}

    def test_absorption_is_order_independent(self) -> None:
        paths = [DB3_PUBLIC, DB3_SCHEMAS, DB3_NATIVE, DB3_PUBLIC_T1_READ]
        expected = compile_paths(paths)
        for permutation in itertools.permutations(paths):
            assert compile_paths(list(permutation)) == expected

    def test_siblings_kept(self) -> None:
        graph = compile_paths(
            [
                (M.DB, 1, M.DATA, M.SCHEMAS, "A", M.ALL),
                (M.DB, 1, M.DATA, M.SCHEMAS, "B", M.ALL),
            ]
        )
        assert graph == {M.DB: {1: {M.DATA: {M.SCHEMAS: {"A": M.ALL, "B": M.ALL}}}}}

    def test_table_level_fan_out(self) -> None:
        graph = compile_paths([DB3_PUBLIC_T1_READ, DB3_PUBLIC_T1_SEG])
        table = graph[M.DB][3][M.DATA][M.SCHEMAS]["PUBLIC"][1]  # type: ignore[index]
        assert table == {M.READ: M.ALL, M.QUERY: M.SEGMENTED}

    def test_block_wins_over_all(self) -> None:
        graph = compile_paths([DB3_SCHEMAS, DB3_BLOCK])
        assert graph[M.DB][3][M.DATA][M.SCHEMAS] is M.BLOCK  # type: ignore[index]

    def test_collection_write_wins_over_read(self) -> None:
        graph = compile_paths(
            [(M.COLLECTION, M.ROOT, M.READ), (M.COLLECTION, M.ROOT, M.WRITE)]
        )
        assert graph == {M.COLLECTION: {M.ROOT: M.WRITE}}

    def test_download_full_wins_over_limited(self) -> None:
        graph = compile_paths(
            [
                (M.DB, 2, M.DOWNLOAD, M.NATIVE, M.LIMITED),
                (M.DB, 2, M.DOWNLOAD, M.NATIVE, M.FULL),
            ]
        )
        assert graph == {M.DB: {2: {M.DOWNLOAD: {M.NATIVE: M.FULL}}}}

    def test_accepts_lists_of_paths(self) -> None:
        graph = compile_paths([[DB3_NATIVE, DB3_SCHEMAS], DB3_PUBLIC])
        assert graph == {M.DB: {3: {M.DATA: {M.NATIVE: M.WRITE, M.SCHEMAS: M.ALL}}}}

    def test_schema_named_all_does_not_absorb(self) -> None:
        graph = compile_paths(
            [
                (M.DB, 1, M.DATA, M.SCHEMAS, "all", M.ALL),
                (M.DB, 1, M.DATA, M.SCHEMAS, "other", M.ALL),
            ]
        )
        assert graph[M.DB][1][M.DATA][M.SCHEMAS] == {"all": M.ALL, "other": M.ALL}  # type: ignore[index]

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(InvalidPathError, match="empty"):
            compile_paths([DB3_PUBLIC, ()])

    def test_non_leaf_terminal_rejected(self) -> None:
        with pytest.raises(InvalidPathError) as exc_info:
            compile_paths([(M.DB, 3)])
        assert exc_info.value.path == (M.DB, 3)


class TestClosure:
    @pytest.mark.parametrize(
        "paths",
        [
            [DB3_PUBLIC],
            [DB3_NATIVE, DB3_SCHEMAS],
            [DB3_PUBLIC_T1_READ, DB3_PUBLIC_T1_SEG, (M.COLLECTION, 4, M.READ)],
            [(M.ALL,)],
            [],
        ],
    )
    def test_idempotent(self, paths: list[tuple[object, ...]]) -> None:
        graph = compile_paths(paths)
        assert compile_paths(paths_from_graph(graph)) == graph

    def test_paths_from_marker(self) -> None:
        assert paths_from_graph(M.ALL) == [(M.ALL,)]

    def test_paths_from_graph(self) -> None:
        graph = compile_paths([DB3_NATIVE, DB3_SCHEMAS])
        assert sorted(paths_from_graph(graph), key=repr) == sorted(
            [DB3_NATIVE, DB3_SCHEMAS], key=repr
        )

    def test_merge_is_union(self) -> None:
        left = compile_paths([DB3_PUBLIC])
        right = compile_paths([DB3_SCHEMAS, (M.COLLECTION, 1, M.WRITE)])
        assert merge_graphs(left, right) == compile_paths(
            [DB3_PUBLIC, DB3_SCHEMAS, (M.COLLECTION, 1, M.WRITE)]
        )

    def test_merge_nothing(self) -> None:
        assert merge_graphs() == {}


class TestGraphToJsonable:
    def test_marker(self) -> None:
        assert graph_to_jsonable(M.ALL) == "all"

    def test_nested(self) -> None:
        graph = compile_paths([DB3_PUBLIC, (M.COLLECTION, M.ROOT, M.READ)])
        assert graph_to_jsonable(graph) == {
            "db": {"3": {"data": {"schemas": {"PUBLIC": "all"}}}},
            "collection": {"root": "read"},
        }
