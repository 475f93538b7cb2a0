"""Batch compiler from permission strings to a permission graph.

Each string is parsed, converted to paths, and the paths of the whole
batch are reduced into one graph. Failures are scoped to the string that
caused them: with the default ``on_error="skip"`` a string that does not
parse, or that carries a malformed id, contributes no paths, is logged at
ERROR level and is recorded as a :class:`CompilationDiagnostic` on the
result. With ``on_error="raise"`` any such string fails the batch with
:class:`PermissionCompilationError`.

The compiler holds no mutable state, so one instance may compile batches
for different groups from several threads at once.

Example
-------
>>> compiler = PermissionGraphCompiler()
>>> result = compiler.compile(["/db/3/", "/db/3/schema/PUBLIC/", "/oops"])
>>> result.graph[Marker.DB][3][Marker.DATA][Marker.SCHEMAS]
Marker.ALL
>>> [d.permission for d in result.diagnostics]
['/oops']
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal

from permission_graph.config.models import CompilerConfig
from permission_graph.graph.reducer import Graph, compile_paths
from permission_graph.grammar.parser import PermissionParser, PermissionSyntaxError
from permission_graph.paths.extractor import MalformedIdentifierError, extract_paths
from permission_graph.paths.segments import Path

logger = logging.getLogger(__name__)

DiagnosticKind = Literal["syntax", "malformed_identifier"]


@dataclass(frozen=True)
class CompilationDiagnostic:
    """Record of one permission string dropped from a batch.

    Attributes
    ----------
    permission:
        The dropped permission string.
    kind:
        ``"syntax"`` or ``"malformed_identifier"``.
    message:
        Human-readable error message.
    index:
        Failure offset into ``permission`` for syntax errors, else ``None``.
    """

    permission: str
    kind: DiagnosticKind
    message: str
    index: int | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "permission": self.permission,
            "kind": self.kind,
            "message": self.message,
            "index": self.index,
        }


@dataclass
class CompilationResult:
    """Outcome of compiling one batch of permission strings."""

    graph: Graph
    diagnostics: list[CompilationDiagnostic] = field(default_factory=list)
    compiled_count: int = 0

    @property
    def ok(self) -> bool:
        """``True`` when no permission string was dropped."""
        return not self.diagnostics

    @property
    def dropped(self) -> list[str]:
        return [d.permission for d in self.diagnostics]


class PermissionCompilationError(Exception):
    """Raised when a strict compilation drops one or more strings.

    Attributes
    ----------
    result:
        The result for the strings that did compile, including every
        diagnostic.
    """

    def __init__(self, result: CompilationResult) -> None:
        self.result = result
        first = result.diagnostics[0]
        super().__init__(
            f"{len(result.diagnostics)} permission string(s) failed to compile; "
            f"first: {first.permission!r}: {first.message}"
        )

    @property
    def diagnostics(self) -> list[CompilationDiagnostic]:
        return self.result.diagnostics


class PermissionGraphCompiler:
    """Compiles batches of permission strings into permission graphs.

    Parameters
    ----------
    config:
        Compiler settings. Defaults to :class:`CompilerConfig` defaults
        (skip and record failing strings).
    """

    def __init__(self, config: CompilerConfig | None = None) -> None:
        self._config = config or CompilerConfig()
        self._parser = PermissionParser()

    @property
    def config(self) -> CompilerConfig:
        return self._config

    def extract(self, permission: str) -> list[Path]:
        """Parse one permission string and return its paths.

        Raises
        ------
        PermissionSyntaxError
            If *permission* does not match the grammar.
        MalformedIdentifierError
            If an id in *permission* is not a valid unsigned integer.
        """
        paths = extract_paths(self._parser.parse(permission))
        logger.debug("Permission %r expands to %d path(s)", permission, len(paths))
        return paths

    def compile(self, permissions: Iterable[str]) -> CompilationResult:
        """Compile *permissions* into a single graph.

        Raises
        ------
        PermissionCompilationError
            If ``on_error`` is ``"raise"`` and any string was dropped.
        """
        path_sets: list[list[Path]] = []
        diagnostics: list[CompilationDiagnostic] = []

        for permission in permissions:
            try:
                path_sets.append(self.extract(permission))
            except PermissionSyntaxError as exc:
                logger.error("Error parsing permission %r: %s", permission, exc)
                diagnostics.append(
                    CompilationDiagnostic(
                        permission=permission,
                        kind="syntax",
                        message=str(exc),
                        index=exc.failure.index,
                    )
                )
            except MalformedIdentifierError as exc:
                logger.error("Error converting permission %r: %s", permission, exc)
                diagnostics.append(
                    CompilationDiagnostic(
                        permission=permission,
                        kind="malformed_identifier",
                        message=str(exc),
                    )
                )

        result = CompilationResult(
            graph=compile_paths(path_sets),
            diagnostics=diagnostics,
            compiled_count=len(path_sets),
        )
        logger.info(
            "Compiled %d permission(s) into graph (%d dropped)",
            result.compiled_count,
            len(diagnostics),
        )

        if diagnostics and self._config.on_error == "raise":
            raise PermissionCompilationError(result)
        return result


def permissions_to_graph(permissions: Iterable[str]) -> Graph:
    """Compile *permissions* and return only the graph.

    Failing strings are skipped and logged; use
    :meth:`PermissionGraphCompiler.compile` to inspect them.
    """
    return PermissionGraphCompiler().compile(permissions).graph
