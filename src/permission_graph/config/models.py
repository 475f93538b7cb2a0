"""Pydantic v2 models for compiler settings and policy documents.

A policy document names permission groups and the permission strings
granted to each::

    version: "1"
    compiler:
      on_error: skip
    groups:
      administrators:
        - "/"
      analysts:
        - "/db/3/"
        - "/collection/root/read/"

Unknown keys are allowed so that documents written for newer versions
still load.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from permission_graph.graph.compiler import CompilationResult

SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1", "1.0"])


class CompilerConfig(BaseModel):
    """Settings for :class:`~permission_graph.graph.compiler.PermissionGraphCompiler`.

    ``on_error`` decides what happens when a permission string fails to
    parse or carries a malformed id: ``"skip"`` drops the string and
    records a diagnostic, ``"raise"`` fails the whole batch.
    """

    model_config = {"extra": "allow"}

    on_error: Literal["skip", "raise"] = Field(default="skip")


class PolicyDocument(BaseModel):
    """Top-level policy document schema."""

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    description: str | None = Field(default=None)
    compiler: CompilerConfig = Field(default_factory=CompilerConfig)
    groups: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value: object) -> str:
        version = str(value)
        if version not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported policy version {version!r}. "
                f"Supported: {sorted(SUPPORTED_VERSIONS)}."
            )
        return version

    @field_validator("groups")
    @classmethod
    def validate_groups(cls, groups: dict[str, list[str]]) -> dict[str, list[str]]:
        for name in groups:
            if not name.strip():
                raise ValueError("Group names must not be blank.")
        return groups

    def compile(self) -> dict[str, CompilationResult]:
        """Compile every group's permissions with this document's settings."""
        from permission_graph.graph.compiler import PermissionGraphCompiler

        compiler = PermissionGraphCompiler(self.compiler)
        return {name: compiler.compile(perms) for name, perms in self.groups.items()}
