"""Policy documents and compiler settings."""
from __future__ import annotations

from permission_graph.config.loader import PolicyConfigError, PolicyLoader
from permission_graph.config.models import (
    SUPPORTED_VERSIONS,
    CompilerConfig,
    PolicyDocument,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "CompilerConfig",
    "PolicyConfigError",
    "PolicyDocument",
    "PolicyLoader",
]
