"""Permission paths: segment types and parse-tree extraction."""
from __future__ import annotations

from permission_graph.paths.extractor import (
    MAX_IDENTIFIER,
    MalformedIdentifierError,
    UnrecognizedBranchError,
    collection_id,
    extract_paths,
    parse_unsigned,
)
from permission_graph.paths.segments import (
    Marker,
    Path,
    Segment,
    format_path,
    format_segment,
)

__all__ = [
    "MAX_IDENTIFIER",
    "MalformedIdentifierError",
    "Marker",
    "Path",
    "Segment",
    "UnrecognizedBranchError",
    "collection_id",
    "extract_paths",
    "format_path",
    "format_segment",
    "parse_unsigned",
]
