"""Absorption table for permission graph reduction.

When a node's children include a terminal leaf marker from this table,
the whole node collapses to that marker: a broader grant makes every
narrower sibling redundant. If several absorbing terminals meet at one
node, the earliest entry wins, so ``block`` overrides ``all``, ``write``
overrides ``read`` and ``full`` overrides ``limited``.
"""
from __future__ import annotations

from typing import Iterable

from permission_graph.paths.segments import Marker, Segment

ABSORPTION_ORDER: tuple[Marker, ...] = (
    Marker.BLOCK,
    Marker.ALL,
    Marker.WRITE,
    Marker.READ,
    Marker.SEGMENTED,
    Marker.FULL,
    Marker.LIMITED,
)

_ABSORBING: frozenset[Marker] = frozenset(ABSORPTION_ORDER)


def is_absorbing(segment: Segment) -> bool:
    """Return ``True`` if *segment* may terminate a path."""
    return isinstance(segment, Marker) and segment in _ABSORBING


def absorbing_marker(terminals: Iterable[Segment]) -> Marker | None:
    """Return the marker a node with these terminal children collapses to.

    Returns ``None`` when none of *terminals* is absorbing.

    >>> absorbing_marker([Marker.READ, Marker.WRITE])
    Marker.WRITE
    """
    present = {t for t in terminals if is_absorbing(t)}
    for marker in ABSORPTION_ORDER:
        if marker in present:
            return marker
    return None
