"""
Boundary extraction by edge toggling.

Every accepted face contributes its three directed edges. An edge whose
reverse is already present is interior to the accepted patch and cancels
it; otherwise it is inserted. What survives is the silhouette of the
patch, each edge keeping the direction of the face that owns it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]

_INDEX_BITS = 32
_INDEX_MASK = (1 << _INDEX_BITS) - 1


def edge_key(e0: int, e1: int) -> int:
    """Pack a directed edge into a single integer key."""
    return (int(e0) << _INDEX_BITS) | int(e1)


def unpack_edge_key(key: int) -> Edge:
    return key >> _INDEX_BITS, key & _INDEX_MASK


class BoundaryEdgeSet:
    """
    Toggling set of directed edges.

    Iteration yields surviving edges in the order they were first
    inserted, so output built from it is deterministic.

    Example:
        >>> edges = BoundaryEdgeSet()
        >>> edges.add_triangle((0, 1, 2))
        >>> edges.add_triangle((0, 2, 3))
        >>> len(edges)
        4
    """

    def __init__(self) -> None:
        self._edges: dict[int, None] = {}

    def toggle(self, e0: int, e1: int) -> bool:
        """
        Insert edge (e0, e1), or cancel it against a stored (e1, e0).

        Returns:
            True if the edge was inserted, False if it cancelled.
        """
        reverse = edge_key(e1, e0)
        if reverse in self._edges:
            del self._edges[reverse]
            return False
        self._edges[edge_key(e0, e1)] = None
        return True

    def add_triangle(self, tri: Iterable[int]) -> None:
        i0, i1, i2 = (int(i) for i in tri)
        self.toggle(i0, i1)
        self.toggle(i1, i2)
        self.toggle(i2, i0)

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return (unpack_edge_key(key) for key in self._edges)

    def __contains__(self, edge: object) -> bool:
        if not isinstance(edge, tuple) or len(edge) != 2:
            return False
        return edge_key(*edge) in self._edges

    def as_array(self) -> np.ndarray:
        """Surviving edges as an (E, 2) int64 array."""
        if not self._edges:
            return np.zeros((0, 2), dtype=np.int64)
        return np.array(list(self), dtype=np.int64)


def extract_boundary(triangles: np.ndarray) -> BoundaryEdgeSet:
    """
    Toggle the edges of all accepted faces.

    Args:
        triangles: (K, 3) vertex indices of the accepted faces.

    Returns:
        The surviving boundary edges. Open or non-manifold input may leave
        fragments that do not close into loops.
    """
    boundary = BoundaryEdgeSet()
    for tri in np.asarray(triangles).tolist():
        boundary.add_triangle(tri)

    logger.debug(
        "Boundary extraction: %d boundary edges from %d faces",
        len(boundary),
        len(triangles),
    )
    return boundary
