"""
Support volume accumulation.

Each accepted face is extruded to the plate as a closed eight-triangle
column: the face itself (reversed), its footprint, and two triangles per
side. The volume of a closed triangle-faced solid is the divergence-theorem
sum of ``dot(cross(f2 - f1, f0 - f1), f0) / 6`` over its faces. Side
triangles shared by neighbouring columns are traversed in opposite
directions and cancel, so summing columns gives the volume of the whole
support solid.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def polyhedron_volume(faces: Sequence[Sequence[np.ndarray]] | np.ndarray) -> float:
    """
    Signed volume of a closed polyhedron made up of triangle faces.

    Args:
        faces: Triangles as (a, b, c) point triples, shape (F, 3, 3).
    """
    faces = np.asarray(faces, dtype=np.float64).reshape(-1, 3, 3)
    if len(faces) == 0:
        return 0.0
    f0, f1, f2 = faces[:, 0], faces[:, 1], faces[:, 2]
    triple = np.einsum("ij,ij->i", np.cross(f2 - f1, f0 - f1), f0)
    return float(triple.sum() / 6.0)


def column_faces(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> np.ndarray:
    """
    The eight triangles of the column below face (a, b, c).

    Inputs may be single points of shape (3,) or stacks of shape (K, 3);
    the result has shape (8, 3, 3) or (K, 8, 3, 3).
    """
    a, b, c = (np.asarray(p, dtype=np.float64) for p in (a, b, c))
    ag, bg, cg = (p.copy() for p in (a, b, c))
    for p in (ag, bg, cg):
        p[..., 2] = 0.0

    return np.stack(
        [
            np.stack([c, b, a], axis=-2),
            np.stack([ag, bg, cg], axis=-2),
            np.stack([a, b, ag], axis=-2),
            np.stack([bg, ag, b], axis=-2),
            np.stack([b, c, bg], axis=-2),
            np.stack([cg, bg, c], axis=-2),
            np.stack([c, a, cg], axis=-2),
            np.stack([ag, cg, a], axis=-2),
        ],
        axis=-3,
    )


def column_volumes(vertices: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """Signed volume of the column under each face, shape (K,)."""
    triangles = np.asarray(triangles)
    if len(triangles) == 0:
        return np.zeros(0)
    corners = np.asarray(vertices, dtype=np.float64)[triangles]
    faces = column_faces(corners[:, 0], corners[:, 1], corners[:, 2])
    f0, f1, f2 = faces[..., 0, :], faces[..., 1, :], faces[..., 2, :]
    triple = np.einsum("kfi,kfi->kf", np.cross(f2 - f1, f0 - f1), f0)
    return triple.sum(axis=1) / 6.0


def support_volume(vertices: np.ndarray, triangles: np.ndarray) -> float:
    """Total volume of the support under the given accepted faces."""
    return float(column_volumes(vertices, triangles).sum())
