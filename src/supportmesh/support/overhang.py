"""
Overhang classification.

Decides, per triangle, whether it needs support. A face is accepted when
its unit outward normal points down more steeply than the support angle
allows, unless it already lies flat on the build plate.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from supportmesh.core.config import DEFAULT_SUPPORT_ANGLE
from supportmesh.core.geometry import TriangleMesh
from supportmesh.support.vector import triangle_normals

logger = logging.getLogger(__name__)

NEEDS_SUPPORT_ANGLE = math.radians(DEFAULT_SUPPORT_ANGLE)

# Faces with normal.z above this value need no support.
SUPPORT_THRESH = -math.sin(NEEDS_SUPPORT_ANGLE)


@dataclass(frozen=True)
class AcceptedFaces:
    """
    Faces selected for support, in input order.

    Attributes:
        indices: Positions of the accepted faces in the input triangle list.
        triangles: (K, 3) vertex indices of the accepted faces.
        normals: (K, 3) inward normals (negated outward normals), used to
            shade the top cap of the support.
    """

    indices: np.ndarray
    triangles: np.ndarray
    normals: np.ndarray

    def __len__(self) -> int:
        return len(self.triangles)

    def reordered(self, order: np.ndarray) -> "AcceptedFaces":
        """Return the same faces in a different order."""
        order = np.asarray(order)
        return AcceptedFaces(
            indices=self.indices[order],
            triangles=self.triangles[order],
            normals=self.normals[order],
        )


def face_normals(mesh: TriangleMesh) -> np.ndarray:
    """Unit outward normals of every triangle; degenerate faces get zeros."""
    if len(mesh) == 0:
        return np.zeros((0, 3))
    return triangle_normals(mesh.vertices[mesh.triangles])


def overhang_mask(
    mesh: TriangleMesh,
    precision: float,
    threshold: float = SUPPORT_THRESH,
) -> np.ndarray:
    """
    Boolean mask of faces that need support.

    Args:
        mesh: Input mesh.
        precision: Tolerance for the flat-on-plate test.
        threshold: Normal z-component above which a face is skipped.

    Returns:
        Boolean array of shape (M,).
    """
    return _accept(mesh, face_normals(mesh), precision, threshold)


def _accept(
    mesh: TriangleMesh,
    normals: np.ndarray,
    precision: float,
    threshold: float,
) -> np.ndarray:
    if len(normals) == 0:
        return np.zeros(0, dtype=bool)

    nz = normals[:, 2]
    facing_down = nz <= threshold

    # Flat faces already resting on the plate.
    first_z = mesh.vertices[mesh.triangles[:, 0], 2]
    on_plate = (nz < -(1.0 - precision)) & (first_z < precision)

    return facing_down & ~on_plate


def classify_faces(
    mesh: TriangleMesh,
    precision: float,
    threshold: float = SUPPORT_THRESH,
) -> AcceptedFaces:
    """
    Select the faces that need support, paired with their inward normals.

    Degenerate (zero-area) faces have a zero normal and are never accepted.
    """
    normals = face_normals(mesh)
    mask = _accept(mesh, normals, precision, threshold)
    indices = np.flatnonzero(mask)

    logger.debug(
        "Overhang classification: %d / %d faces accepted (threshold %.4f, eps %g)",
        len(indices),
        len(mask),
        threshold,
        precision,
    )
    return AcceptedFaces(
        indices=indices,
        triangles=mesh.triangles[indices],
        normals=-normals[indices],
    )
