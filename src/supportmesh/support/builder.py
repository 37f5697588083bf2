"""
Support solid assembly.

Writes the support surface as a flat-shaded triangle soup into two
parallel, exactly sized buffers (positions and normals, nine floats per
triangle). Layout:

- for accepted face ``i``: top cap at triangle ``2*i``, bottom cap at
  ``2*i + 1``;
- for boundary edge ``j``: wall triangles at ``2*K + 2*j`` and
  ``2*K + 2*j + 1``, where ``K`` is the number of accepted faces.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from supportmesh.support.vector import triangle_normals

logger = logging.getLogger(__name__)

FLOATS_PER_TRIANGLE = 9

BOTTOM_NORMAL = np.array([0.0, 0.0, -1.0])


@dataclass(frozen=True)
class SupportBuffers:
    """Flat position and normal buffers of the support triangle soup."""

    vertices: np.ndarray
    normals: np.ndarray

    @property
    def triangle_count(self) -> int:
        return len(self.vertices) // FLOATS_PER_TRIANGLE


def buffer_size(face_count: int, edge_count: int) -> int:
    """Number of floats needed for the given face and boundary edge counts."""
    return (2 * face_count + 2 * edge_count) * FLOATS_PER_TRIANGLE


def _grounded(points: np.ndarray) -> np.ndarray:
    out = np.array(points, dtype=np.float64, copy=True)
    out[..., 2] = 0.0
    return out


def cap_triangles(
    vertices: np.ndarray, triangles: np.ndarray, face_normals: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    """
    Top and bottom caps for each accepted face, interleaved per face.

    The top cap is the face with reversed winding ``(c, b, a)``, shaded with
    the face's inward normal. The bottom cap is its footprint ``(a', b', c')``
    on the plate, facing straight down.

    Returns:
        Corners of shape (2K, 3, 3) and per-triangle normals of shape (2K, 3).
    """
    k = len(triangles)
    corners = np.asarray(vertices, dtype=np.float64)[triangles]
    caps = np.empty((2 * k, 3, 3))
    caps[0::2] = corners[:, ::-1]
    caps[1::2] = _grounded(corners)

    normals = np.empty((2 * k, 3))
    normals[0::2] = face_normals
    normals[1::2] = BOTTOM_NORMAL
    return caps, normals


def wall_triangles(vertices: np.ndarray, edges: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Two vertical wall triangles per boundary edge ``(p0, p1)``:
    ``(p0, p1, p0')`` and ``(p1', p0', p1)``.

    Normals are recomputed from each triangle's own corners, so walls under
    sloped edges are shaded correctly. A zero-length edge gives a zero
    normal.

    Returns:
        Corners of shape (2E, 3, 3) and per-triangle normals of shape (2E, 3).
    """
    e = len(edges)
    if e == 0:
        return np.zeros((0, 3, 3)), np.zeros((0, 3))

    points = np.asarray(vertices, dtype=np.float64)
    p0 = points[edges[:, 0]]
    p1 = points[edges[:, 1]]
    g0 = _grounded(p0)
    g1 = _grounded(p1)

    walls = np.empty((2 * e, 3, 3))
    walls[0::2] = np.stack([p0, p1, g0], axis=1)
    walls[1::2] = np.stack([g1, g0, p1], axis=1)
    return walls, triangle_normals(walls)


def build_support_buffers(
    vertices: np.ndarray,
    triangles: np.ndarray,
    face_normals: np.ndarray,
    edges: np.ndarray,
    dtype: np.dtype | str = np.float32,
) -> SupportBuffers:
    """
    Assemble the support triangle soup.

    Args:
        vertices: (N, 3) input vertex positions.
        triangles: (K, 3) accepted faces.
        face_normals: (K, 3) inward normals of the accepted faces.
        edges: (E, 2) boundary edges.
        dtype: Float type of the output buffers.

    Returns:
        SupportBuffers with ``buffer_size(K, E)`` floats in each buffer.
    """
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    edges = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
    k, e = len(triangles), len(edges)

    size = buffer_size(k, e)
    positions = np.zeros(size, dtype=dtype)
    normals = np.zeros(size, dtype=dtype)

    split = 2 * k * FLOATS_PER_TRIANGLE
    if k:
        caps, cap_normals = cap_triangles(vertices, triangles, face_normals)
        positions[:split] = caps.reshape(-1)
        normals[:split] = np.repeat(cap_normals, 3, axis=0).reshape(-1)
    if e:
        walls, wall_normals = wall_triangles(vertices, edges)
        positions[split:] = walls.reshape(-1)
        normals[split:] = np.repeat(wall_normals, 3, axis=0).reshape(-1)

    logger.debug(
        "Support buffers: %d cap triangles, %d wall triangles, %d floats",
        2 * k,
        2 * e,
        size,
    )
    return SupportBuffers(vertices=positions, normals=normals)
