"""
Support generation for 3D printing.

Computes, from a closed triangle mesh, a solid that fills the space between
its overhanging surfaces and the build plate (z = 0), together with the
volume of that solid.

The pass is a single forward sweep with no state kept between calls:

1. classify faces (``overhang.classify_faces``),
2. toggle their edges into the boundary set (``boundary.extract_boundary``),
3. write caps and walls into exactly sized buffers (``builder``),
4. sum per-face column volumes (``volume``).

Uses **numpy** for the vectorised geometry and **trimesh** to weld the
resulting triangle soup when a proper mesh is needed for export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
import trimesh

from supportmesh.core.config import SupportConfig
from supportmesh.core.exceptions import SupportGenerationError
from supportmesh.core.geometry import TriangleMesh
from supportmesh.core.logging import get_logger
from supportmesh.support.boundary import extract_boundary
from supportmesh.support.builder import FLOATS_PER_TRIANGLE, build_support_buffers
from supportmesh.support.overhang import classify_faces
from supportmesh.support.volume import support_volume

logger = get_logger(__name__)


@dataclass(frozen=True)
class SupportResult:
    """
    Output of support generation.

    Attributes:
        vertices: Flat positions, nine floats per triangle.
        normals: Flat per-vertex normals parallel to ``vertices``.
        volume: Enclosed volume of the support solid.
        face_count: Number of accepted overhang faces.
        boundary_edge_count: Number of surviving boundary edges.
    """

    vertices: np.ndarray
    normals: np.ndarray
    volume: float
    face_count: int
    boundary_edge_count: int
    precision: float = 0.0
    accepted: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))

    @property
    def triangle_count(self) -> int:
        return len(self.vertices) // FLOATS_PER_TRIANGLE

    @property
    def is_empty(self) -> bool:
        return self.triangle_count == 0

    def positions(self) -> np.ndarray:
        """Triangle corners as a (T, 3, 3) view of ``vertices``."""
        return self.vertices.reshape(-1, 3, 3)

    def to_trimesh(self) -> trimesh.Trimesh:
        """
        Weld the triangle soup into a trimesh mesh.

        Coincident corners are merged, so a support over a closed overhang
        patch comes back watertight.
        """
        corners = self.positions().reshape(-1, 3).astype(np.float64)
        faces = np.arange(len(corners)).reshape(-1, 3)
        mesh = trimesh.Trimesh(vertices=corners, faces=faces, process=False)
        mesh.merge_vertices()
        return mesh

    def to_dict(self) -> dict[str, Any]:
        return {
            "face_count": self.face_count,
            "boundary_edge_count": self.boundary_edge_count,
            "triangle_count": self.triangle_count,
            "volume": self.volume,
            "precision": self.precision,
        }


def generate_support(
    mesh: TriangleMesh,
    precision: Optional[float] = None,
    config: Optional[SupportConfig] = None,
) -> SupportResult:
    """
    Generate the support solid for *mesh*.

    Args:
        mesh: Closed, outward-wound input mesh.
        precision: Tolerance for "approximately zero" tests. Defaults to the
            profile's ``precision``, then to ``mesh.precision()``.
        config: Support profile; defaults to ``SupportConfig()``.

    Returns:
        SupportResult with the support triangle soup and its volume.

    Raises:
        SupportGenerationError: If the tolerance is negative or the mesh
            produces non-finite geometry.
    """
    config = config or SupportConfig()
    if precision is None:
        precision = config.precision
    if precision is None:
        precision = mesh.precision(config.precision_factor)
    if precision < 0:
        raise SupportGenerationError(
            "Precision must be non-negative", details={"precision": precision}
        )

    accepted = classify_faces(mesh, precision, config.support_threshold)
    boundary = extract_boundary(accepted.triangles)
    edges = boundary.as_array()

    buffers = build_support_buffers(
        mesh.vertices,
        accepted.triangles,
        accepted.normals,
        edges,
        dtype=config.dtype,
    )
    volume = support_volume(mesh.vertices, accepted.triangles)

    if not np.isfinite(volume):
        raise SupportGenerationError(
            "Support volume is not finite",
            details={"faces": len(accepted), "edges": len(edges)},
        )

    result = SupportResult(
        vertices=buffers.vertices,
        normals=buffers.normals,
        volume=volume,
        face_count=len(accepted),
        boundary_edge_count=len(edges),
        precision=float(precision),
        accepted=accepted.indices,
    )

    logger.info(
        "support_generated",
        input_faces=len(mesh),
        accepted_faces=result.face_count,
        boundary_edges=result.boundary_edge_count,
        triangles=result.triangle_count,
        volume=round(volume, 6),
    )
    return result


def support_from_trimesh(
    mesh: trimesh.Trimesh,
    precision: Optional[float] = None,
    config: Optional[SupportConfig] = None,
) -> SupportResult:
    """Convenience wrapper: generate support for a trimesh mesh."""
    return generate_support(TriangleMesh.from_trimesh(mesh), precision, config)
