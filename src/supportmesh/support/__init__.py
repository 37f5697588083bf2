"""
Support module - Overhang support solids for 3D printing.

Working pieces, in dependency order:
- vector: 3-component vector helpers
- overhang: per-face classification against the support angle
- boundary: silhouette of the overhang patch by edge toggling
- builder: caps and walls written into flat render buffers
- volume: divergence-theorem volume of the extruded columns
"""

from supportmesh.support.boundary import BoundaryEdgeSet, extract_boundary
from supportmesh.support.builder import SupportBuffers, build_support_buffers, buffer_size
from supportmesh.support.generator import (
    SupportResult,
    generate_support,
    support_from_trimesh,
)
from supportmesh.support.overhang import (
    SUPPORT_THRESH,
    AcceptedFaces,
    classify_faces,
    overhang_mask,
)
from supportmesh.support.volume import column_volumes, polyhedron_volume, support_volume

__all__ = [
    "BoundaryEdgeSet",
    "extract_boundary",
    "SupportBuffers",
    "build_support_buffers",
    "buffer_size",
    "SupportResult",
    "generate_support",
    "support_from_trimesh",
    "SUPPORT_THRESH",
    "AcceptedFaces",
    "classify_faces",
    "overhang_mask",
    "column_volumes",
    "polyhedron_volume",
    "support_volume",
]
