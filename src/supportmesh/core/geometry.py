"""
Mesh input handling for supportmesh.

Provides the read-only ``TriangleMesh`` consumed by support generation,
plus loaders and converters between trimesh, COMPAS and flat buffers.
"""

from pathlib import Path
from typing import Any, Optional, Sequence

import numpy as np
import trimesh
from compas.datastructures import Mesh as CompasMesh

from supportmesh.core.config import DEFAULT_PRECISION_FACTOR
from supportmesh.core.exceptions import GeometryError, InvalidMeshError


class TriangleMesh:
    """
    Closed, consistently wound triangle mesh.

    Vertices are stored as a float64 ``(N, 3)`` array and triangles as an
    int64 ``(M, 3)`` array of indices into it. Both arrays are made
    read-only on construction.

    Args:
        vertices: Vertex positions, anything numpy can shape to (N, 3).
        triangles: Vertex index triples, shape (M, 3).
        tolerance: Explicit precision. When omitted, ``precision()`` derives
            one from the coordinate scale.

    Raises:
        InvalidMeshError: On bad shapes, non-integer or out-of-range indices.
    """

    def __init__(
        self,
        vertices: Any,
        triangles: Any,
        tolerance: Optional[float] = None,
    ) -> None:
        verts = np.array(vertices, dtype=np.float64)
        tris = np.array(triangles)

        if verts.size == 0:
            verts = verts.reshape(0, 3)
        if tris.size == 0:
            tris = tris.reshape(0, 3).astype(np.int64)

        if verts.ndim != 2 or verts.shape[1] != 3:
            raise InvalidMeshError(
                "Vertices must have shape (N, 3)",
                details={"shape": verts.shape},
            )
        if tris.ndim != 2 or tris.shape[1] != 3:
            raise InvalidMeshError(
                "Triangles must have shape (M, 3)",
                details={"shape": tris.shape},
            )
        if not np.issubdtype(tris.dtype, np.integer):
            raise InvalidMeshError(
                "Triangle indices must be integers",
                details={"dtype": str(tris.dtype)},
            )
        if tolerance is not None and tolerance < 0:
            raise InvalidMeshError(
                "Tolerance must be non-negative",
                details={"tolerance": tolerance},
            )

        tris = tris.astype(np.int64)
        if len(tris):
            bad = (tris < 0) | (tris >= len(verts))
            if bad.any():
                index = int(tris[bad][0])
                raise InvalidMeshError(
                    f"Triangle index {index} out of range",
                    index=index,
                    vertex_count=len(verts),
                    details={"triangle": int(np.argwhere(bad)[0][0])},
                )

        verts.flags.writeable = False
        tris.flags.writeable = False
        self._vertices = verts
        self._triangles = tris
        self._tolerance = tolerance

    @property
    def vertices(self) -> np.ndarray:
        return self._vertices

    @property
    def triangles(self) -> np.ndarray:
        return self._triangles

    @property
    def tolerance(self) -> Optional[float]:
        return self._tolerance

    def __len__(self) -> int:
        return len(self._triangles)

    def __repr__(self) -> str:
        return (
            f"TriangleMesh(vertices={len(self._vertices)}, "
            f"triangles={len(self._triangles)})"
        )

    def scale(self) -> float:
        """Largest absolute vertex coordinate (0.0 for an empty mesh)."""
        if len(self._vertices) == 0:
            return 0.0
        return float(np.abs(self._vertices).max())

    def precision(self, factor: float = DEFAULT_PRECISION_FACTOR) -> float:
        """
        Tolerance for "approximately zero" comparisons.

        Returns the explicit tolerance when one was given, otherwise
        ``scale() * factor``.
        """
        if self._tolerance is not None:
            return float(self._tolerance)
        return self.scale() * factor

    @classmethod
    def from_flat(
        cls,
        vert_properties: Sequence[float],
        tri_verts: Sequence[int],
        num_prop: int = 3,
        tolerance: Optional[float] = None,
    ) -> "TriangleMesh":
        """
        Build a mesh from flat buffers as exported by mesh-boolean libraries.

        Args:
            vert_properties: Flat per-vertex properties, ``num_prop`` floats
                per vertex, the first three being x, y, z.
            tri_verts: Flat triangle indices, three per triangle.
            num_prop: Number of properties per vertex (>= 3).
            tolerance: Optional explicit precision.
        """
        if num_prop < 3:
            raise InvalidMeshError(
                "Vertices need at least 3 properties",
                details={"num_prop": num_prop},
            )
        props = np.asarray(vert_properties, dtype=np.float64)
        indices = np.asarray(tri_verts)
        if props.size % num_prop or indices.size % 3:
            raise InvalidMeshError(
                "Flat buffer length is not a multiple of its stride",
                details={"vert_properties": props.size, "tri_verts": indices.size},
            )
        vertices = props.reshape(-1, num_prop)[:, :3]
        return cls(vertices, indices.reshape(-1, 3), tolerance=tolerance)

    @classmethod
    def from_trimesh(
        cls, mesh: trimesh.Trimesh, tolerance: Optional[float] = None
    ) -> "TriangleMesh":
        """Wrap a trimesh mesh without modifying it."""
        return cls(mesh.vertices, mesh.faces, tolerance=tolerance)

    @classmethod
    def from_compas(
        cls, mesh: CompasMesh, tolerance: Optional[float] = None
    ) -> "TriangleMesh":
        """Wrap a COMPAS mesh, triangulating polygon faces on the way."""
        return cls.from_trimesh(
            GeometryConverter.compas_to_trimesh(mesh), tolerance=tolerance
        )


class GeometryConverter:
    """
    Converter between different geometry representations.

    Handles conversion between COMPAS and Trimesh meshes.
    """

    @staticmethod
    def trimesh_to_compas(mesh: trimesh.Trimesh) -> CompasMesh:
        """
        Convert Trimesh mesh to COMPAS Mesh.

        Raises:
            GeometryError: If conversion fails
        """
        try:
            vertices = mesh.vertices.tolist()
            faces = mesh.faces.tolist()
            return CompasMesh.from_vertices_and_faces(vertices, faces)
        except Exception as e:
            raise GeometryError(f"Failed to convert Trimesh to COMPAS: {e}") from e

    @staticmethod
    def compas_to_trimesh(mesh: CompasMesh) -> trimesh.Trimesh:
        """
        Convert COMPAS Mesh to Trimesh.

        Vertex keys are remapped to contiguous indices, and polygon faces
        are fan-triangulated preserving their winding.

        Raises:
            GeometryError: If conversion fails
        """
        try:
            keys = list(mesh.vertices())
            index = {key: i for i, key in enumerate(keys)}
            vertices = [mesh.vertex_coordinates(key) for key in keys]
            faces = []
            for fkey in mesh.faces():
                loop = [index[key] for key in mesh.face_vertices(fkey)]
                for i in range(1, len(loop) - 1):
                    faces.append([loop[0], loop[i], loop[i + 1]])
            return trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
        except Exception as e:
            raise GeometryError(f"Failed to convert COMPAS to Trimesh: {e}") from e


class GeometryLoader:
    """
    Loads and saves triangle meshes.

    Supports STL, OBJ, PLY and OFF through trimesh.
    """

    SUPPORTED_FORMATS = {".stl", ".obj", ".ply", ".off"}

    @classmethod
    def load(cls, file_path: str | Path, **kwargs: Any) -> trimesh.Trimesh:
        """
        Load a mesh from file.

        Args:
            file_path: Path to geometry file
            **kwargs: Additional arguments passed to trimesh.load

        Returns:
            Trimesh mesh; scenes are concatenated into one mesh

        Raises:
            GeometryError: If file format is unsupported or loading fails
        """
        path = Path(file_path)

        if not path.exists():
            raise GeometryError(f"File not found: {path}")

        if path.suffix.lower() not in cls.SUPPORTED_FORMATS:
            raise GeometryError(
                f"Unsupported format: {path.suffix}. "
                f"Supported formats: {cls.SUPPORTED_FORMATS}"
            )

        try:
            loaded = trimesh.load(str(path), **kwargs)
        except Exception as e:
            raise GeometryError(f"Failed to load geometry from {path}: {e}") from e

        if isinstance(loaded, trimesh.Scene):
            meshes = [
                geom for geom in loaded.geometry.values()
                if isinstance(geom, trimesh.Trimesh)
            ]
            if not meshes:
                raise GeometryError(f"No triangle meshes in scene: {path}")
            return trimesh.util.concatenate(meshes)
        if isinstance(loaded, trimesh.Trimesh):
            return loaded
        raise GeometryError(f"Unexpected geometry type: {type(loaded)}")

    @classmethod
    def save(cls, mesh: trimesh.Trimesh, file_path: str | Path, **kwargs: Any) -> None:
        """
        Save a mesh to file.

        Raises:
            GeometryError: If saving fails
        """
        path = Path(file_path)
        try:
            mesh.export(str(path), **kwargs)
        except Exception as e:
            raise GeometryError(f"Failed to save geometry to {path}: {e}") from e
