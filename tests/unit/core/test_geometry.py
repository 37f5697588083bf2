"""
Tests for geometry module.
"""

import numpy as np
import pytest
import trimesh
from compas.datastructures import Mesh as CompasMesh

from supportmesh.core.exceptions import GeometryError, InvalidMeshError
from supportmesh.core.geometry import GeometryConverter, GeometryLoader, TriangleMesh


@pytest.fixture
def simple_trimesh():
    """Create a simple trimesh cube for testing."""
    return trimesh.creation.box(extents=[2.0, 2.0, 2.0])


@pytest.fixture
def simple_compas_mesh():
    """Create a simple COMPAS quad cube, outward wound."""
    vertices = [
        [0, 0, 0],
        [1, 0, 0],
        [1, 1, 0],
        [0, 1, 0],
        [0, 0, 1],
        [1, 0, 1],
        [1, 1, 1],
        [0, 1, 1],
    ]
    faces = [
        [0, 3, 2, 1],  # bottom
        [4, 5, 6, 7],  # top
        [0, 1, 5, 4],  # front
        [2, 3, 7, 6],  # back
        [0, 4, 7, 3],  # left
        [1, 2, 6, 5],  # right
    ]
    return CompasMesh.from_vertices_and_faces(vertices, faces)


class TestTriangleMesh:
    """Tests for TriangleMesh validation and precision."""

    def test_basic(self):
        mesh = TriangleMesh([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[0, 1, 2]])
        assert len(mesh) == 1
        assert mesh.vertices.dtype == np.float64
        assert mesh.triangles.dtype == np.int64

    def test_read_only(self):
        mesh = TriangleMesh([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[0, 1, 2]])
        with pytest.raises(ValueError):
            mesh.vertices[0, 0] = 5.0

    def test_index_out_of_range(self):
        with pytest.raises(InvalidMeshError, match="out of range") as exc:
            TriangleMesh([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[0, 1, 3]])
        assert exc.value.index == 3
        assert exc.value.vertex_count == 3

    def test_negative_index(self):
        with pytest.raises(InvalidMeshError):
            TriangleMesh([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[0, -1, 2]])

    def test_bad_vertex_shape(self):
        with pytest.raises(InvalidMeshError, match="Vertices"):
            TriangleMesh([[0, 0], [1, 0]], [])

    def test_bad_triangle_shape(self):
        with pytest.raises(InvalidMeshError, match="Triangles"):
            TriangleMesh([[0, 0, 0]], [[0, 0]])

    def test_float_indices_rejected(self):
        with pytest.raises(InvalidMeshError, match="integers"):
            TriangleMesh([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [[0.0, 1.0, 2.0]])

    def test_negative_tolerance_rejected(self):
        with pytest.raises(InvalidMeshError):
            TriangleMesh([], [], tolerance=-1.0)

    def test_invalid_mesh_is_geometry_error(self):
        with pytest.raises(GeometryError):
            TriangleMesh([[0, 0, 0]], [[0, 0, 1]])

    def test_precision_explicit(self):
        mesh = TriangleMesh([[100, 0, 0]], [], tolerance=0.01)
        assert mesh.precision() == 0.01

    def test_precision_relative_to_scale(self):
        mesh = TriangleMesh([[-200, 0, 0], [50, 10, 3]], [])
        assert mesh.scale() == 200.0
        assert mesh.precision() == pytest.approx(2e-4)
        assert mesh.precision(factor=1e-3) == pytest.approx(0.2)

    def test_empty(self):
        mesh = TriangleMesh([], [])
        assert len(mesh) == 0
        assert mesh.precision() == 0.0

    def test_from_flat(self):
        mesh = TriangleMesh.from_flat(
            [0, 0, 1, 0, 1, 1, 1, 0, 1], [0, 1, 2], tolerance=1e-6
        )
        assert mesh.vertices.shape == (3, 3)
        assert mesh.triangles.tolist() == [[0, 1, 2]]

    def test_from_flat_extra_properties(self):
        """Only the first three properties of each vertex are positions."""
        props = [0, 0, 1, 0.5, 0, 1, 1, 0.5, 1, 0, 1, 0.5]
        mesh = TriangleMesh.from_flat(props, [0, 1, 2], num_prop=4)
        assert mesh.vertices.tolist() == [[0, 0, 1], [0, 1, 1], [1, 0, 1]]

    def test_from_flat_bad_stride(self):
        with pytest.raises(InvalidMeshError, match="multiple"):
            TriangleMesh.from_flat([0, 0, 1, 0], [0, 1, 2])

    def test_from_trimesh(self, simple_trimesh):
        mesh = TriangleMesh.from_trimesh(simple_trimesh)
        assert len(mesh) == len(simple_trimesh.faces)
        assert np.array_equal(mesh.vertices, simple_trimesh.vertices)

    def test_from_compas_triangulates(self, simple_compas_mesh):
        mesh = TriangleMesh.from_compas(simple_compas_mesh)
        assert len(mesh) == 12
        assert len(mesh.vertices) == 8


class TestGeometryConverter:
    """Tests for GeometryConverter."""

    def test_trimesh_to_compas(self, simple_trimesh):
        compas_mesh = GeometryConverter.trimesh_to_compas(simple_trimesh)

        assert isinstance(compas_mesh, CompasMesh)
        assert compas_mesh.number_of_vertices() == simple_trimesh.vertices.shape[0]
        assert compas_mesh.number_of_faces() == simple_trimesh.faces.shape[0]

    def test_compas_to_trimesh_keeps_winding(self, simple_compas_mesh):
        tmesh = GeometryConverter.compas_to_trimesh(simple_compas_mesh)

        assert isinstance(tmesh, trimesh.Trimesh)
        assert tmesh.is_watertight
        assert tmesh.volume == pytest.approx(1.0)

    def test_roundtrip_conversion(self, simple_trimesh):
        compas_mesh = GeometryConverter.trimesh_to_compas(simple_trimesh)
        back_to_trimesh = GeometryConverter.compas_to_trimesh(compas_mesh)

        assert len(back_to_trimesh.vertices) == simple_trimesh.vertices.shape[0]
        assert len(back_to_trimesh.faces) == simple_trimesh.faces.shape[0]


class TestGeometryLoader:
    """Tests for GeometryLoader."""

    def test_supported_formats(self):
        assert ".stl" in GeometryLoader.SUPPORTED_FORMATS
        assert ".obj" in GeometryLoader.SUPPORTED_FORMATS

    def test_load_nonexistent_file(self):
        with pytest.raises(GeometryError, match="File not found"):
            GeometryLoader.load("nonexistent_file.stl")

    def test_load_unsupported_format(self, tmp_path):
        dummy_file = tmp_path / "test.xyz"
        dummy_file.write_text("dummy content")

        with pytest.raises(GeometryError, match="Unsupported format"):
            GeometryLoader.load(dummy_file)

    def test_save_and_load_stl(self, simple_trimesh, tmp_path):
        output_file = tmp_path / "test.stl"

        GeometryLoader.save(simple_trimesh, output_file)
        assert output_file.exists()

        loaded = GeometryLoader.load(output_file)
        assert isinstance(loaded, trimesh.Trimesh)
        assert len(loaded.faces) == len(simple_trimesh.faces)
        assert loaded.volume == pytest.approx(8.0)
