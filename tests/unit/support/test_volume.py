"""
Tests for support volume accumulation.
"""

import numpy as np
import pytest
import trimesh

from supportmesh.support.volume import (
    column_faces,
    column_volumes,
    polyhedron_volume,
    support_volume,
)


class TestPolyhedronVolume:
    """Tests for the divergence-theorem volume."""

    def test_unit_cube(self):
        box = trimesh.creation.box(extents=[1.0, 1.0, 1.0])
        assert polyhedron_volume(box.triangles) == pytest.approx(1.0)

    def test_matches_trimesh(self):
        sphere = trimesh.creation.icosphere(subdivisions=2, radius=2.0)
        sphere.apply_translation([3.0, -1.0, 5.0])
        assert polyhedron_volume(sphere.triangles) == pytest.approx(sphere.volume)

    def test_inverted_winding_negative(self):
        box = trimesh.creation.box(extents=[2.0, 1.0, 1.0])
        flipped = box.triangles[:, ::-1]
        assert polyhedron_volume(flipped) == pytest.approx(-2.0)

    def test_empty(self):
        assert polyhedron_volume([]) == 0.0


class TestColumns:
    """Tests for per-face support columns."""

    def test_prism_volume(self):
        """Footprint area 0.5 at height 1 gives volume 0.5."""
        a = np.array([0.0, 0.0, 1.0])
        b = np.array([0.0, 1.0, 1.0])
        c = np.array([1.0, 0.0, 1.0])
        faces = column_faces(a, b, c)
        assert faces.shape == (8, 3, 3)
        assert polyhedron_volume(faces) == pytest.approx(0.5)

    def test_column_is_closed(self):
        """Every directed edge of the column is matched by its reverse."""
        a = np.array([0.0, 0.0, 2.0])
        b = np.array([0.0, 1.0, 2.5])
        c = np.array([1.0, 0.0, 1.5])
        faces = column_faces(a, b, c)
        edges = set()
        for tri in faces:
            pts = [tuple(p) for p in tri]
            for i in range(3):
                edges.add((pts[i], pts[(i + 1) % 3]))
        assert all((e1, e0) in edges for e0, e1 in edges)

    def test_sloped_face_volume(self):
        """A tilted face over a right-triangle footprint: area x mean height."""
        a = np.array([0.0, 0.0, 1.0])
        b = np.array([0.0, 1.0, 2.0])
        c = np.array([1.0, 0.0, 3.0])
        expected = 0.5 * (1.0 + 2.0 + 3.0) / 3.0
        assert polyhedron_volume(column_faces(a, b, c)) == pytest.approx(expected)

    def test_batched_matches_single(self):
        vertices = np.array(
            [
                [0.0, 0.0, 1.0],
                [0.0, 1.0, 1.0],
                [1.0, 0.0, 1.0],
                [1.0, 1.0, 2.0],
            ]
        )
        triangles = np.array([[0, 1, 2], [2, 1, 3]])
        batched = column_volumes(vertices, triangles)
        single = [polyhedron_volume(column_faces(*vertices[t])) for t in triangles]
        assert np.allclose(batched, single)

    def test_empty(self):
        assert column_volumes(np.zeros((3, 3)), np.zeros((0, 3), dtype=np.int64)).shape == (0,)
        assert support_volume(np.zeros((3, 3)), np.zeros((0, 3), dtype=np.int64)) == 0.0


class TestSupportVolume:
    """Tests for the summed support volume."""

    def test_square_patch(self, down_square):
        volume = support_volume(down_square.vertices, down_square.triangles)
        assert volume == pytest.approx(1.0)

    def test_order_invariant(self, down_square):
        forward = support_volume(down_square.vertices, down_square.triangles)
        backward = support_volume(down_square.vertices, down_square.triangles[::-1])
        assert forward == pytest.approx(backward)
