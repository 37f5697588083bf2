"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest
import trimesh

from supportmesh.core.geometry import TriangleMesh


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_dir(temp_dir):
    """Create a sample configuration directory with two profiles."""
    config_dir = temp_dir / "config"
    (config_dir / "profiles").mkdir(parents=True)

    (config_dir / "profiles" / "default.yaml").write_text(
        """
support:
  name: "Default"
  support_angle: 30.0
"""
    )
    (config_dir / "profiles" / "resin.yaml").write_text(
        """
support:
  name: "Resin"
  support_angle: 45.0
  precision: 0.001
  dtype: float64
"""
    )
    return config_dir


@pytest.fixture
def down_triangle():
    """A single triangle at z = 1 whose normal points straight down."""
    vertices = [[0.0, 0.0, 1.0], [0.0, 1.0, 1.0], [1.0, 0.0, 1.0]]
    return TriangleMesh(vertices, [[0, 1, 2]], tolerance=1e-6)


@pytest.fixture
def down_square():
    """Unit square at z = 1 split into two downward triangles."""
    vertices = [
        [0.0, 0.0, 1.0],
        [1.0, 0.0, 1.0],
        [1.0, 1.0, 1.0],
        [0.0, 1.0, 1.0],
    ]
    return TriangleMesh(vertices, [[0, 2, 1], [0, 3, 2]], tolerance=1e-6)


@pytest.fixture
def floating_box():
    """Closed unit cube spanning z = 1..2, outward wound."""
    box = trimesh.creation.box(extents=[1.0, 1.0, 1.0])
    box.apply_translation([0.0, 0.0, 1.5])
    return box


@pytest.fixture
def grounded_box():
    """Closed unit cube resting on the plate (z = 0..1)."""
    box = trimesh.creation.box(extents=[1.0, 1.0, 1.0])
    box.apply_translation([0.0, 0.0, 0.5])
    return box


@pytest.fixture
def floating_sphere():
    """Icosphere of radius 1 centred at z = 3."""
    sphere = trimesh.creation.icosphere(subdivisions=2, radius=1.0)
    sphere.apply_translation([0.0, 0.0, 3.0])
    return sphere
