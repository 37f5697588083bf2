"""
Demonstration of supportmesh support generation.

This script shows how to:
1. Build a model with an overhang
2. Generate its support solid
3. Inspect the render buffers and volume
4. Export the welded support mesh
"""

from pathlib import Path

import numpy as np
import trimesh

from supportmesh.core.config import SupportConfig
from supportmesh.core.geometry import GeometryLoader, TriangleMesh
from supportmesh.support.generator import generate_support


def build_mushroom() -> trimesh.Trimesh:
    """A 20 mm cap on a 6 mm stem: the cap's underside overhangs."""
    stem = trimesh.creation.box(extents=[6.0, 6.0, 10.0])
    stem.apply_translation([0.0, 0.0, 5.0])
    cap = trimesh.creation.box(extents=[20.0, 20.0, 4.0])
    cap.apply_translation([0.0, 0.0, 12.0])
    return trimesh.util.concatenate([stem, cap])


def main():
    """Run support generation demonstration."""
    print("=" * 60)
    print("supportmesh Support Demo")
    print("=" * 60)

    example_dir = Path(__file__).parent
    output_stl = example_dir / "mushroom_support.stl"

    # 1. Build the model
    print("\n1. Building model")
    model = build_mushroom()
    mesh = TriangleMesh.from_trimesh(model)
    print(f"   [OK] {len(mesh.vertices)} vertices, {len(mesh)} faces")
    print(f"   [OK] Precision: {mesh.precision():g}")

    # 2. Generate support
    print("\n2. Generating support (30° overhang)")
    result = generate_support(mesh, config=SupportConfig())
    print(f"   [OK] Overhang faces: {result.face_count}")
    print(f"   [OK] Boundary edges: {result.boundary_edge_count}")
    print(f"   [OK] Support triangles: {result.triangle_count}")

    # 3. Inspect
    print("\n3. Support statistics")
    positions = result.positions()
    print(f"   [OK] Buffer floats: {len(result.vertices)}")
    print(f"   [OK] Height range: {positions[..., 2].min():.2f} - {positions[..., 2].max():.2f} mm")
    print(f"   [OK] Support volume: {result.volume:.2f} mm^3")
    unit = np.linalg.norm(result.normals.reshape(-1, 3), axis=1)
    print(f"   [OK] Unit normals: {np.allclose(unit, 1.0, atol=1e-5)}")

    # 4. Export
    print(f"\n4. Exporting support mesh: {output_stl.name}")
    support = result.to_trimesh()
    GeometryLoader.save(support, output_stl)
    print(f"   [OK] Watertight: {support.is_watertight}")
    print(f"   [OK] Mesh volume: {support.volume:.2f} mm^3")

    print("\n" + "=" * 60)
    print("Demo completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
