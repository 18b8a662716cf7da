"""
Built-in Meshes
Procedural meshes that do not need a source file.
"""
from __future__ import annotations

from plymesh.model.mesh import Mesh, build
from plymesh.model.record import GeometryRecord

# (normal, four counter-clockwise corners) per cube face
_CUBE_FACES = [
    ((0.0, 0.0, 1.0), [(-0.5, -0.5, 0.5), (0.5, -0.5, 0.5), (0.5, 0.5, 0.5), (-0.5, 0.5, 0.5)]),  # front
    ((0.0, 0.0, -1.0), [(-0.5, -0.5, -0.5), (-0.5, 0.5, -0.5), (0.5, 0.5, -0.5), (0.5, -0.5, -0.5)]),  # back
    ((0.0, 1.0, 0.0), [(-0.5, 0.5, -0.5), (-0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (0.5, 0.5, -0.5)]),  # top
    ((0.0, -1.0, 0.0), [(-0.5, -0.5, -0.5), (0.5, -0.5, -0.5), (0.5, -0.5, 0.5), (-0.5, -0.5, 0.5)]),  # bottom
    ((1.0, 0.0, 0.0), [(0.5, -0.5, -0.5), (0.5, 0.5, -0.5), (0.5, 0.5, 0.5), (0.5, -0.5, 0.5)]),  # right
    ((-1.0, 0.0, 0.0), [(-0.5, -0.5, -0.5), (-0.5, -0.5, 0.5), (-0.5, 0.5, 0.5), (-0.5, 0.5, -0.5)]),  # left
]


def cube_record() -> GeometryRecord:
    """Unit cube centred at the origin with hard per-face normals."""
    positions = []
    normals = []
    indices = []
    for normal, corners in _CUBE_FACES:
        base = len(positions)
        positions.extend(corners)
        normals.extend([normal] * 4)
        indices.extend([base, base + 1, base + 2, base, base + 2, base + 3])

    return GeometryRecord(
        vertex_count=len(positions),
        positions=positions,
        normals=normals,
        indices=indices,
    )


def create_cube_mesh(name: str, color: str = "#ff0000") -> Mesh:
    return build(name, cube_record(), color=color)
