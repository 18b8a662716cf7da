"""
Geometry Record
===============
The flat, decoder-produced bundle of vertex attributes handed to the mesh
builder. It is produced once per decode call and is not retained.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class GeometryRecord:
    """
    Decoded geometry prior to mesh assembly.

    Attributes:
        vertex_count: Declared number of vertices.
        positions: One (x, y, z) triple per vertex.
        normals: Optional (nx, ny, nz) triple per vertex.
        colors: Optional RGB or RGBA tuple per vertex, channels in [0, 1].
        indices: Optional flat triangle list, length a multiple of 3.
        texcoords: Optional (u, v) pair per vertex.
    """
    vertex_count: int
    positions: Sequence[Vec3]
    normals: Optional[Sequence[Vec3]] = None
    colors: Optional[Sequence[tuple[float, ...]]] = None
    indices: Optional[Sequence[int]] = None
    texcoords: Optional[Sequence[tuple[float, float]]] = None

    @property
    def triangle_count(self) -> int:
        if self.indices is None:
            return 0
        return len(self.indices) // 3

    @property
    def color_components(self) -> int:
        """Number of channels per color (3 or 4), or 0 without colors."""
        if self.colors is None or len(self.colors) == 0:
            return 0
        return len(self.colors[0])

    def copy(self) -> GeometryRecord:
        """Return a duplicate that shares no mutable containers with this record."""
        def _dup(values):
            if values is None:
                return None
            return [tuple(v) for v in values]

        return GeometryRecord(
            vertex_count=self.vertex_count,
            positions=_dup(self.positions),
            normals=_dup(self.normals),
            colors=_dup(self.colors),
            indices=None if self.indices is None else [int(i) for i in self.indices],
            texcoords=_dup(self.texcoords),
        )
