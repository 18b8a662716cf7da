"""
Renderable Mesh
===============
Wraps a decoded ``GeometryRecord`` into GPU-ready buffers plus the bounding
sphere used for camera framing and pick testing.

Why is this file needed?
------------------------
1. Buffers: Positions, normals, colors and indices are packed into typed
   numpy arrays (float32, uint16/uint32) the renderer can upload as-is.
2. Shading: Vertex normals are synthesized from face winding when the
   source file did not provide any.
3. Metadata: The bounding sphere is computed once and never changes,
   because the geometry is read-only after construction. Scene transforms
   live outside this object.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from plymesh.config import DEFAULT_MESH_COLOR
from plymesh.model.geometry_utils import bounding_sphere, select_index_dtype, synthesize_vertex_normals
from plymesh.model.record import GeometryRecord
from plymesh.utils import hex_to_rgba

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _read_only(array: Optional[np.ndarray]) -> Optional[np.ndarray]:
    if array is not None:
        array.setflags(write=False)
    return array


class Mesh:
    """
    Immutable triangle mesh.

    Instances are normally created through ``build`` (or ``Mesh.from_record``).
    All buffers are read-only numpy arrays owned by the mesh; ``name`` and
    ``color`` are read-only too. Use ``clone`` to get a renamed or recolored
    copy.
    """
    def __init__(
        self,
        name: str,
        vertex_buffer: npt.NDArray[np.float32],
        bounding_centroid: npt.NDArray[np.float64],
        bounding_radius: float,
        normal_buffer: Optional[npt.NDArray[np.float32]] = None,
        color_buffer: Optional[npt.NDArray[np.float32]] = None,
        index_buffer: Optional[np.ndarray] = None,
        texcoord_buffer: Optional[npt.NDArray[np.float32]] = None,
        color: str = DEFAULT_MESH_COLOR,
        normals_synthesized: bool = False,
    ) -> None:
        self._name = name
        self._color = color
        self.vertex_buffer = _read_only(vertex_buffer)
        self.normal_buffer = _read_only(normal_buffer)
        self.color_buffer = _read_only(color_buffer)
        self.index_buffer = _read_only(index_buffer)
        self.texcoord_buffer = _read_only(texcoord_buffer)
        self.bounding_centroid = _read_only(bounding_centroid)
        self.bounding_radius = bounding_radius
        self.normals_synthesized = normals_synthesized

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name!r}, vertices={self.vertex_count}, "
            f"triangles={self.triangle_count}, radius={self.bounding_radius:.4g})"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def color(self) -> str:
        """Hex base color used when the mesh has no vertex colors."""
        return self._color

    @classmethod
    def from_record(cls, name: str, record: GeometryRecord, color: str = DEFAULT_MESH_COLOR) -> Mesh:
        return build(name, record, color=color)

    @property
    def vertex_count(self) -> int:
        return len(self.vertex_buffer)

    @property
    def triangle_count(self) -> int:
        if self.index_buffer is None:
            return 0
        return len(self.index_buffer) // 3

    @property
    def index_dtype(self) -> Optional[np.dtype]:
        """Element type of the index buffer, or ``None`` for non-indexed meshes."""
        if self.index_buffer is None:
            return None
        return self.index_buffer.dtype

    @property
    def base_color_rgba(self) -> tuple[float, float, float, float]:
        return hex_to_rgba(self.color)

    def to_record(self) -> GeometryRecord:
        """
        Rebuild a ``GeometryRecord`` holding fresh copies of this mesh's data.

        Synthesized normals are left out; building the record again
        recomputes exactly the same values.
        """
        def _rows(buffer: Optional[np.ndarray]):
            if buffer is None:
                return None
            return [tuple(row) for row in buffer.tolist()]

        return GeometryRecord(
            vertex_count=self.vertex_count,
            positions=_rows(self.vertex_buffer),
            normals=None if self.normals_synthesized else _rows(self.normal_buffer),
            colors=_rows(self.color_buffer),
            indices=None if self.index_buffer is None else self.index_buffer.tolist(),
            texcoords=_rows(self.texcoord_buffer),
        )

    def clone(self, new_name: str, color: Optional[str] = None) -> Mesh:
        """
        Create an independent copy, e.g. for instanced geometry.

        Args:
            new_name: Name of the copy.
            color: Base color override; ``None`` keeps this mesh's color.
        """
        return build(new_name, self.to_record().copy(), color=self.color if color is None else color)


def build(name: str, record: GeometryRecord, color: str = DEFAULT_MESH_COLOR) -> Mesh:
    """
    Assemble a ``Mesh`` from a validated ``GeometryRecord``.

    Args:
        name: Identifier of the mesh in the scene.
        record: Output of a successful decode.
        color: Hex base color used when the record has no vertex colors.

    Returns:
        The immutable mesh with typed buffers and bounding sphere.
    """
    positions = np.array(record.positions, dtype=np.float32, copy=True).reshape(-1, 3)

    index_buffer = None
    if record.indices is not None:
        index_buffer = np.array(record.indices, dtype=select_index_dtype(record.vertex_count), copy=True)

    normal_buffer = None
    normals_synthesized = False
    if record.normals is not None:
        normal_buffer = np.array(record.normals, dtype=np.float32, copy=True).reshape(-1, 3)
    elif index_buffer is not None:
        normal_buffer = synthesize_vertex_normals(
            positions.astype(np.float64), index_buffer.astype(np.int64)
        ).astype(np.float32)
        normals_synthesized = True

    color_buffer = None
    if record.colors is not None:
        components = record.color_components or 3
        color_buffer = np.array(record.colors, dtype=np.float32, copy=True).reshape(-1, components)

    texcoord_buffer = None
    if record.texcoords is not None:
        texcoord_buffer = np.array(record.texcoords, dtype=np.float32, copy=True).reshape(-1, 2)

    centroid, radius = bounding_sphere(positions.astype(np.float64))

    logger.debug(
        f"Built mesh '{name}': {len(positions)} vertices, "
        f"{0 if index_buffer is None else len(index_buffer) // 3} triangles, "
        f"synthesized normals={normals_synthesized}"
    )

    return Mesh(
        name=name,
        vertex_buffer=positions,
        bounding_centroid=centroid,
        bounding_radius=radius,
        normal_buffer=normal_buffer,
        color_buffer=color_buffer,
        index_buffer=index_buffer,
        texcoord_buffer=texcoord_buffer,
        color=color,
        normals_synthesized=normals_synthesized,
    )
