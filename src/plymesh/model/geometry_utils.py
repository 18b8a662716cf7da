from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from plymesh.config import MAX_UINT16_VERTEX_COUNT

if TYPE_CHECKING:
    from numpy import typing as npt


def select_index_dtype(vertex_count: int) -> type[np.unsignedinteger]:
    """
    Pick the index element type from the vertex count alone.

    Args:
        vertex_count: Number of vertices the indices may refer to.

    Returns:
        ``np.uint16`` for up to 65535 vertices, ``np.uint32`` otherwise.
    """
    if vertex_count <= MAX_UINT16_VERTEX_COUNT:
        return np.uint16
    return np.uint32


def normalize_rows(vectors: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Scale every row of an (N, 3) array to unit length.

    Rows with zero length stay (0, 0, 0) instead of turning into NaN.
    """
    lengths = np.linalg.norm(vectors, axis=1, keepdims=True)
    out = np.zeros_like(vectors)
    np.divide(vectors, lengths, out=out, where=lengths > 0.0)
    return out


def face_normals(
    positions: npt.NDArray[np.float64],
    triangles: npt.NDArray[np.int64],
) -> npt.NDArray[np.float64]:
    """
    Unit normals of triangles from their winding.

    Args:
        positions: (N, 3) vertex positions.
        triangles: (T, 3) vertex indices, counter-clockwise facing outwards.

    Returns:
        (T, 3) array with ``normalize(cross(b - a, c - a))`` per triangle.
    """
    a = positions[triangles[:, 0]]
    b = positions[triangles[:, 1]]
    c = positions[triangles[:, 2]]
    return normalize_rows(np.cross(b - a, c - a))


def synthesize_vertex_normals(
    positions: npt.NDArray[np.float64],
    indices: npt.NDArray[np.int64],
) -> npt.NDArray[np.float64]:
    """
    Smooth per-vertex normals from the faces around each vertex.

    Every triangle contributes its unit face normal, unweighted, to each of
    its three corners; the per-vertex sums are normalized afterwards. A vertex
    no triangle references ends up as (0, 0, 0).

    Args:
        positions: (N, 3) vertex positions.
        indices: Flat triangle list of length 3*T.

    Returns:
        (N, 3) array of unit (or zero) vertex normals.
    """
    triangles = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    normals = face_normals(positions, triangles)

    accumulated = np.zeros_like(positions, dtype=np.float64)
    # Unbuffered add, applied in triangle order a, b, c so the result is reproducible
    np.add.at(accumulated, triangles.ravel(), np.repeat(normals, 3, axis=0))

    return normalize_rows(accumulated)


def bounding_sphere(positions: npt.NDArray[np.float64]) -> tuple[npt.NDArray[np.float64], float]:
    """
    Farthest-point bounding sphere around the vertex centroid.

    This is always an enclosing sphere but generally not the minimal one.

    Args:
        positions: (N, 3) vertex positions.

    Returns:
        ``(centroid, radius)``. An empty position set gives the origin and 0.
    """
    if len(positions) == 0:
        return np.zeros(3, dtype=np.float64), 0.0

    centroid = positions.mean(axis=0)
    radius = float(np.sqrt(np.max(np.sum((positions - centroid) ** 2, axis=1))))
    return centroid, radius
