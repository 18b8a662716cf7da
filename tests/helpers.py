"""Shared fixtures for building PLY text in tests."""
from __future__ import annotations

from typing import Optional, Sequence


def ply_text(
    vertices: Sequence[Sequence[float]],
    faces: Sequence[Sequence[int]] = (),
    normals: bool = False,
    color_type: Optional[str] = None,
    alpha: bool = False,
    declared_vertices: Optional[int] = None,
    declared_faces: Optional[int] = None,
    fmt: str = "ascii",
) -> str:
    """Serialize rows to ASCII PLY. Face rows are written as ``n i0 i1 ...``."""
    lines = ["ply", f"format {fmt} 1.0", "comment generated by tests"]
    lines.append(f"element vertex {len(vertices) if declared_vertices is None else declared_vertices}")
    lines += ["property float x", "property float y", "property float z"]
    if normals:
        lines += ["property float nx", "property float ny", "property float nz"]
    if color_type:
        lines += [f"property {color_type} red", f"property {color_type} green", f"property {color_type} blue"]
        if alpha:
            lines.append(f"property {color_type} alpha")
    n_faces = len(faces) if declared_faces is None else declared_faces
    if n_faces:
        lines += [f"element face {n_faces}", "property list uchar int vertex_indices"]
    lines.append("end_header")
    lines += [" ".join(str(v) for v in row) for row in vertices]
    lines += [" ".join(str(i) for i in [len(face), *face]) for face in faces]
    return "\n".join(lines) + "\n"
