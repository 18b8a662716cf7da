"""Decode ASCII PLY (and OBJ) mesh text into renderable, immutable meshes."""
from plymesh.model.errors import (
    CountMismatch,
    FormatError,
    MalformedLine,
    UnsupportedFileType,
    UnsupportedFormat,
    UnsupportedPolygon,
)
from plymesh.model.mesh import Mesh, build
from plymesh.model.ply import decode
from plymesh.model.record import GeometryRecord

__all__ = [
    "CountMismatch",
    "FormatError",
    "GeometryRecord",
    "MalformedLine",
    "Mesh",
    "UnsupportedFileType",
    "UnsupportedFormat",
    "UnsupportedPolygon",
    "build",
    "decode",
]
