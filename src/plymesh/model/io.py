"""
Input/Output Manager
Reads mesh files from disk into ``Mesh`` objects.
"""
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional

from plymesh.config import DEFAULT_MESH_COLOR
from plymesh.model import obj, ply
from plymesh.model.errors import FormatError, UnsupportedFileType
from plymesh.model.mesh import Mesh, build
from plymesh.model.record import GeometryRecord

# Get module logger
logger = logging.getLogger(__name__)


class FileType(Enum):
    PLY = ".ply"
    OBJ = ".obj"
    UNKNOWN = ""


def file_type(filename: str) -> FileType:
    """Classify a file by its (case-insensitive) extension."""
    extension = os.path.splitext(filename)[1].lower()
    for candidate in (FileType.PLY, FileType.OBJ):
        if extension == candidate.value:
            return candidate
    return FileType.UNKNOWN


class MeshIO:
    @staticmethod
    def decode_text(text: str, kind: FileType) -> GeometryRecord:
        """Dispatch ``text`` to the decoder matching ``kind``."""
        if kind is FileType.PLY:
            return ply.decode(text)
        if kind is FileType.OBJ:
            return obj.decode(text)
        raise UnsupportedFileType(f"<{kind.name.lower()}>")

    @staticmethod
    def load_mesh(filepath: str, name: Optional[str] = None, color: str = DEFAULT_MESH_COLOR) -> Mesh:
        """
        Read, decode and build a mesh file.

        Args:
            filepath: Path to a .ply or .obj file.
            name: Mesh name; defaults to the file stem.
            color: Hex base color of the mesh.

        Raises:
            UnsupportedFileType: The extension is neither .ply nor .obj.
            FileNotFoundError: The file does not exist.
            FormatError: The contents could not be decoded.
        """
        kind = file_type(filepath)
        if kind is FileType.UNKNOWN:
            raise UnsupportedFileType(filepath)

        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Mesh file not found: {filepath}")

        logger.info(f"Loading mesh from: {filepath}")
        with open(filepath, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()

        try:
            record = MeshIO.decode_text(text, kind)
        except FormatError as e:
            logger.error(f"Failed to decode '{filepath}': {e}")
            raise

        mesh = build(name or Path(filepath).stem, record, color=color)
        logger.info(
            f"Loaded mesh '{mesh.name}' ({mesh.vertex_count} vertices, {mesh.triangle_count} triangles)"
        )
        return mesh
