"""
Wavefront OBJ Decoder
Decodes ``v``/``vt``/``vn``/``f`` statements into a de-indexed ``GeometryRecord``.
"""
from __future__ import annotations

import logging
from typing import Optional

from plymesh.model.errors import MalformedLine
from plymesh.model.record import GeometryRecord, Vec3

logger = logging.getLogger(__name__)

# Grouping/material statements carry no geometry
SILENT_KEYWORDS = frozenset({"o", "g", "s", "mtllib", "usemtl"})


def _floats(parts: list[str], count: int, line_number: int, line: str, minimum: Optional[int] = None) -> tuple:
    """Read ``count`` floats, zero-padding when at least ``minimum`` are given."""
    minimum = count if minimum is None else minimum
    if len(parts) < minimum:
        raise MalformedLine(line_number, line, expected_fields=minimum, actual_fields=len(parts))

    values = []
    for part in parts[:count]:
        try:
            values.append(float(part))
        except ValueError:
            raise MalformedLine(line_number, line, reason=f"field '{part}' is not numeric") from None
    values.extend([0.0] * (count - len(values)))
    return tuple(values)


def _resolve(token: str, size: int, line_number: int, line: str) -> int:
    """Turn a 1-based (or negative, end-relative) OBJ reference into a 0-based index."""
    try:
        value = int(token)
    except ValueError:
        raise MalformedLine(line_number, line, reason=f"reference '{token}' is not an integer") from None

    index = value - 1 if value > 0 else size + value
    if value == 0 or not 0 <= index < size:
        raise MalformedLine(line_number, line, reason=f"reference {value} is out of range for {size} entries")
    return index


def decode(text: str) -> GeometryRecord:
    """
    Decode OBJ text.

    Polygons are fan-triangulated from their first corner and every emitted
    corner becomes its own vertex, so ``indices`` is simply ``0..n-1``.
    Texture coordinates and normals are kept only if every corner has one.
    """
    obj_positions: list[Vec3] = []
    obj_texcoords: list[tuple[float, float]] = []
    obj_normals: list[Vec3] = []

    positions: list[Vec3] = []
    texcoords: list[tuple[float, float]] = []
    normals: list[Vec3] = []

    unhandled: set[str] = set()

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue

        keyword, *parts = line.split()

        if keyword == "v":
            obj_positions.append(_floats(parts, 3, line_number, line))
        elif keyword == "vt":
            obj_texcoords.append(_floats(parts, 2, line_number, line, minimum=1))
        elif keyword == "vn":
            obj_normals.append(_floats(parts, 3, line_number, line))
        elif keyword == "f":
            if len(parts) < 3:
                raise MalformedLine(line_number, line, expected_fields=3, actual_fields=len(parts))

            corners: list[tuple[int, Optional[int], Optional[int]]] = []
            for part in parts:
                refs = part.split('/')
                position = _resolve(refs[0], len(obj_positions), line_number, line)
                texcoord = None
                normal = None
                if len(refs) > 1 and refs[1]:
                    texcoord = _resolve(refs[1], len(obj_texcoords), line_number, line)
                if len(refs) > 2 and refs[2]:
                    normal = _resolve(refs[2], len(obj_normals), line_number, line)
                corners.append((position, texcoord, normal))

            for tri in range(len(corners) - 2):
                for position, texcoord, normal in (corners[0], corners[tri + 1], corners[tri + 2]):
                    positions.append(obj_positions[position])
                    if texcoord is not None:
                        texcoords.append(obj_texcoords[texcoord])
                    if normal is not None:
                        normals.append(obj_normals[normal])
        elif keyword in SILENT_KEYWORDS:
            continue
        elif keyword not in unhandled:
            unhandled.add(keyword)
            logger.warning(f"Unhandled OBJ keyword '{keyword}' (first seen on line {line_number})")

    vertex_count = len(positions)
    logger.debug(f"Decoded OBJ with {vertex_count} corner vertices ({vertex_count // 3} triangles)")

    return GeometryRecord(
        vertex_count=vertex_count,
        positions=positions,
        normals=normals if normals and len(normals) == vertex_count else None,
        indices=list(range(vertex_count)) if vertex_count else None,
        texcoords=texcoords if texcoords and len(texcoords) == vertex_count else None,
    )
