"""
ASCII PLY Decoder
=================
Parses the line-oriented ASCII variant of the PLY format into a
``GeometryRecord``.

Why is this file needed?
------------------------
1. Parsing: It turns header declarations and positional data lines into flat
   position/normal/color/index lists.
2. Triangulation: Quads are fanned into two triangles so the renderer only
   ever sees triangle lists.
3. Validation: Declared element counts are checked against what was actually
   read, and every failure is raised as a typed ``FormatError``.

Data lines follow a fixed column convention: ``x y z [nx ny nz] [r g b [a]]``.
The order in which properties are declared in the header is not used to map
columns.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum, StrEnum
from typing import Optional

from plymesh.config import ASCII_FORMAT_TOKEN, BYTE_COLOR_SCALE, SUPPORTED_POLYGON_SIZES
from plymesh.model.errors import CountMismatch, MalformedLine, UnsupportedFormat, UnsupportedPolygon
from plymesh.model.record import GeometryRecord, Vec3

logger = logging.getLogger(__name__)


class Phase(Enum):
    HEADER = "header"
    BODY = "body"


class ColorChannelType(StrEnum):
    BYTE_SCALED = "byte_scaled"  # uchar channels, 0..255
    FLOAT_DIRECT = "float_direct"  # float channels, already in [0, 1]


NORMAL_PROPERTY_NAMES = frozenset({"nx", "ny", "nz"})
NORMAL_PROPERTY_TYPES = frozenset({"float", "float32", "double", "float64"})

COLOR_PROPERTY_NAMES = frozenset({"red", "green", "blue"})
COLOR_PROPERTY_TYPES: dict[str, ColorChannelType] = {
    "uchar": ColorChannelType.BYTE_SCALED,
    "uint8": ColorChannelType.BYTE_SCALED,
    "float": ColorChannelType.FLOAT_DIRECT,
    "float32": ColorChannelType.FLOAT_DIRECT,
}

IGNORED_HEADER_KEYWORDS = frozenset({"ply", "comment", "obj_info"})


@dataclass(frozen=True)
class DecoderState:
    """
    Snapshot of the decoder between two lines.

    A new instance is produced for every transition, so any intermediate
    state can be inspected or fed back into ``step_header`` in isolation.
    """
    phase: Phase = Phase.HEADER
    expected_vertex_count: int = 0
    expected_face_count: int = 0
    has_normal: bool = False
    has_color: bool = False
    color_channel_type: Optional[ColorChannelType] = None
    color_components: int = 0
    vertices_read: int = 0
    faces_read: int = 0
    surplus_lines: int = 0

    @property
    def vertex_field_count(self) -> int:
        """Number of leading fields a vertex line must provide."""
        count = 3
        if self.has_normal:
            count += 3
        if self.has_color:
            count += self.color_components
        return count

    @property
    def vertices_done(self) -> bool:
        return self.vertices_read >= self.expected_vertex_count

    @property
    def faces_done(self) -> bool:
        return self.faces_read >= self.expected_face_count


def _parse_count(token: str, line_number: int, line: str) -> int:
    try:
        count = int(token)
    except ValueError:
        raise MalformedLine(line_number, line, reason=f"element count '{token}' is not an integer") from None
    if count < 0:
        raise MalformedLine(line_number, line, reason=f"element count {count} is negative")
    return count


def step_header(state: DecoderState, line: str, line_number: int = 0) -> DecoderState:
    """
    Apply one header line to the decoder state.

    Args:
        state: The current (header phase) state.
        line: A stripped, non-empty header line.
        line_number: 1-based position of the line, used in error messages.

    Returns:
        The next state. Unrecognized lines return ``state`` unchanged.

    Raises:
        UnsupportedFormat: If the ``format`` line names anything but ascii.
        MalformedLine: If an element count is not a non-negative integer.
    """
    tokens = line.split()
    if not tokens:
        return state

    keyword = tokens[0]

    if keyword in IGNORED_HEADER_KEYWORDS:
        return state

    if keyword == "format":
        if len(tokens) < 2:
            raise MalformedLine(line_number, line, reason="missing format token")
        if tokens[1].lower() != ASCII_FORMAT_TOKEN:
            logger.debug(f"Rejecting non-ascii format '{tokens[1]}'")
            raise UnsupportedFormat(tokens[1])
        return state

    if keyword == "element" and len(tokens) >= 3:
        if tokens[1] == "vertex":
            return replace(state, expected_vertex_count=_parse_count(tokens[2], line_number, line))
        if tokens[1] == "face":
            return replace(state, expected_face_count=_parse_count(tokens[2], line_number, line))
        return state

    if keyword == "property" and len(tokens) >= 3:
        prop_type = tokens[1].lower()
        prop_name = tokens[2].lower()

        if prop_name in NORMAL_PROPERTY_NAMES and prop_type in NORMAL_PROPERTY_TYPES:
            return replace(state, has_normal=True)

        if prop_type in COLOR_PROPERTY_TYPES:
            if prop_name in COLOR_PROPERTY_NAMES:
                return replace(
                    state,
                    has_color=True,
                    color_channel_type=COLOR_PROPERTY_TYPES[prop_type],
                    color_components=max(state.color_components, 3),
                )
            if prop_name == "alpha":
                return replace(state, color_components=4)
        return state

    if keyword == "end_header":
        return replace(state, phase=Phase.BODY)

    return state


def _to_floats(tokens: list[str], line_number: int, line: str) -> list[float]:
    values = []
    for token in tokens:
        try:
            values.append(float(token))
        except ValueError:
            raise MalformedLine(line_number, line, reason=f"field '{token}' is not numeric") from None
    return values


def parse_vertex_line(
    state: DecoderState,
    tokens: list[str],
    line_number: int,
    line: str,
) -> tuple[Vec3, Optional[Vec3], Optional[tuple[float, ...]]]:
    """
    Interpret one vertex data line under the fixed column convention.

    Returns:
        ``(position, normal, color)``; ``normal`` and ``color`` are ``None``
        when the header did not declare them.
    """
    required = state.vertex_field_count
    if len(tokens) < required:
        raise MalformedLine(line_number, line, expected_fields=required, actual_fields=len(tokens))

    values = _to_floats(tokens[:required], line_number, line)
    position = (values[0], values[1], values[2])
    offset = 3

    normal = None
    if state.has_normal:
        normal = (values[3], values[4], values[5])
        offset = 6

    color = None
    if state.has_color:
        channels = values[offset:offset + state.color_components]
        if state.color_channel_type is ColorChannelType.BYTE_SCALED:
            channels = [channel / BYTE_COLOR_SCALE for channel in channels]
        color = tuple(channels)

    return position, normal, color


def _to_index(token: str, vertex_count: int, line_number: int, line: str) -> int:
    try:
        index = int(token)
    except ValueError:
        raise MalformedLine(line_number, line, reason=f"vertex index '{token}' is not an integer") from None
    if not 0 <= index < vertex_count:
        raise MalformedLine(
            line_number, line,
            reason=f"vertex index {index} is out of range for {vertex_count} vertices",
        )
    return index


def parse_face_line(state: DecoderState, tokens: list[str], line_number: int, line: str) -> list[int]:
    """
    Interpret one face data line and triangulate it.

    A triangle ``3 a b c`` yields ``[a, b, c]``; a quad ``4 a b c d`` is
    fanned from its first corner into ``[a, b, c, a, c, d]``.
    """
    try:
        polygon_size = int(tokens[0])
    except ValueError:
        raise MalformedLine(line_number, line, reason=f"face size '{tokens[0]}' is not an integer") from None

    if polygon_size not in SUPPORTED_POLYGON_SIZES:
        raise UnsupportedPolygon(polygon_size, line_number)

    if len(tokens) < polygon_size + 1:
        raise MalformedLine(line_number, line, expected_fields=polygon_size + 1, actual_fields=len(tokens))

    corners = [
        _to_index(token, state.expected_vertex_count, line_number, line)
        for token in tokens[1:polygon_size + 1]
    ]

    if polygon_size == 3:
        return corners

    a, b, c, d = corners
    return [a, b, c, a, c, d]


def _validate_counts(state: DecoderState) -> None:
    if state.surplus_lines:
        # Trailing data is attributed to the last declared element
        if state.expected_face_count > 0:
            raise CountMismatch("face", state.expected_face_count, state.faces_read + state.surplus_lines)
        raise CountMismatch("vertex", state.expected_vertex_count, state.vertices_read + state.surplus_lines)

    if state.vertices_read != state.expected_vertex_count:
        raise CountMismatch("vertex", state.expected_vertex_count, state.vertices_read)

    if state.faces_read != state.expected_face_count:
        raise CountMismatch("face", state.expected_face_count, state.faces_read)


def decode(text: str) -> GeometryRecord:
    """
    Decode ASCII PLY text into a ``GeometryRecord``.

    Body lines are assigned to elements by position only: the first
    ``expected_vertex_count`` non-blank lines are vertices, the next
    ``expected_face_count`` are faces. A file that is one vertex line short
    therefore has its first face line read as a vertex, and the error is
    reported on the face element (e.g. expected 1, read 0) rather than on
    the vertex element.

    Args:
        text: Complete file contents.

    Returns:
        The decoded record. ``normals``, ``colors`` and ``indices`` are
        ``None`` when the header declared no such data.

    Raises:
        UnsupportedFormat: The header declares a binary encoding.
        UnsupportedPolygon: A face is neither a triangle nor a quad.
        MalformedLine: A data line has too few or non-numeric fields.
        CountMismatch: Element counts differ from the header declaration.
    """
    state = DecoderState()

    positions: list[Vec3] = []
    normals: list[Vec3] = []
    colors: list[tuple[float, ...]] = []
    indices: list[int] = []

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if state.phase is Phase.HEADER:
            state = step_header(state, line, line_number)
            continue

        tokens = line.split()

        if not state.vertices_done:
            position, normal, color = parse_vertex_line(state, tokens, line_number, line)
            positions.append(position)
            if normal is not None:
                normals.append(normal)
            if color is not None:
                colors.append(color)
            state = replace(state, vertices_read=state.vertices_read + 1)

        elif not state.faces_done:
            indices.extend(parse_face_line(state, tokens, line_number, line))
            state = replace(state, faces_read=state.faces_read + 1)

        else:
            state = replace(state, surplus_lines=state.surplus_lines + 1)

    _validate_counts(state)

    logger.debug(
        f"Decoded {state.vertices_read} vertices and {state.faces_read} faces "
        f"(normals={state.has_normal}, colors={state.has_color})"
    )

    return GeometryRecord(
        vertex_count=state.expected_vertex_count,
        positions=positions,
        normals=normals if state.has_normal else None,
        colors=colors if state.has_color else None,
        indices=indices if state.expected_face_count > 0 else None,
    )
