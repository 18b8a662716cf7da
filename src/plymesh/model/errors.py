"""
Decoder Errors
==============
Typed failures raised while decoding mesh text.

Every error subclasses ``ValueError`` so callers that only care about
"bad input" can catch that, while the upload/UI layer can inspect the
structured attributes to build a user-facing message.
"""
from __future__ import annotations

from typing import Optional


class FormatError(ValueError):
    """Base class for all mesh decoding failures."""


class UnsupportedFormat(FormatError):
    """The header declares an encoding other than ASCII."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"File format is not ascii! It is: {token}")


class UnsupportedPolygon(FormatError):
    """A face declares a vertex count other than 3 or 4."""

    def __init__(self, vertex_count: int, line_number: Optional[int] = None) -> None:
        self.vertex_count = vertex_count
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(
            f"Unsupported polygon with {vertex_count} vertices{where}. "
            f"Only triangles and quads are supported."
        )


class CountMismatch(FormatError):
    """The number of elements read differs from the declared count."""

    def __init__(self, element: str, expected: int, actual: int) -> None:
        self.element = element
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Total {element} elements read: {actual} does not match expected {element} elements: {expected}"
        )


class MalformedLine(FormatError):
    """A data line cannot be interpreted with the active header flags."""

    def __init__(
        self,
        line_number: int,
        line: str,
        expected_fields: Optional[int] = None,
        actual_fields: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.line_number = line_number
        self.line = line
        self.expected_fields = expected_fields
        self.actual_fields = actual_fields
        self.reason = reason

        if reason is None:
            reason = f"expected at least {expected_fields} fields, got {actual_fields}"
        super().__init__(f"Malformed line {line_number}: {reason}: '{line}'")


class UnsupportedFileType(ValueError):
    """The file extension does not map to a known decoder."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Unsupported file type: '{filename}'. Expected a .ply or .obj file.")
