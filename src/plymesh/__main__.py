"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from plymesh.config import DEFAULT_MESH_COLOR
from plymesh.logging_config import setup_logging
from plymesh.model.errors import FormatError, UnsupportedFileType
from plymesh.model.io import MeshIO
from plymesh.model.mesh import Mesh
from plymesh.view.preview import export_mesh, show_mesh

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plymesh",
        description="Decode an ASCII PLY or OBJ file and report the resulting mesh.",
    )
    parser.add_argument("path", help="Path to a .ply or .obj file")
    parser.add_argument("--name", default=None, help="Mesh name (defaults to the file stem)")
    parser.add_argument("--color", default=DEFAULT_MESH_COLOR, help="Hex base color, e.g. '#ff0000'")
    parser.add_argument("--export", metavar="DEST", default=None, help="Write the mesh via PyVista (.vtk, .vtp, .stl, ...)")
    parser.add_argument("--preview", action="store_true", help="Open an interactive PyVista window")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    return parser


def summarize(mesh: Mesh) -> str:
    if mesh.normal_buffer is None:
        normals = "none"
    elif mesh.normals_synthesized:
        normals = "synthesized"
    else:
        normals = "from file"

    index_width = "none" if mesh.index_dtype is None else mesh.index_dtype.name
    colors = "none" if mesh.color_buffer is None else f"{mesh.color_buffer.shape[1]} channels"
    cx, cy, cz = (float(v) for v in mesh.bounding_centroid)

    return "\n".join([
        f"name:      {mesh.name}",
        f"vertices:  {mesh.vertex_count}",
        f"triangles: {mesh.triangle_count}",
        f"indices:   {index_width}",
        f"normals:   {normals}",
        f"colors:    {colors}",
        f"centroid:  ({cx:.6g}, {cy:.6g}, {cz:.6g})",
        f"radius:    {mesh.bounding_radius:.6g}",
    ])


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)
    logger.debug(f"Arguments: {vars(args)}")

    try:
        mesh = MeshIO.load_mesh(args.path, name=args.name, color=args.color)
    except (FormatError, UnsupportedFileType, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(summarize(mesh))

    if args.export:
        export_mesh(mesh, args.export)

    if args.preview:
        show_mesh(mesh)

    return 0


if __name__ == "__main__":
    sys.exit(main())
