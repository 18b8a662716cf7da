"""
PyVista Preview
Converts a ``Mesh`` into ``pyvista.PolyData``, saves it to disk and opens a
simple viewer.
"""
import logging
import math

import numpy as np
import pyvista as pv

from plymesh.model.mesh import Mesh

logger = logging.getLogger(__name__)

# Field of view of the default PyVista camera, in degrees
CAMERA_VIEW_ANGLE = 30.0


def to_polydata(mesh: Mesh) -> pv.PolyData:
    """
    Wrap the mesh buffers in a PolyData.

    Triangles become VTK face cells ``[3, a, b, c]``; normals, vertex colors
    and texture coordinates are attached as point data.
    """
    points = np.asarray(mesh.vertex_buffer, dtype=np.float64)

    if mesh.index_buffer is not None and mesh.triangle_count > 0:
        triangles = np.asarray(mesh.index_buffer, dtype=np.int64).reshape(-1, 3)
        faces = np.hstack([np.full((len(triangles), 1), 3, dtype=np.int64), triangles]).ravel()
        pd = pv.PolyData(points, faces)
    else:
        pd = pv.PolyData(points)

    if mesh.normal_buffer is not None:
        pd.point_data["Normals"] = np.asarray(mesh.normal_buffer)
    if mesh.color_buffer is not None:
        pd.point_data["Colors"] = np.asarray(mesh.color_buffer)
    if mesh.texcoord_buffer is not None:
        pd.active_texture_coordinates = np.asarray(mesh.texcoord_buffer)

    return pd


def export_mesh(mesh: Mesh, dest_path: str) -> None:
    """
    Write a mesh to any format PyVista can save (.vtk, .vtp, .ply, .stl, ...).
    """
    try:
        to_polydata(mesh).save(dest_path)
        logger.info(f"Mesh exported to: {dest_path}")
    except Exception as e:
        logger.exception(f"Failed to export mesh '{mesh.name}'")
        raise e


def framing_distance(mesh: Mesh, scale: float = 1.0, view_angle: float = CAMERA_VIEW_ANGLE) -> float:
    """Camera distance from the centroid at which the bounding sphere fills the view."""
    radius = mesh.bounding_radius * scale
    if radius == 0.0:
        return 1.0
    return radius / math.sin(math.radians(view_angle) / 2.0)


def show_mesh(mesh: Mesh) -> None:
    """Open an interactive window framed on the mesh's bounding sphere."""
    pd = to_polydata(mesh)
    plotter = pv.Plotter(title=mesh.name)

    if mesh.color_buffer is not None:
        plotter.add_mesh(pd, scalars="Colors", rgb=True, smooth_shading=mesh.normal_buffer is not None)
    else:
        plotter.add_mesh(pd, color=mesh.base_color_rgba[:3], smooth_shading=mesh.normal_buffer is not None)

    centroid = np.asarray(mesh.bounding_centroid)
    distance = framing_distance(mesh)
    plotter.camera.focal_point = tuple(centroid)
    plotter.camera.position = tuple(centroid + np.array([0.0, 0.0, distance]))
    plotter.camera.up = (0.0, 1.0, 0.0)

    logger.info(f"Previewing mesh '{mesh.name}'")
    plotter.show()
