"""Tests for the PyVista conversion layer."""

from __future__ import annotations

import math
import os
import tempfile
import unittest

import numpy as np
import pyvista as pv

from plymesh.model.mesh import build
from plymesh.model.primitives import create_cube_mesh
from plymesh.model.record import GeometryRecord
from plymesh.view.preview import CAMERA_VIEW_ANGLE, export_mesh, framing_distance, to_polydata


class TestToPolyData(unittest.TestCase):

    def test_triangle_cells(self) -> None:
        record = GeometryRecord(
            vertex_count=4,
            positions=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)],
            colors=[(1.0, 0.0, 0.0)] * 4,
            indices=[0, 1, 2, 0, 2, 3],
        )
        pd = to_polydata(build("square", record))

        self.assertEqual(pd.n_points, 4)
        self.assertEqual(pd.n_cells, 2)
        np.testing.assert_array_equal(pd.faces, [3, 0, 1, 2, 3, 0, 2, 3])
        self.assertIn("Normals", pd.point_data)
        self.assertIn("Colors", pd.point_data)

    def test_point_cloud(self) -> None:
        mesh = build("cloud", GeometryRecord(vertex_count=2, positions=[(0.0, 0.0, 0.0), (1.0, 1.0, 1.0)]))
        pd = to_polydata(mesh)
        self.assertEqual(pd.n_points, 2)
        self.assertNotIn("Normals", pd.point_data)

    def test_cube_bounds(self) -> None:
        pd = to_polydata(create_cube_mesh("cube"))
        np.testing.assert_allclose(pd.bounds, [-0.5, 0.5, -0.5, 0.5, -0.5, 0.5])


class TestExportMesh(unittest.TestCase):

    def test_export_vtk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            dest = os.path.join(tmp_dir, "cube.vtk")
            export_mesh(create_cube_mesh("cube"), dest)
            saved = pv.read(dest)
            self.assertEqual(saved.n_points, 24)
            self.assertEqual(saved.n_cells, 12)

    def test_unsupported_extension_is_raised(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            dest = os.path.join(tmp_dir, "cube.unknown_extension")
            with self.assertLogs("plymesh.view.preview", level="ERROR"):
                with self.assertRaises(ValueError):
                    export_mesh(create_cube_mesh("cube"), dest)


class TestFramingDistance(unittest.TestCase):

    def test_sphere_fits_view(self) -> None:
        mesh = create_cube_mesh("cube")
        distance = framing_distance(mesh)
        half_angle = math.radians(CAMERA_VIEW_ANGLE) / 2.0
        self.assertAlmostEqual(distance * math.sin(half_angle), mesh.bounding_radius)

    def test_scale(self) -> None:
        mesh = create_cube_mesh("cube")
        self.assertAlmostEqual(framing_distance(mesh, scale=2.0), 2.0 * framing_distance(mesh))

    def test_degenerate_mesh(self) -> None:
        mesh = build("point", GeometryRecord(vertex_count=1, positions=[(3.0, 3.0, 3.0)]))
        self.assertEqual(framing_distance(mesh), 1.0)


if __name__ == "__main__":
    unittest.main()
