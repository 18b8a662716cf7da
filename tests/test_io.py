"""Tests for file loading, export, the CLI and logging setup."""

from __future__ import annotations

import contextlib
import io
import inspect
import logging
import os
import tempfile
import unittest

import numpy as np

from plymesh.__main__ import main, summarize
from plymesh.config import ASSETS_PATH, SAMPLE_PLY_PATH
from plymesh.logging_config import setup_logging
from plymesh.model.errors import CountMismatch, UnsupportedFileType
from plymesh.model import io as model_io
from plymesh.model.io import FileType, MeshIO, file_type
from plymesh.model.mesh import build
from plymesh.model.record import GeometryRecord
from tests.helpers import ply_text


class TestFileType(unittest.TestCase):

    def test_extensions(self) -> None:
        self.assertIs(file_type("bunny.ply"), FileType.PLY)
        self.assertIs(file_type("/tmp/BUNNY.PLY"), FileType.PLY)
        self.assertIs(file_type("teapot.obj"), FileType.OBJ)
        self.assertIs(file_type("teapot.stl"), FileType.UNKNOWN)
        self.assertIs(file_type("README"), FileType.UNKNOWN)

    def test_decode_text_rejects_unknown(self) -> None:
        with self.assertRaises(UnsupportedFileType):
            MeshIO.decode_text("", FileType.UNKNOWN)


class TestLoadMesh(unittest.TestCase):

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, filename: str, text: str) -> str:
        path = os.path.join(self.tmp_dir, filename)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_sample_cube(self) -> None:
        mesh = MeshIO.load_mesh(SAMPLE_PLY_PATH)
        self.assertEqual(mesh.name, "cube")
        self.assertEqual(mesh.vertex_count, 8)
        self.assertEqual(mesh.triangle_count, 12)
        self.assertTrue(mesh.normals_synthesized)
        np.testing.assert_allclose(np.linalg.norm(mesh.normal_buffer, axis=1), 1.0, rtol=1e-6)
        np.testing.assert_allclose(mesh.bounding_centroid, [0.0, 0.0, 0.0], atol=1e-7)
        self.assertAlmostEqual(mesh.bounding_radius, np.sqrt(0.75), places=6)
        self.assertEqual(mesh.color_buffer[6].tolist(), [1.0, 1.0, 1.0])

    def test_sample_obj(self) -> None:
        mesh = MeshIO.load_mesh(os.path.join(ASSETS_PATH, "tetrahedron.obj"), name="tet", color="#123456")
        self.assertEqual(mesh.name, "tet")
        self.assertEqual(mesh.color, "#123456")
        self.assertEqual(mesh.triangle_count, 4)

    def test_name_defaults_to_stem(self) -> None:
        path = self._write("triangle.ply", ply_text([(0, 0, 0), (1, 0, 0), (0, 1, 0)], faces=[(0, 1, 2)]))
        self.assertEqual(MeshIO.load_mesh(path).name, "triangle")

    def test_unknown_extension(self) -> None:
        path = self._write("triangle.stl", "solid")
        with self.assertRaises(UnsupportedFileType):
            MeshIO.load_mesh(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            MeshIO.load_mesh(os.path.join(self.tmp_dir, "missing.ply"))

    def test_decode_errors_propagate(self) -> None:
        path = self._write("short.ply", ply_text([(0, 0, 0)], declared_vertices=2))
        with self.assertLogs("plymesh.model.io", level="ERROR"):
            with self.assertRaises(CountMismatch):
                MeshIO.load_mesh(path)

    def test_model_layer_does_not_import_view(self) -> None:
        source = inspect.getsource(model_io)
        self.assertNotIn("plymesh.view", source)
        self.assertNotIn("pyvista", source)
        self.assertFalse(hasattr(MeshIO, "export_mesh"))


class TestCommandLine(unittest.TestCase):

    def tearDown(self) -> None:
        logging.getLogger("plymesh").handlers.clear()

    def _run(self, argv: list[str]) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_summary(self) -> None:
        code, out, _ = self._run([SAMPLE_PLY_PATH, "--name", "box"])
        self.assertEqual(code, 0)
        self.assertIn("name:      box", out)
        self.assertIn("vertices:  8", out)
        self.assertIn("triangles: 12", out)
        self.assertIn("indices:   uint16", out)
        self.assertIn("normals:   synthesized", out)
        self.assertIn("colors:    3 channels", out)

    def test_export_flag_writes_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            dest = os.path.join(tmp_dir, "cube.vtk")
            code, _, _ = self._run([SAMPLE_PLY_PATH, "--export", dest])
            self.assertEqual(code, 0)
            self.assertTrue(os.path.getsize(dest) > 0)

    def test_bad_file_exits_with_one(self) -> None:
        code, out, err = self._run(["nope.ply"])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("error:", err)

    def test_summarize_point_cloud(self) -> None:
        mesh = build("cloud", GeometryRecord(vertex_count=1, positions=[(1.0, 2.0, 3.0)]))
        text = summarize(mesh)
        self.assertIn("indices:   none", text)
        self.assertIn("normals:   none", text)
        self.assertIn("centroid:  (1, 2, 3)", text)


class TestLoggingConfig(unittest.TestCase):

    def tearDown(self) -> None:
        logging.getLogger("plymesh").handlers.clear()

    def test_handlers_are_not_stacked(self) -> None:
        setup_logging(level=logging.DEBUG)
        setup_logging(level=logging.DEBUG)
        logger = logging.getLogger("plymesh")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_file_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = os.path.join(tmp_dir, "plymesh.log")
            setup_logging(level=logging.INFO, log_file=log_file)
            logging.getLogger("plymesh.test").info("hello from the test")
            for handler in logging.getLogger("plymesh").handlers:
                handler.close()
            logging.getLogger("plymesh").handlers.clear()
            with open(log_file, encoding="utf-8") as f:
                self.assertIn("hello from the test", f.read())


if __name__ == "__main__":
    unittest.main()
