from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

import numpy as np
from PIL import Image
import torch

from wireframe_core.targets.png_storage import PngStorageSink, safe_name


class PngStorageSinkTests(unittest.TestCase):
    def test_save_writes_lossless_png_under_images_dir(self) -> None:
        raster = torch.zeros((3, 5, 4), dtype=torch.uint8)
        raster[..., 0] = 200
        raster[..., 3] = 255
        raster[1, 2] = torch.tensor([1, 2, 3, 255], dtype=torch.uint8)
        with tempfile.TemporaryDirectory() as td:
            sink = PngStorageSink(td)
            self.assertTrue(sink.save(raster, "home-1"))
            path = Path(td) / "images" / "home-1.png"
            self.assertEqual(sink.path_for("home-1"), path)
            with Image.open(path) as img:
                self.assertEqual(img.size, (5, 3))
                pixels = np.array(img.convert("RGBA"))
        self.assertTrue(np.array_equal(pixels, raster.numpy()))

    def test_rejects_unsafe_names(self) -> None:
        sink = PngStorageSink("/tmp")
        for name in ("", "../escape", ".hidden", "a/b"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    sink.path_for(name)

    def test_rejects_bad_rasters(self) -> None:
        sink = PngStorageSink("/tmp")
        with self.assertRaises(ValueError):
            sink.save(torch.zeros((2, 2, 3), dtype=torch.uint8), "x")
        with self.assertRaises(ValueError):
            sink.save(torch.zeros((2, 2, 4), dtype=torch.float32), "x")

    def test_io_failure_returns_false(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            blocker = Path(td) / "root"
            blocker.write_text("not a directory", encoding="utf-8")
            sink = PngStorageSink(blocker)
            with self.assertLogs("wireframe_core.targets.png_storage", level="ERROR"):
                ok = sink.save(torch.zeros((2, 2, 4), dtype=torch.uint8), "home")
        self.assertFalse(ok)

    def test_unsafe_name_is_logged_and_not_saved(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            sink = PngStorageSink(td)
            with self.assertLogs("wireframe_core.targets.png_storage", level="ERROR"):
                ok = sink.save(torch.zeros((2, 2, 4), dtype=torch.uint8), "home screen")
            self.assertFalse(ok)
            self.assertFalse((Path(td) / "images").exists())

    def test_safe_name_maps_surface_ids_to_storage_names(self) -> None:
        self.assertEqual(safe_name("surfaces[1]"), "surfaces_1")
        self.assertEqual(safe_name("consent dialog"), "consent_dialog")
        self.assertEqual(safe_name("dialog.v2"), "dialog.v2")
        self.assertEqual(safe_name("..."), "surface")
        sink = PngStorageSink("/tmp")
        for raw in ("surfaces[1]", "a/b", " lead"):
            with self.subTest(raw=raw):
                sink.path_for(safe_name(raw))


if __name__ == "__main__":
    unittest.main()
