from __future__ import annotations

import unittest

import torch

from wireframe_core.core.raster import WireframeRaster
from wireframe_ui.element_schema import Rect


class WireframeRasterTests(unittest.TestCase):
    def test_init_uses_canonical_shape_dtype_and_background(self) -> None:
        raster = WireframeRaster(height=3, width=4, background=(1, 2, 3, 255))
        snap = raster.read_snapshot()
        self.assertEqual(tuple(snap.shape), (3, 4, 4))
        self.assertEqual(snap.dtype, torch.uint8)
        self.assertTrue(torch.all(snap[:, :, 0] == 1))
        self.assertTrue(torch.all(snap[:, :, 3] == 255))

    def test_rejects_degenerate_dimensions(self) -> None:
        with self.assertRaises(ValueError):
            WireframeRaster(height=0, width=4)
        with self.assertRaises(ValueError):
            WireframeRaster(height=4, width=-1)

    def test_rejects_out_of_range_color(self) -> None:
        raster = WireframeRaster(height=2, width=2)
        with self.assertRaises(ValueError):
            raster.fill_rect(Rect(0, 0, 1, 1), (300, 0, 0, 255))
        with self.assertRaises(ValueError):
            raster.fill((0, 0, 0))  # type: ignore[arg-type]

    def test_fill_rect_is_clipped_to_buffer(self) -> None:
        raster = WireframeRaster(height=4, width=4, background=(0, 0, 0, 255))
        raster.fill_rect(Rect(-2, 2, 10, 10), (255, 0, 0, 255))
        snap = raster.read_snapshot()
        self.assertEqual(snap[1, 0].tolist(), [0, 0, 0, 255])
        self.assertEqual(snap[2, 0].tolist(), [255, 0, 0, 255])
        self.assertEqual(snap[3, 3].tolist(), [255, 0, 0, 255])

    def test_origin_translates_absolute_coordinates(self) -> None:
        raster = WireframeRaster.for_bounds(Rect(100, 50, 110, 60), background=(0, 0, 0, 255))
        self.assertEqual(raster.area, Rect(100, 50, 110, 60))
        raster.fill_rect(Rect(102, 53, 104, 55), (0, 255, 0, 255))
        snap = raster.read_snapshot()
        self.assertEqual(snap[3, 2].tolist(), [0, 255, 0, 255])
        self.assertEqual(snap[4, 3].tolist(), [0, 255, 0, 255])
        self.assertEqual(snap[5, 4].tolist(), [0, 0, 0, 255])

    def test_fill_rect_outside_buffer_is_noop(self) -> None:
        raster = WireframeRaster(height=2, width=2, background=(9, 9, 9, 255))
        raster.fill_rect(Rect(5, 5, 8, 8), (255, 255, 255, 255))
        self.assertTrue(torch.all(raster.read_snapshot()[:, :, :3] == 9))

    def test_translucent_fill_blends_over_background(self) -> None:
        raster = WireframeRaster(height=1, width=1, background=(0, 0, 0, 255))
        raster.fill_rect(Rect(0, 0, 1, 1), (255, 255, 255, 128))
        pixel = raster.read_snapshot()[0, 0].tolist()
        self.assertTrue(120 <= pixel[0] <= 135)
        self.assertEqual(pixel[3], 255)

    def test_transparent_fill_leaves_buffer_untouched(self) -> None:
        raster = WireframeRaster(height=1, width=1, background=(7, 7, 7, 255))
        raster.fill_rect(Rect(0, 0, 1, 1), (255, 0, 0, 0))
        self.assertEqual(raster.read_snapshot()[0, 0].tolist(), [7, 7, 7, 255])

    def test_snapshot_is_a_copy(self) -> None:
        raster = WireframeRaster(height=1, width=1, background=(0, 0, 0, 255))
        snap = raster.read_snapshot()
        snap[0, 0, 0] = 200
        self.assertEqual(int(raster.read_snapshot()[0, 0, 0].item()), 0)


if __name__ == "__main__":
    unittest.main()
