from __future__ import annotations

import unittest

import torch

from wireframe_core.core.color_analyzer import (
    ColorStrategy,
    analyze_color,
    dominant_swatch_color,
    mean_color,
)


def _uniform(height: int, width: int, color: tuple[int, int, int, int]) -> torch.Tensor:
    return torch.tensor(color, dtype=torch.uint8).view(1, 1, 4).expand(height, width, 4).clone()


class ColorAnalyzerTests(unittest.TestCase):
    def assertColorClose(self, got: tuple[int, int, int, int], want: tuple[int, int, int, int], tol: int = 2) -> None:
        for g, w in zip(got, want):
            self.assertLessEqual(abs(g - w), tol, f"{got} != {want}")

    def test_mean_of_uniform_buffer_is_exact(self) -> None:
        self.assertEqual(mean_color(_uniform(4, 5, (10, 20, 30, 255))), (10, 20, 30, 255))

    def test_mean_of_transparent_buffer_is_black(self) -> None:
        self.assertEqual(mean_color(torch.zeros((3, 3, 4), dtype=torch.uint8)), (0, 0, 0, 255))

    def test_mean_skips_zero_pixels_and_truncates(self) -> None:
        pixels = torch.zeros((1, 4, 4), dtype=torch.uint8)
        pixels[0, 0] = torch.tensor([1, 10, 0, 255], dtype=torch.uint8)
        pixels[0, 1] = torch.tensor([2, 11, 0, 255], dtype=torch.uint8)
        self.assertEqual(mean_color(pixels), (1, 10, 0, 255))

    def test_mean_counts_nonzero_pixels_even_when_transparent(self) -> None:
        pixels = torch.zeros((1, 2, 4), dtype=torch.uint8)
        pixels[0, 0] = torch.tensor([100, 0, 0, 0], dtype=torch.uint8)
        pixels[0, 1] = torch.tensor([50, 0, 0, 255], dtype=torch.uint8)
        self.assertEqual(mean_color(pixels), (75, 0, 0, 255))

    def test_mean_of_missing_or_empty_buffer_is_black(self) -> None:
        self.assertEqual(mean_color(None), (0, 0, 0, 255))
        self.assertEqual(mean_color(torch.zeros((0, 5, 4), dtype=torch.uint8)), (0, 0, 0, 255))

    def test_dominant_swatch_returns_majority_color(self) -> None:
        pixels = _uniform(10, 10, (200, 40, 40, 255))
        pixels[9, :] = torch.tensor([20, 20, 220, 255], dtype=torch.uint8)
        self.assertColorClose(dominant_swatch_color(pixels), (200, 40, 40, 255))

    def test_dominant_swatch_ignores_transparent_pixels(self) -> None:
        pixels = _uniform(10, 10, (0, 0, 255, 0))
        pixels[0:2, :] = torch.tensor([255, 0, 0, 255], dtype=torch.uint8)
        self.assertColorClose(dominant_swatch_color(pixels), (255, 0, 0, 255))

    def test_dominant_swatch_falls_back_without_populated_pixels(self) -> None:
        default = (1, 2, 3, 255)
        self.assertEqual(dominant_swatch_color(torch.zeros((4, 4, 4), dtype=torch.uint8), default), default)
        self.assertEqual(dominant_swatch_color(None, default), default)
        self.assertEqual(dominant_swatch_color(torch.zeros((4, 0, 4), dtype=torch.uint8), default), default)

    def test_dominant_swatch_samples_large_buffers(self) -> None:
        pixels = _uniform(200, 200, (5, 100, 200, 255))
        got = dominant_swatch_color(pixels, max_sample_pixels=1000)
        self.assertColorClose(got, (5, 100, 200, 255))

    def test_analyze_color_dispatches_on_strategy(self) -> None:
        pixels = _uniform(2, 2, (10, 20, 30, 255))
        self.assertEqual(analyze_color(pixels, ColorStrategy.MEAN, default=(0, 0, 0, 255)), (10, 20, 30, 255))
        self.assertColorClose(
            analyze_color(pixels, ColorStrategy.DOMINANT_SWATCH, default=(0, 0, 0, 255)),
            (10, 20, 30, 255),
        )

    def test_rejects_non_rgba_buffers(self) -> None:
        with self.assertRaises(ValueError):
            mean_color(torch.zeros((2, 2, 3), dtype=torch.uint8))


if __name__ == "__main__":
    unittest.main()
