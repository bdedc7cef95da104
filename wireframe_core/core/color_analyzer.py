from __future__ import annotations

from enum import Enum
import logging

import numpy as np
import torch
from PIL import Image

from wireframe_ui.background import BLACK, DARK_GRAY, Color


LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_SWATCHES = 16
# Matches the sampling area palette generators use for large bitmaps (112 x 112).
DEFAULT_MAX_SAMPLE_PIXELS = 112 * 112


class ColorStrategy(str, Enum):
    DOMINANT_SWATCH = "dominant_swatch"
    MEAN = "mean"


def dominant_swatch_color(
    pixels: torch.Tensor | None,
    default: Color = DARK_GRAY,
    *,
    max_swatches: int = DEFAULT_MAX_SWATCHES,
    max_sample_pixels: int = DEFAULT_MAX_SAMPLE_PIXELS,
) -> Color:
    """Most populated median-cut swatch over the non-transparent pixels of an RGBA buffer."""
    if _is_empty(pixels):
        return default
    assert pixels is not None
    flat = pixels.reshape(-1, 4)
    populated = flat[flat[:, 3] > 0]
    if populated.shape[0] == 0:
        LOGGER.debug("dominant swatch: buffer has no populated pixels")
        return default
    if populated.shape[0] > max_sample_pixels:
        stride = -(-populated.shape[0] // max_sample_pixels)
        populated = populated[::stride]
    rgb = np.ascontiguousarray(populated[:, :3].to(torch.uint8).cpu().numpy()).reshape(1, -1, 3)
    quantized = Image.fromarray(rgb).quantize(colors=max_swatches, method=Image.Quantize.MEDIANCUT)
    counts = quantized.getcolors(maxcolors=256)
    palette = quantized.getpalette()
    if not counts or palette is None:
        return default
    _, index = max(counts, key=lambda item: item[0])
    r, g, b = palette[index * 3 : index * 3 + 3]
    return (int(r), int(g), int(b), 255)


def mean_color(pixels: torch.Tensor | None) -> Color:
    """Channel-wise truncated mean over every pixel whose packed RGBA value is non-zero."""
    if _is_empty(pixels):
        return BLACK
    assert pixels is not None
    flat = pixels.reshape(-1, 4).to(torch.int64)
    selected = flat[torch.any(flat != 0, dim=1)]
    count = int(selected.shape[0])
    if count == 0:
        LOGGER.debug("mean color: buffer has no non-zero pixels")
        return BLACK
    sums = selected[:, :3].sum(dim=0)
    r, g, b = (int(v) // count for v in sums.tolist())
    return (r, g, b, 255)


def analyze_color(
    pixels: torch.Tensor | None,
    strategy: ColorStrategy,
    *,
    default: Color,
    max_swatches: int = DEFAULT_MAX_SWATCHES,
    max_sample_pixels: int = DEFAULT_MAX_SAMPLE_PIXELS,
) -> Color:
    if strategy is ColorStrategy.DOMINANT_SWATCH:
        return dominant_swatch_color(
            pixels,
            default,
            max_swatches=max_swatches,
            max_sample_pixels=max_sample_pixels,
        )
    if strategy is ColorStrategy.MEAN:
        return mean_color(pixels)
    raise ValueError(f"unknown color strategy: {strategy!r}")


def _is_empty(pixels: torch.Tensor | None) -> bool:
    if pixels is None:
        return True
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"pixel buffer must have shape (h, w, 4), got {tuple(pixels.shape)}")
    return pixels.shape[0] == 0 or pixels.shape[1] == 0
