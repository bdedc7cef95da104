from __future__ import annotations

import torch

from wireframe_ui.background import Color
from wireframe_ui.element_schema import Rect


class WireframeRaster:
    """RGBA255 output buffer for one render pass, addressed in absolute screen coordinates.

    `origin` is the absolute position of pixel (0, 0); rectangles are
    translated by it and clipped to the buffer before painting.
    """

    def __init__(
        self,
        height: int,
        width: int,
        background: Color = (255, 255, 255, 255),
        origin: tuple[int, int] = (0, 0),
    ) -> None:
        if height <= 0 or width <= 0:
            raise ValueError("height and width must be > 0")
        _validate_color(background)
        self.height = height
        self.width = width
        self.origin = origin
        bg = torch.tensor(background, dtype=torch.uint8).view(1, 1, 4)
        self._matrix = bg.expand(height, width, 4).clone()

    @classmethod
    def for_bounds(cls, bounds: Rect, background: Color = (255, 255, 255, 255)) -> "WireframeRaster":
        return cls(bounds.height, bounds.width, background=background, origin=(bounds.left, bounds.top))

    @property
    def area(self) -> Rect:
        x, y = self.origin
        return Rect(x, y, x + self.width, y + self.height)

    def read_snapshot(self) -> torch.Tensor:
        """Safe read copy for external consumers."""
        return self._matrix.clone()

    def fill(self, color: Color) -> None:
        _validate_color(color)
        self._matrix[:, :] = torch.tensor(color, dtype=torch.uint8)

    def fill_rect(self, rect: Rect, color: Color) -> None:
        """Paint `rect` with `color`, alpha-blending translucent colors over the buffer."""
        _validate_color(color)
        clipped = rect.intersect(self.area)
        if clipped is None:
            return
        alpha = color[3] / 255.0
        if alpha <= 0:
            return
        local = clipped.translate(-self.origin[0], -self.origin[1])
        y0, y1, x0, x1 = local.top, local.bottom, local.left, local.right
        if color[3] >= 255:
            self._matrix[y0:y1, x0:x1] = torch.tensor(color, dtype=torch.uint8)
            return
        dst = self._matrix[y0:y1, x0:x1, :3].to(torch.float32)
        src = torch.tensor(color[:3], dtype=torch.float32).view(1, 1, 3)
        out = torch.clamp(src * alpha + dst * (1.0 - alpha), 0, 255).to(torch.uint8)
        self._matrix[y0:y1, x0:x1, :3] = out
        self._matrix[y0:y1, x0:x1, 3] = 255


def _validate_color(color: Color) -> None:
    if len(color) != 4:
        raise ValueError(f"color must have 4 RGBA channels, got {color!r}")
    if any(int(c) < 0 or int(c) > 255 for c in color):
        raise ValueError(f"color channels must be in [0, 255], got {color!r}")
