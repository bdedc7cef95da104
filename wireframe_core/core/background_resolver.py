from __future__ import annotations

import logging
from typing import Protocol

import torch

from wireframe_ui.background import (
    TRANSPARENT,
    Color,
    GradientBackground,
    ShapeFillBackground,
    SolidBackground,
    StatefulBackground,
    UnknownBackground,
)
from wireframe_ui.element_schema import Element, ElementCategory

from .color_analyzer import analyze_color
from .config import WireframeConfig
from .raster import WireframeRaster


LOGGER = logging.getLogger(__name__)

Logger = logging.Logger | logging.LoggerAdapter


class OffscreenRenderer(Protocol):
    def render(self, element: Element) -> torch.Tensor | None:
        """Return the element's own content as an (h, w, 4) buffer, or None when it has no area."""
        ...


class PainterOffscreenRenderer:
    """Renders an element into a transparent scratch raster sized to its bounds."""

    def render(self, element: Element) -> torch.Tensor | None:
        bounds = element.bounds
        if bounds.is_empty:
            return None
        scratch = WireframeRaster(bounds.height, bounds.width, background=TRANSPARENT)
        pixels = scratch.read_snapshot()
        if element.painter is not None:
            element.painter(pixels)
        return pixels


class BackgroundResolver:
    """Derives one fill color per element; never raises past the element."""

    def __init__(
        self,
        config: WireframeConfig | None = None,
        *,
        offscreen: OffscreenRenderer | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._config = config or WireframeConfig()
        self._offscreen = offscreen or PainterOffscreenRenderer()
        self._logger = logger or LOGGER

    def resolve_color(self, element: Element) -> Color:
        try:
            if element.category is ElementCategory.IMAGE_BLOCK:
                return self._image_color(element)
            return self._background_color(element)
        except Exception:  # noqa: BLE001
            self._logger.exception("color resolution failed for element `%s`", element.element_id)
            return self.fallback_color(element)

    def fallback_color(self, element: Element) -> Color:
        if element.category is ElementCategory.IMAGE_BLOCK:
            return self._config.image_fallback_color
        return self._config.generic_fallback_color

    def _image_color(self, element: Element) -> Color:
        if element.image is None:
            self._logger.info("image element `%s` has no bitmap content", element.element_id)
            return self._config.image_fallback_color
        return analyze_color(
            element.image,
            self._config.image_strategy,
            default=self._config.image_fallback_color,
            max_swatches=self._config.max_swatches,
            max_sample_pixels=self._config.max_sample_pixels,
        )

    def _background_color(self, element: Element) -> Color:
        background = element.background
        fallback = self._config.generic_fallback_color
        if isinstance(background, SolidBackground):
            return background.color
        if isinstance(background, GradientBackground):
            if self._config.gradient_stops_supported and background.stop_colors is not None:
                return background.stop_colors[0] if background.stop_colors else fallback
        elif isinstance(background, ShapeFillBackground):
            return background.fill_color if background.fill_color is not None else fallback
        elif isinstance(background, StatefulBackground):
            first = background.layers[0] if background.layers else None
            return first.color if isinstance(first, SolidBackground) else fallback
        elif background is not None and not isinstance(background, UnknownBackground):
            raise TypeError(f"Unsupported background descriptor: {type(background)!r}")
        else:
            kind = background.kind if background is not None else "none"
            self._logger.debug("element `%s` has unsupported background `%s`", element.element_id, kind)
        return self._estimate_from_raster(element)

    def _estimate_from_raster(self, element: Element) -> Color:
        pixels = self._offscreen.render(element)
        return analyze_color(
            pixels,
            self._config.offscreen_strategy,
            default=self._config.generic_fallback_color,
            max_swatches=self._config.max_swatches,
            max_sample_pixels=self._config.max_sample_pixels,
        )
