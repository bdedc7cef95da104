from __future__ import annotations

import logging
from typing import Callable

from wireframe_ui.element_schema import Element, Rect
from wireframe_ui.text.renderer import TextMeasurer

from .background_resolver import BackgroundResolver, Logger
from .raster import WireframeRaster
from .text_measure import PillowTextMeasurer


LOGGER = logging.getLogger(__name__)


class ElementRenderer:
    """Paints the category-specific wireframe representation of one element."""

    def __init__(
        self,
        resolver: BackgroundResolver,
        measurer: TextMeasurer | None = None,
        *,
        logger: Logger | None = None,
    ) -> None:
        self._resolver = resolver
        self._measurer = measurer or PillowTextMeasurer()
        self._logger = logger or LOGGER

    def render_generic(self, element: Element, rect: Rect, raster: WireframeRaster) -> None:
        raster.fill_rect(rect, self._resolver.resolve_color(element))

    def render_text(self, element: Element, rect: Rect, raster: WireframeRaster) -> int:
        """Paint one block per laid-out line, as wide as the line's measured glyph extent."""
        if not element.text_lines:
            self._logger.debug("text element `%s` has no laid-out lines", element.element_id)
            return 0
        # measure every line before painting any
        line_rects = []
        for line in element.text_lines:
            width = self._measurer.measure_width(line.text, element.font, element.font_size_px)
            top = rect.top + line.top + element.padding_top
            line_rects.append(Rect(rect.left, top, rect.left + width, top + line.height))
        for line_rect in line_rects:
            raster.fill_rect(line_rect, element.text_color)
        return len(line_rects)

    def render_paged_active(
        self,
        element: Element,
        raster: WireframeRaster,
        descend: Callable[[Element, WireframeRaster], None],
    ) -> Element | None:
        page = element.active_page
        if page is None:
            self._logger.debug(
                "paged element `%s` has no child at active index %d",
                element.element_id,
                element.active_index,
            )
            return None
        descend(page, raster)
        return page
