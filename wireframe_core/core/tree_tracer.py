from __future__ import annotations

from dataclasses import dataclass, field
import logging

from wireframe_ui.element_schema import Element, ElementCategory, Rect

from .background_resolver import Logger
from .element_renderer import ElementRenderer
from .raster import WireframeRaster


LOGGER = logging.getLogger(__name__)
DEFAULT_MAX_DEPTH = 256


class TraceNodeError(Exception):
    """A failure while tracing one element; contained at that element."""

    def __init__(self, element_id: str, cause: BaseException) -> None:
        super().__init__(f"failed to trace element `{element_id}`: {cause}")
        self.element_id = element_id
        self.cause = cause


@dataclass
class TraceReport:
    nodes_visited: int = 0
    nodes_drawn: int = 0
    text_lines_drawn: int = 0
    depth_limited: int = 0
    node_errors: list[TraceNodeError] = field(default_factory=list)

    def merge(self, other: "TraceReport") -> None:
        self.nodes_visited += other.nodes_visited
        self.nodes_drawn += other.nodes_drawn
        self.text_lines_drawn += other.text_lines_drawn
        self.depth_limited += other.depth_limited
        self.node_errors.extend(other.node_errors)


class TreeTracer:
    """Pre-order depth-first walk painting one wireframe block per visible element."""

    def __init__(
        self,
        renderer: ElementRenderer,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: Logger | None = None,
    ) -> None:
        if max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        self._renderer = renderer
        self._max_depth = max_depth
        self._logger = logger or LOGGER

    def trace(self, element: Element, raster: WireframeRaster) -> TraceReport:
        report = TraceReport()
        self._trace(element, raster, raster.area, 0, report)
        return report

    def _trace(self, element: Element, raster: WireframeRaster, clip: Rect, depth: int, report: TraceReport) -> None:
        if depth > self._max_depth:
            report.depth_limited += 1
            self._logger.warning(
                "element tree deeper than %d levels; not descending into `%s`",
                self._max_depth,
                element.element_id,
            )
            return
        try:
            if not element.is_traceable:
                return
            rect = element.bounds.intersect(clip)
            if rect is None:
                return
            report.nodes_visited += 1
            category = element.category
            if category is ElementCategory.TEXT_BLOCK:
                report.text_lines_drawn += self._renderer.render_text(element, rect, raster)
                report.nodes_drawn += 1
                return
            if category is ElementCategory.PAGED_CONTAINER:
                self._renderer.render_paged_active(
                    element,
                    raster,
                    lambda page, target: self._trace(page, target, rect, depth + 1, report),
                )
                return
            self._renderer.render_generic(element, rect, raster)
            report.nodes_drawn += 1
            for child in element.children:
                self._trace(child, raster, rect, depth + 1, report)
        except Exception as exc:  # noqa: BLE001
            element_id = str(getattr(element, "element_id", "<unknown>"))
            report.node_errors.append(TraceNodeError(element_id, exc))
            self._logger.exception("error while tracing element `%s`", element_id)
