from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import itertools
import logging
import time

import torch

from wireframe_ui.background import Color
from wireframe_ui.element_schema import Element
from wireframe_ui.text.renderer import TextMeasurer

from wireframe_core.platform.base import CaptureContext, SurfaceEnumerator
from wireframe_core.targets.base import StorageSink

from .audit import AuditLogger
from .background_resolver import BackgroundResolver, Logger, OffscreenRenderer
from .config import WireframeConfig
from .element_renderer import ElementRenderer
from .raster import WireframeRaster
from .text_measure import PillowTextMeasurer
from .tree_tracer import TraceReport, TreeTracer


LOGGER = logging.getLogger(__name__)
_RENDER_IDS = itertools.count(1)


class RenderFailureKind(str, Enum):
    NOT_READY = "not_ready"
    DRAW_ERROR = "draw_error"


@dataclass(frozen=True)
class RenderFailure:
    kind: RenderFailureKind
    message: str


@dataclass(frozen=True)
class SurfaceRaster:
    surface_id: str
    raster: torch.Tensor


@dataclass
class RenderResult:
    raster: torch.Tensor | None = None
    failure: RenderFailure | None = None
    overlays: tuple[SurfaceRaster, ...] = ()
    report: TraceReport = field(default_factory=TraceReport)
    duration_ms: float = 0.0
    saved: bool | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.raster is not None


class WireframeOrchestrator:
    """Renders privacy-preserving wireframes of every active surface of a capture context.

    Must run on the thread that owns the element tree; the tree must not be
    mutated while a frame is being traced.
    """

    def __init__(
        self,
        enumerator: SurfaceEnumerator,
        *,
        config: WireframeConfig | None = None,
        measurer: TextMeasurer | None = None,
        offscreen: OffscreenRenderer | None = None,
        storage: StorageSink | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._enumerator = enumerator
        self._config = config or WireframeConfig()
        self._measurer = measurer or PillowTextMeasurer()
        self._offscreen = offscreen
        self._storage = storage
        self._audit_logger = audit_logger or (lambda entry: None)

    @property
    def config(self) -> WireframeConfig:
        return self._config

    def render_frame(self, context: CaptureContext) -> RenderResult:
        start_ns = time.perf_counter_ns()
        logger = logging.LoggerAdapter(LOGGER, {"render_id": next(_RENDER_IDS)})
        result = self._render(context, logger)
        result.duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        logger.debug("wireframe rendering duration ms: %.3f", result.duration_ms)
        self._audit(context, result)
        return result

    def capture(self, context: CaptureContext, name: str) -> RenderResult:
        """Render a frame and hand a successful raster to the storage sink."""
        result = self.render_frame(context)
        if not result.ok or self._storage is None:
            return result
        assert result.raster is not None
        result.saved = self._storage.save(result.raster, name)
        if not result.saved:
            LOGGER.error("wireframe `%s` could not be saved", name)
        return result

    def _render(self, context: CaptureContext, logger: Logger) -> RenderResult:
        if context.is_destroyed or context.is_finishing:
            logger.error("capture context is destroyed or finishing")
            return RenderResult(failure=RenderFailure(RenderFailureKind.NOT_READY, "capture context not ready"))
        primary = context.root_surface
        if primary is None:
            logger.error("capture context has no root surface")
            return RenderResult(failure=RenderFailure(RenderFailureKind.NOT_READY, "no root surface"))

        surfaces = self._list_surfaces(logger)
        resolver = BackgroundResolver(self._config, offscreen=self._offscreen, logger=logger)
        renderer = ElementRenderer(resolver, self._measurer, logger=logger)
        tracer = TreeTracer(renderer, max_depth=self._config.max_depth, logger=logger)
        report = TraceReport()
        overlays: list[SurfaceRaster] = []
        try:
            raster = self._trace_surface(primary, resolver, tracer, report)
            for surface in surfaces:
                if surface is primary:
                    continue
                if self._config.compositing == "composite":
                    report.merge(tracer.trace(surface, raster))
                else:
                    overlay = self._trace_surface(surface, resolver, tracer, report)
                    overlays.append(SurfaceRaster(surface.element_id, overlay.read_snapshot()))
            snapshot = raster.read_snapshot()
        except Exception as exc:  # noqa: BLE001
            logger.exception("error rendering wireframe")
            return RenderResult(failure=RenderFailure(RenderFailureKind.DRAW_ERROR, str(exc)), report=report)
        return RenderResult(raster=snapshot, overlays=tuple(overlays), report=report)

    def _trace_surface(
        self,
        surface: Element,
        resolver: BackgroundResolver,
        tracer: TreeTracer,
        report: TraceReport,
    ) -> WireframeRaster:
        raster = WireframeRaster.for_bounds(surface.bounds, background=self._surface_background(surface, resolver))
        report.merge(tracer.trace(surface, raster))
        return raster

    def _surface_background(self, surface: Element, resolver: BackgroundResolver) -> Color:
        if surface.background is None:
            return self._config.default_background
        return resolver.resolve_color(surface)

    def _list_surfaces(self, logger: Logger) -> list[Element]:
        try:
            return list(self._enumerator.list_active_root_surfaces())
        except Exception:  # noqa: BLE001
            logger.exception("surface enumeration failed; tracing the root surface only")
            return []

    def _audit(self, context: CaptureContext, result: RenderResult) -> None:
        if result.failure is None:
            action = "render_ok"
        elif result.failure.kind is RenderFailureKind.NOT_READY:
            action = "render_not_ready"
        else:
            action = "render_draw_error"
        root = context.root_surface
        entry = {
            "ts_ns": time.time_ns(),
            "action": action,
            "surface": root.element_id if root is not None else "",
            "nodes_drawn": result.report.nodes_drawn,
            "node_errors": len(result.report.node_errors),
            "overlays": len(result.overlays),
            "duration_ms": round(result.duration_ms, 3),
        }
        try:
            self._audit_logger(entry)
        except Exception:  # noqa: BLE001
            LOGGER.exception("audit logger rejected `%s` entry", action)
