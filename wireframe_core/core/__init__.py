from .audit import AuditLogger, JsonlAuditSink
from .background_resolver import BackgroundResolver, OffscreenRenderer, PainterOffscreenRenderer
from .color_analyzer import ColorStrategy, analyze_color, dominant_swatch_color, mean_color
from .config import WireframeConfig, config_from_mapping, load_config
from .element_renderer import ElementRenderer
from .frame_orchestrator import (
    RenderFailure,
    RenderFailureKind,
    RenderResult,
    SurfaceRaster,
    WireframeOrchestrator,
)
from .raster import WireframeRaster
from .text_measure import PillowTextMeasurer, wrap_text_lines
from .tree_tracer import TraceNodeError, TraceReport, TreeTracer

__all__ = [
    "AuditLogger",
    "BackgroundResolver",
    "ColorStrategy",
    "ElementRenderer",
    "JsonlAuditSink",
    "OffscreenRenderer",
    "PainterOffscreenRenderer",
    "PillowTextMeasurer",
    "RenderFailure",
    "RenderFailureKind",
    "RenderResult",
    "SurfaceRaster",
    "TraceNodeError",
    "TraceReport",
    "TreeTracer",
    "WireframeConfig",
    "WireframeOrchestrator",
    "WireframeRaster",
    "analyze_color",
    "config_from_mapping",
    "dominant_swatch_color",
    "load_config",
    "mean_color",
    "wrap_text_lines",
]
