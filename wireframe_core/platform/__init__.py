"""Platform adapters supplying live surfaces and capture lifecycle state."""

from .base import CaptureContext, SurfaceEnumerator
from .in_memory import InMemorySurfaceRegistry, StaticCaptureContext

__all__ = [
    "CaptureContext",
    "InMemorySurfaceRegistry",
    "StaticCaptureContext",
    "SurfaceEnumerator",
]
