from __future__ import annotations

from dataclasses import dataclass

from wireframe_ui.element_schema import Element

from .base import SurfaceEnumerator


@dataclass
class StaticCaptureContext:
    root_surface: Element | None
    is_destroyed: bool = False
    is_finishing: bool = False


class InMemorySurfaceRegistry(SurfaceEnumerator):
    """Surface registry for headless hosts and tests; stopped surfaces are not listed."""

    def __init__(self, surfaces: list[Element] | None = None) -> None:
        self._surfaces: list[Element] = []
        self._stopped: set[int] = set()
        for surface in surfaces or []:
            self.add_surface(surface)

    def add_surface(self, surface: Element) -> None:
        if any(existing is surface for existing in self._surfaces):
            raise ValueError(f"surface already registered: {surface.element_id}")
        self._surfaces.append(surface)

    def remove_surface(self, surface: Element) -> None:
        self._surfaces = [existing for existing in self._surfaces if existing is not surface]
        self._stopped.discard(id(surface))

    def stop_surface(self, surface: Element) -> None:
        self._require_registered(surface)
        self._stopped.add(id(surface))

    def resume_surface(self, surface: Element) -> None:
        self._require_registered(surface)
        self._stopped.discard(id(surface))

    def list_active_root_surfaces(self) -> list[Element]:
        return [surface for surface in self._surfaces if id(surface) not in self._stopped]

    def _require_registered(self, surface: Element) -> None:
        if not any(existing is surface for existing in self._surfaces):
            raise ValueError(f"surface not registered: {surface.element_id}")
