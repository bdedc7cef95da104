from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

from wireframe_ui.element_schema import Element


class SurfaceEnumerator(ABC):
    """Platform adapter listing the live, non-stopped top-level surfaces of the process."""

    @abstractmethod
    def list_active_root_surfaces(self) -> list[Element]:
        raise NotImplementedError


class CaptureContext(Protocol):
    """Lifecycle gate consulted once at the start of a render."""

    @property
    def is_destroyed(self) -> bool:
        ...

    @property
    def is_finishing(self) -> bool:
        ...

    @property
    def root_surface(self) -> Element | None:
        ...
