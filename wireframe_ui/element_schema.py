from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator

import torch

from .background import BackgroundDescriptor, Color
from .text.renderer import FontSpec, TextLine


@dataclass(frozen=True)
class Rect:
    """Absolute device-pixel rectangle; right/bottom are exclusive."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def is_empty(self) -> bool:
        return self.right <= self.left or self.bottom <= self.top

    def intersect(self, other: "Rect") -> "Rect | None":
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return None
        return Rect(left, top, right, bottom)

    def translate(self, dx: int, dy: int) -> "Rect":
        return Rect(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    @classmethod
    def from_xywh(cls, x: int, y: int, width: int, height: int) -> "Rect":
        return cls(x, y, x + width, y + height)


class ElementCategory(Enum):
    TEXT_BLOCK = "text"
    IMAGE_BLOCK = "image"
    PAGED_CONTAINER = "paged"
    GENERIC = "generic"


# Paints an element's own content into a (height, width, 4) uint8 scratch tensor.
ElementPainter = Callable[[torch.Tensor], None]


@dataclass(eq=False)
class Element:
    """One node of a live UI tree, as seen by the wireframe tracer.

    The tree is owned by the UI system; the tracer only reads it. Elements
    compare by identity so a surface can be matched against the primary root.
    """

    element_id: str
    bounds: Rect
    category: ElementCategory = ElementCategory.GENERIC
    visible: bool = True
    opacity: float = 1.0
    attached: bool = True
    children: list["Element"] = field(default_factory=list)
    background: BackgroundDescriptor | None = None
    text: str = ""
    text_lines: tuple[TextLine, ...] = ()
    text_color: Color = (17, 17, 17, 255)
    padding_top: int = 0
    font: FontSpec = field(default_factory=FontSpec)
    font_size_px: float = 14.0
    image: torch.Tensor | None = None
    active_index: int = 0
    painter: ElementPainter | None = None

    def __post_init__(self) -> None:
        if self.opacity < 0.0 or self.opacity > 1.0:
            raise ValueError("Element opacity must be in [0, 1]")
        if self.font_size_px <= 0:
            raise ValueError("Element font_size_px must be > 0")

    @property
    def is_traceable(self) -> bool:
        return self.visible and self.opacity > 0.0 and self.attached

    @property
    def active_page(self) -> "Element | None":
        if self.category is not ElementCategory.PAGED_CONTAINER:
            return None
        if self.active_index < 0 or self.active_index >= len(self.children):
            return None
        return self.children[self.active_index]

    def walk(self) -> Iterator["Element"]:
        yield self
        for child in self.children:
            yield from child.walk()
