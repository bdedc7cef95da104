"""Element-tree contracts for wireframe capture."""

from .background import (
    BackgroundDescriptor,
    Color,
    GradientBackground,
    ShapeFillBackground,
    SolidBackground,
    StatefulBackground,
    UnknownBackground,
    coerce_color,
    parse_hex_color,
)
from .element_schema import Element, ElementCategory, ElementPainter, Rect
from .text.renderer import FontSpec, TextLine, TextMeasurer

__all__ = [
    "BackgroundDescriptor",
    "Color",
    "Element",
    "ElementCategory",
    "ElementPainter",
    "FontSpec",
    "GradientBackground",
    "Rect",
    "ShapeFillBackground",
    "SolidBackground",
    "StatefulBackground",
    "TextLine",
    "TextMeasurer",
    "UnknownBackground",
    "coerce_color",
    "parse_hex_color",
]
