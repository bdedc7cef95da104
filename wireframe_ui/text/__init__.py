"""Text contracts for wireframe element trees."""

from .renderer import FontSpec, TextLine, TextMeasurer

__all__ = [
    "FontSpec",
    "TextLine",
    "TextMeasurer",
]
