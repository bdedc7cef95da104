from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)
DARK_GRAY: Color = (68, 68, 68, 255)
GREEN: Color = (0, 255, 0, 255)
TRANSPARENT: Color = (0, 0, 0, 0)


@dataclass(frozen=True)
class SolidBackground:
    color: Color


@dataclass(frozen=True)
class GradientBackground:
    """Gradient fill; `stop_colors` is None when the runtime does not expose stops."""

    stop_colors: tuple[Color, ...] | None


@dataclass(frozen=True)
class ShapeFillBackground:
    fill_color: Color | None = None


@dataclass(frozen=True)
class StatefulBackground:
    layers: tuple["BackgroundDescriptor", ...]


@dataclass(frozen=True)
class UnknownBackground:
    kind: str = "unknown"


BackgroundDescriptor: TypeAlias = (
    SolidBackground | GradientBackground | ShapeFillBackground | StatefulBackground | UnknownBackground
)


def parse_hex_color(hex_color: str) -> Color:
    value = hex_color.strip()
    if not value.startswith("#"):
        raise ValueError(f"color must be #RRGGBB or #RRGGBBAA, got `{hex_color}`")
    raw = value[1:]
    if len(raw) not in (6, 8):
        raise ValueError(f"color must be #RRGGBB or #RRGGBBAA, got `{hex_color}`")
    try:
        channels = [int(raw[i : i + 2], 16) for i in range(0, len(raw), 2)]
    except ValueError as exc:
        raise ValueError(f"color has non-hex digits: `{hex_color}`") from exc
    if len(channels) == 3:
        channels.append(255)
    return (channels[0], channels[1], channels[2], channels[3])


def coerce_color(value: object, label: str) -> Color:
    """Accept `#hex` strings or 3/4-item integer sequences."""

    if isinstance(value, str):
        return parse_hex_color(value)
    if isinstance(value, (list, tuple)) and len(value) in (3, 4):
        channels = [int(v) for v in value]
        if any(c < 0 or c > 255 for c in channels):
            raise ValueError(f"{label} channels must be in [0, 255]")
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])
    raise ValueError(f"{label} must be a hex string or RGB(A) list, got {value!r}")
