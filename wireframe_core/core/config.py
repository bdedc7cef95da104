from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
import tomllib
from typing import Any, Literal, Mapping

from wireframe_ui.background import DARK_GRAY, GREEN, WHITE, Color, coerce_color

from .color_analyzer import DEFAULT_MAX_SAMPLE_PIXELS, DEFAULT_MAX_SWATCHES, ColorStrategy


CompositingPolicy = Literal["composite", "per_surface"]
COMPOSITING_POLICIES: tuple[str, ...] = ("composite", "per_surface")


@dataclass(frozen=True)
class WireframeConfig:
    default_background: Color = WHITE
    generic_fallback_color: Color = DARK_GRAY
    image_fallback_color: Color = GREEN
    offscreen_strategy: ColorStrategy = ColorStrategy.DOMINANT_SWATCH
    image_strategy: ColorStrategy = ColorStrategy.DOMINANT_SWATCH
    compositing: CompositingPolicy = "composite"
    max_depth: int = 256
    max_swatches: int = DEFAULT_MAX_SWATCHES
    max_sample_pixels: int = DEFAULT_MAX_SAMPLE_PIXELS
    gradient_stops_supported: bool = True

    def __post_init__(self) -> None:
        if self.compositing not in COMPOSITING_POLICIES:
            raise ValueError(f"compositing must be one of {COMPOSITING_POLICIES}, got `{self.compositing}`")
        if not isinstance(self.offscreen_strategy, ColorStrategy):
            raise ValueError("offscreen_strategy must be a ColorStrategy")
        if not isinstance(self.image_strategy, ColorStrategy):
            raise ValueError("image_strategy must be a ColorStrategy")
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        if self.max_swatches < 2 or self.max_swatches > 256:
            raise ValueError("max_swatches must be in [2, 256]")
        if self.max_sample_pixels <= 0:
            raise ValueError("max_sample_pixels must be > 0")


def config_from_mapping(raw: Mapping[str, Any]) -> WireframeConfig:
    known = {f.name for f in fields(WireframeConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"unknown config field(s): {', '.join(unknown)}")
    values: dict[str, Any] = {}
    for name in ("default_background", "generic_fallback_color", "image_fallback_color"):
        if name in raw:
            values[name] = coerce_color(raw[name], name)
    for name in ("offscreen_strategy", "image_strategy"):
        if name in raw:
            values[name] = _coerce_strategy(raw[name], name)
    if "compositing" in raw:
        values["compositing"] = str(raw["compositing"])
    for name in ("max_depth", "max_swatches", "max_sample_pixels"):
        if name in raw:
            values[name] = _coerce_int(raw[name], name)
    if "gradient_stops_supported" in raw:
        value = raw["gradient_stops_supported"]
        if not isinstance(value, bool):
            raise ValueError("gradient_stops_supported must be a bool")
        values["gradient_stops_supported"] = value
    return WireframeConfig(**values)


def load_config(path: str | Path) -> WireframeConfig:
    """Load a `[wireframe]` table (or a flat document) from a TOML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"wireframe config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("wireframe", raw)
    if not isinstance(table, dict):
        raise ValueError("`wireframe` config table must be a table")
    return config_from_mapping(table)


def _coerce_strategy(value: object, label: str) -> ColorStrategy:
    try:
        return ColorStrategy(str(value))
    except ValueError as exc:
        choices = ", ".join(s.value for s in ColorStrategy)
        raise ValueError(f"{label} must be one of: {choices}") from exc


def _coerce_int(value: object, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label} must be an integer")
    return value
