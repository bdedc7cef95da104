from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image
import torch

from wireframe_ui.background import (
    BackgroundDescriptor,
    GradientBackground,
    ShapeFillBackground,
    SolidBackground,
    StatefulBackground,
    UnknownBackground,
    coerce_color,
)
from wireframe_ui.element_schema import Element, ElementCategory, Rect
from wireframe_ui.text.renderer import FontSpec, TextLine, TextMeasurer

from wireframe_core.core.text_measure import PillowTextMeasurer, wrap_text_lines
from wireframe_core.platform.in_memory import StaticCaptureContext


LINE_HEIGHT_MULTIPLIER = 1.2


@dataclass(frozen=True)
class LoadedTree:
    context: StaticCaptureContext
    surfaces: list[Element]


def load_tree(path: str | Path, measurer: TextMeasurer | None = None) -> LoadedTree:
    tree_path = Path(path)
    data = json.loads(tree_path.read_text(encoding="utf-8"))
    return tree_from_payload(data, base_dir=tree_path.parent, measurer=measurer)


def tree_from_payload(
    payload: dict[str, Any],
    *,
    base_dir: Path | None = None,
    measurer: TextMeasurer | None = None,
) -> LoadedTree:
    """Build a capture context from `{"surfaces": [...], "destroyed": bool, "finishing": bool}`.

    The first surface is the primary root; the rest are overlays.
    """
    if not isinstance(payload, dict):
        raise ValueError("tree payload must be an object")
    raw_surfaces = payload.get("surfaces")
    if not isinstance(raw_surfaces, list) or not raw_surfaces:
        raise ValueError("tree payload requires a non-empty `surfaces` list")
    loader = _ElementLoader(base_dir or Path.cwd(), measurer or PillowTextMeasurer())
    surfaces = [loader.element(raw, f"surfaces[{i}]") for i, raw in enumerate(raw_surfaces)]
    context = StaticCaptureContext(
        root_surface=surfaces[0],
        is_destroyed=bool(payload.get("destroyed", False)),
        is_finishing=bool(payload.get("finishing", False)),
    )
    return LoadedTree(context=context, surfaces=surfaces)


class _ElementLoader:
    def __init__(self, base_dir: Path, measurer: TextMeasurer) -> None:
        self._base_dir = base_dir
        self._measurer = measurer

    def element(self, raw: object, where: str) -> Element:
        if not isinstance(raw, dict):
            raise ValueError(f"{where} must be an object")
        try:
            category = ElementCategory(str(raw.get("category", "generic")))
        except ValueError as exc:
            choices = ", ".join(c.value for c in ElementCategory)
            raise ValueError(f"{where}.category must be one of: {choices}") from exc
        bounds = _parse_bounds(raw.get("bounds"), f"{where}.bounds")
        font = FontSpec(
            family=str(raw.get("font_family", "DejaVu Sans")),
            file_path=_optional_path(raw.get("font_file"), self._base_dir),
        )
        font_size_px = float(raw.get("font_size", 14.0))
        text = str(raw.get("text", ""))
        raw_children = raw.get("children", [])
        if not isinstance(raw_children, list):
            raise ValueError(f"{where}.children must be a list")
        element = Element(
            element_id=str(raw.get("id", where)),
            bounds=bounds,
            category=category,
            visible=bool(raw.get("visible", True)),
            opacity=float(raw.get("opacity", 1.0)),
            attached=bool(raw.get("attached", True)),
            children=[self.element(child, f"{where}.children[{i}]") for i, child in enumerate(raw_children)],
            background=_parse_background(raw.get("background"), f"{where}.background"),
            text=text,
            text_color=coerce_color(raw.get("text_color", "#111111"), f"{where}.text_color"),
            padding_top=int(raw.get("padding_top", 0)),
            font=font,
            font_size_px=font_size_px,
            image=self._load_image(raw.get("image"), f"{where}.image"),
            active_index=int(raw.get("active_index", 0)),
        )
        if category is ElementCategory.TEXT_BLOCK:
            element.text_lines = self._text_lines(raw.get("lines"), element, f"{where}.lines")
        return element

    def _text_lines(self, raw_lines: object, element: Element, where: str) -> tuple[TextLine, ...]:
        if raw_lines is None:
            if element.text == "":
                return ()
            line_height = int(round(element.font_size_px * LINE_HEIGHT_MULTIPLIER))
            return wrap_text_lines(
                element.text,
                self._measurer,
                element.font,
                element.font_size_px,
                max_width_px=max(1, element.bounds.width),
                line_height_px=max(1, line_height),
            )
        if not isinstance(raw_lines, list):
            raise ValueError(f"{where} must be a list")
        lines: list[TextLine] = []
        for i, raw in enumerate(raw_lines):
            if not isinstance(raw, dict):
                raise ValueError(f"{where}[{i}] must be an object")
            try:
                start, end = int(raw["start"]), int(raw["end"])
                top, bottom = int(raw["top"]), int(raw["bottom"])
            except KeyError as exc:
                raise ValueError(f"{where}[{i}] missing required field: {exc.args[0]}") from exc
            if end > len(element.text):
                raise ValueError(f"{where}[{i}] end offset exceeds text length")
            lines.append(TextLine.from_text(element.text, start, end, top, bottom))
        return tuple(lines)

    def _load_image(self, value: object, where: str) -> torch.Tensor | None:
        path = _optional_path(value, self._base_dir)
        if path is None:
            return None
        if not Path(path).exists():
            raise ValueError(f"{where} not found: {path}")
        with Image.open(path) as img:
            rgba = np.array(img.convert("RGBA"), dtype=np.uint8)
        return torch.from_numpy(rgba)


def _parse_bounds(value: object, where: str) -> Rect:
    if not isinstance(value, list) or len(value) != 4:
        raise ValueError(f"{where} must be [left, top, right, bottom]")
    left, top, right, bottom = (int(v) for v in value)
    return Rect(left, top, right, bottom)


def _parse_background(value: object, where: str) -> BackgroundDescriptor | None:
    if value is None:
        return None
    if isinstance(value, str):
        return SolidBackground(coerce_color(value, where))
    if not isinstance(value, dict):
        raise ValueError(f"{where} must be a color string or an object")
    kind = str(value.get("kind", "unknown"))
    if kind == "solid":
        return SolidBackground(coerce_color(value.get("color"), f"{where}.color"))
    if kind == "gradient":
        stops = value.get("stops")
        if stops is None:
            return GradientBackground(stop_colors=None)
        if not isinstance(stops, list):
            raise ValueError(f"{where}.stops must be a list")
        return GradientBackground(
            stop_colors=tuple(coerce_color(stop, f"{where}.stops[{i}]") for i, stop in enumerate(stops))
        )
    if kind == "shape":
        fill = value.get("fill")
        return ShapeFillBackground(fill_color=None if fill is None else coerce_color(fill, f"{where}.fill"))
    if kind == "stateful":
        layers = value.get("layers", [])
        if not isinstance(layers, list):
            raise ValueError(f"{where}.layers must be a list")
        parsed = (_parse_background(layer, f"{where}.layers[{i}]") for i, layer in enumerate(layers))
        # null layers keep their slot; only the first layer is ever consulted
        return StatefulBackground(layers=tuple(UnknownBackground("none") if layer is None else layer for layer in parsed))
    return UnknownBackground(kind=kind)


def _optional_path(value: object, base_dir: Path) -> str | None:
    if value is None:
        return None
    raw = str(value).strip()
    if not raw:
        return None
    return str((base_dir / raw).resolve())
