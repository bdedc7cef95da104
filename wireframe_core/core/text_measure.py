from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

from PIL import ImageFont

from wireframe_ui.text.renderer import FontSpec, TextLine, TextMeasurer


LOGGER = logging.getLogger(__name__)


class PillowTextMeasurer:
    """Approximates line extents from the tight glyph bounding box of the loaded font."""

    def measure_width(self, text: str, font: FontSpec, size_px: float) -> int:
        if size_px <= 0:
            raise ValueError("font size must be > 0")
        if text == "":
            return 0
        loaded = _load_font(_resolve_font_path(font), size_px)
        left, _, right, _ = loaded.getbbox(text)
        return max(0, int(right - left))

    def line_height(self, font: FontSpec, size_px: float, multiplier: float = 1.2) -> int:
        loaded = _load_font(_resolve_font_path(font), size_px)
        ascent, descent = _font_metrics(loaded, size_px)
        return int(round(max(float(ascent + descent), size_px * multiplier)))


def wrap_text_lines(
    text: str,
    measurer: TextMeasurer,
    font: FontSpec,
    size_px: float,
    *,
    max_width_px: int | None,
    line_height_px: int,
) -> tuple[TextLine, ...]:
    """Greedy word wrap producing line records with offsets into `text`."""
    if line_height_px <= 0:
        raise ValueError("line_height_px must be > 0")
    spans: list[tuple[int, int]] = []
    offset = 0
    for raw_line in text.split("\n"):
        spans.extend(_wrap_span(text, offset, offset + len(raw_line), measurer, font, size_px, max_width_px))
        offset += len(raw_line) + 1
    return tuple(
        TextLine.from_text(text, start, end, i * line_height_px, (i + 1) * line_height_px)
        for i, (start, end) in enumerate(spans)
    )


def _wrap_span(
    text: str,
    start: int,
    end: int,
    measurer: TextMeasurer,
    font: FontSpec,
    size_px: float,
    max_width_px: int | None,
) -> list[tuple[int, int]]:
    if max_width_px is None or start == end:
        return [(start, end)]
    out: list[tuple[int, int]] = []
    line_start = start
    line_end = text.find(" ", start, end)
    line_end = end if line_end < 0 else line_end
    cursor = line_end
    while cursor < end:
        next_space = text.find(" ", cursor + 1, end)
        candidate_end = end if next_space < 0 else next_space
        if measurer.measure_width(text[line_start:candidate_end], font, size_px) <= max_width_px:
            line_end = candidate_end
        else:
            out.append((line_start, line_end))
            line_start = cursor + 1
            line_end = candidate_end
        cursor = candidate_end
    out.append((line_start, line_end))
    return out


def _resolve_font_path(font: FontSpec) -> str:
    if font.file_path:
        return str(Path(font.file_path).resolve())
    return _resolve_system_font_path(font.family)


@lru_cache(maxsize=64)
def _load_font(font_path: str, size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(size_px)))
    try:
        return ImageFont.truetype(font_path, size=size)
    except (OSError, ValueError):
        LOGGER.debug("font `%s` unavailable, using Pillow default font", font_path)
        return ImageFont.load_default(size=size)


def _font_metrics(font: ImageFont.FreeTypeFont | ImageFont.ImageFont, size_px: float) -> tuple[int, int]:
    try:
        ascent, descent = font.getmetrics()
        return int(max(1, ascent)), int(max(0, descent))
    except AttributeError:
        return int(max(1, size_px * 0.8)), int(max(0, size_px * 0.2))


@lru_cache(maxsize=16)
def _resolve_system_font_path(family: str) -> str:
    wanted = (family.strip() or "DejaVu Sans").lower().replace(" ", "")
    patterns = (
        wanted,
        "dejavusans",
        "helvetica",
        "arial",
        "liberationsans",
        "menlo",
    )
    font_dirs = (
        Path.home() / "Library/Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    )
    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))
    for pattern in patterns:
        for path in candidates:
            name = path.name.lower().replace(" ", "")
            if pattern in name:
                return str(path)
    if candidates:
        return str(candidates[0])
    return ""
