from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol


@dataclass(frozen=True)
class FontSpec:
    """Font definition from either system lookup or explicit file path.

    If `file_path` is set, measurers should prefer file-backed font loading.
    """

    family: str = "DejaVu Sans"
    file_path: str | None = None

    def __post_init__(self) -> None:
        if not self.family.strip() and self.file_path is None:
            raise ValueError("FontSpec requires `family` when `file_path` is not set")
        if self.file_path is not None and not str(self.file_path).strip():
            raise ValueError("FontSpec `file_path` must be non-empty when provided")

    @property
    def source_kind(self) -> Literal["system", "file"]:
        return "file" if self.file_path else "system"

    @property
    def normalized_file_path(self) -> Path | None:
        if self.file_path is None:
            return None
        return Path(self.file_path)


@dataclass(frozen=True)
class TextLine:
    """One laid-out line of a text element.

    `start`/`end` index into the element text, `top`/`bottom` are vertical
    offsets relative to the element, `text` is the substring to measure.
    """

    start: int
    end: int
    top: int
    bottom: int
    text: str

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError("TextLine requires 0 <= start <= end")
        if self.bottom < self.top:
            raise ValueError("TextLine bottom must be >= top")

    @classmethod
    def from_text(cls, text: str, start: int, end: int, top: int, bottom: int) -> "TextLine":
        return cls(start=start, end=end, top=top, bottom=bottom, text=text[start:end])

    @property
    def height(self) -> int:
        return self.bottom - self.top


class TextMeasurer(Protocol):
    """Measures glyph extents of a single line of text in device pixels."""

    def measure_width(self, text: str, font: FontSpec, size_px: float) -> int:
        ...
