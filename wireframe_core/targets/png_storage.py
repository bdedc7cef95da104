from __future__ import annotations

import logging
from pathlib import Path
import re

import numpy as np
from PIL import Image
import torch

from .base import StorageSink


LOGGER = logging.getLogger(__name__)
_SAFE_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_name(raw: str, fallback: str = "surface") -> str:
    """Map an arbitrary label (e.g. a surface id) onto a valid storage name."""
    cleaned = _UNSAFE_CHARS.sub("_", raw).strip("._-")
    return cleaned or fallback


class PngStorageSink(StorageSink):
    """Writes lossless PNG wireframes into a private `images/` directory under `root`."""

    def __init__(self, root: str | Path, subdir: str = "images") -> None:
        self.directory = Path(root) / subdir

    def path_for(self, name: str) -> Path:
        if not _SAFE_NAME.match(name):
            raise ValueError(f"invalid wireframe name: `{name}`")
        return self.directory / f"{name}.png"

    def save(self, raster: torch.Tensor, name: str) -> bool:
        if raster.ndim != 3 or raster.shape[2] != 4:
            raise ValueError(f"invalid raster shape: {tuple(raster.shape)}")
        if raster.dtype != torch.uint8:
            raise ValueError(f"invalid raster dtype: {raster.dtype}")
        try:
            path = self.path_for(name)
        except ValueError:
            LOGGER.exception("refusing to save wireframe under `%s`", name)
            return False
        rgba = np.ascontiguousarray(raster.cpu().numpy())
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            Image.fromarray(rgba).save(path, format="PNG")
        except OSError:
            LOGGER.exception("error while saving wireframe to %s", path)
            return False
        return True
