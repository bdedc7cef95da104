from __future__ import annotations

from abc import ABC, abstractmethod

import torch


class StorageSink(ABC):
    @abstractmethod
    def save(self, raster: torch.Tensor, name: str) -> bool:
        """Persist an (h, w, 4) uint8 raster; returns False when the write failed."""
        raise NotImplementedError
