from .base import StorageSink
from .png_storage import PngStorageSink, safe_name

__all__ = ["PngStorageSink", "StorageSink", "safe_name"]
