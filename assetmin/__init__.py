"""Combine, minify, cache, and serve CSS and JavaScript bundles."""

from .errors import AssetError, CacheIOError, SourceReadError, TransformError
from .models import AssetRequest, AssetResponse, MediaKind
from .server import AssetServer, CacheStatus

__all__ = [
    "AssetError",
    "AssetRequest",
    "AssetResponse",
    "AssetServer",
    "CacheIOError",
    "CacheStatus",
    "MediaKind",
    "SourceReadError",
    "TransformError",
]
