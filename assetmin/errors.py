"""Exception types raised while building or serving asset bundles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .models import MediaKind


class AssetError(RuntimeError):
    """Base class for failures that abort a bundle request."""


class SourceReadError(AssetError):
    """Raised when a listed source file is missing or unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read source file {path}: {reason}")
        self.path = path
        self.reason = reason


class TransformError(AssetError):
    """Raised when a minifier rejects its input.

    ``source`` names the file whose content failed for per-file transforms and
    is ``None`` when the transform ran over a whole concatenated bundle.
    """

    def __init__(self, kind: "MediaKind", source: Optional[str], reason: str) -> None:
        target = source if source is not None else f"{kind.extension} bundle"
        super().__init__(f"Failed to minify {target}: {reason}")
        self.kind = kind
        self.source = source
        self.reason = reason


class CacheIOError(AssetError):
    """Raised when the blob cache cannot be read or written."""

    def __init__(self, kind: "MediaKind", key: str, reason: str) -> None:
        super().__init__(f"Cache {kind.extension} entry {key!r} unavailable: {reason}")
        self.kind = kind
        self.key = key
        self.reason = reason


__all__ = ["AssetError", "CacheIOError", "SourceReadError", "TransformError"]
