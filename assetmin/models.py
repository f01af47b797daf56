"""Core data models shared across assetmin components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Sequence, Tuple


class MediaKind(str, Enum):
    """Asset category; selects the MIME type and the transform strategy."""

    STYLE = "css"
    SCRIPT = "js"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @classmethod
    def parse(cls, value: str) -> "MediaKind":
        """Accept ``css``/``js`` or the long ``style``/``script`` names."""
        lowered = value.strip().lower()
        if lowered in _ALIASES:
            return _ALIASES[lowered]
        raise ValueError(f"Unknown media kind: {value!r} (expected css or js)")


_MIME_TYPES = {
    MediaKind.STYLE: "text/css",
    MediaKind.SCRIPT: "application/javascript",
}

_ALIASES = {
    "css": MediaKind.STYLE,
    "style": MediaKind.STYLE,
    "js": MediaKind.SCRIPT,
    "script": MediaKind.SCRIPT,
}


@dataclass(frozen=True)
class AssetRequest:
    """Ordered list of source files to combine; order and duplicates matter."""

    files: Tuple[str, ...]
    kind: MediaKind

    def __post_init__(self) -> None:
        if not self.files:
            raise ValueError("An asset request needs at least one source file")

    @classmethod
    def of(cls, files: Sequence[str], kind: MediaKind) -> "AssetRequest":
        return cls(files=tuple(str(file) for file in files), kind=kind)


@dataclass
class AssetResponse:
    """Framework-neutral HTTP response produced by the asset server."""

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def not_modified(self) -> bool:
        return self.status == 304


__all__ = ["AssetRequest", "AssetResponse", "MediaKind"]
