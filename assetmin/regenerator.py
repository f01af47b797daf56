"""Rebuild combined bundles from their source files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Protocol, Sequence

from .errors import SourceReadError
from .keys import KeyStrategy, generate_cache_key
from .logging import get_logger
from .models import MediaKind
from .stores import FileCache
from .transforms import TransformRegistry

UTF8_BOM = b"\xef\xbb\xbf"
SOURCE_ERRORS = "surrogateescape"


def strip_bom(data: bytes) -> bytes:
    """Drop a leading UTF-8 byte-order mark; repeated calls are no-ops."""
    return data[len(UTF8_BOM):] if data.startswith(UTF8_BOM) else data


def read_source(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc


def decode_source(data: bytes) -> str:
    """Decode as UTF-8; other bytes survive as surrogates and re-encode unchanged."""
    return data.decode("utf-8", SOURCE_ERRORS)


class BundleStrategy(Protocol):
    def combine(self, files: Sequence[str], transforms: TransformRegistry) -> str:
        ...


class ScriptBundle:
    """Minify each script on its own, then join the segments.

    Each segment is preceded by a comment naming its source file. Minifying
    per file keeps statements from neighbouring files apart and ties any
    transform failure to the file that caused it.
    """

    kind = MediaKind.SCRIPT

    def combine(self, files: Sequence[str], transforms: TransformRegistry) -> str:
        segments = []
        for path in files:
            script = decode_source(strip_bom(read_source(path)))
            minified = transforms.apply(self.kind, script, source=path)
            segments.append(f"\n\n/*{path}*/\n{minified}")
        return "".join(segments)


class StyleBundle:
    """Concatenate raw stylesheets and minify the result in a single pass."""

    kind = MediaKind.STYLE

    def combine(self, files: Sequence[str], transforms: TransformRegistry) -> str:
        combined = "".join(decode_source(read_source(path)) for path in files)
        return transforms.apply(self.kind, combined)


_STRATEGIES: Dict[MediaKind, BundleStrategy] = {
    MediaKind.SCRIPT: ScriptBundle(),
    MediaKind.STYLE: StyleBundle(),
}


class Regenerator:
    """Combines sources for a kind and overwrites the matching cache entry."""

    def __init__(
        self,
        cache: FileCache,
        transforms: TransformRegistry | None = None,
        *,
        key_strategy: KeyStrategy = generate_cache_key,
    ) -> None:
        self.cache = cache
        self.transforms = transforms or TransformRegistry.default()
        self.key_strategy = key_strategy
        self.logger = get_logger("regenerator")

    def regenerate(
        self, files: Sequence[str], kind: MediaKind, *, key: Optional[str] = None
    ) -> bytes:
        """Build the bundle, store it, and return the stored bytes."""
        cache_key = key if key is not None else self.key_strategy(files, kind)
        combined = _STRATEGIES[kind].combine(files, self.transforms)
        output = combined.encode("utf-8", SOURCE_ERRORS)
        self.cache.store(kind, cache_key, output)
        self.logger.debug(
            "Stored %s bundle of %d files (%d bytes)", kind.extension, len(files), len(output)
        )
        return output


__all__ = [
    "BundleStrategy",
    "Regenerator",
    "SOURCE_ERRORS",
    "ScriptBundle",
    "StyleBundle",
    "UTF8_BOM",
    "decode_source",
    "read_source",
    "strip_bom",
]
