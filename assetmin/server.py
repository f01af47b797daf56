"""Serve combined, minified bundles with conditional caching and gzip."""

from __future__ import annotations

import gzip
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Sequence

from .conditional import ConditionalHeaders
from .config import AssetConfig
from .errors import CacheIOError
from .keys import KeyStrategy, generate_cache_key, resolve_key_strategy
from .logging import BundleLogAdapter, bundle_logger
from .models import AssetRequest, AssetResponse, MediaKind
from .regenerator import Regenerator
from .staleness import needs_regeneration
from .stores import FileCache
from .transforms import TransformRegistry

CSS_CHARSET_PREFIX = b'@charset="utf-8";'
GZIP_LEVEL = 9


@dataclass
class CacheStatus:
    """Outcome of bringing one cache entry up to date."""

    key: str
    filename: Path
    regenerated: bool
    output: Optional[bytes] = None


class AssetServer:
    """Combines, caches, and serves CSS or JavaScript file lists."""

    def __init__(
        self,
        cache: FileCache,
        transforms: TransformRegistry | None = None,
        *,
        serve_gzip: bool = True,
        key_strategy: KeyStrategy = generate_cache_key,
        conditional: ConditionalHeaders | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.cache = cache
        self.serve_gzip = serve_gzip
        self.key_strategy = key_strategy
        self.conditional = conditional or ConditionalHeaders()
        self.regenerator = Regenerator(cache, transforms, key_strategy=key_strategy)
        self._clock = clock

    @classmethod
    def from_config(cls, config: AssetConfig) -> "AssetServer":
        """Build a server whose cache, key strategy and gzip flag follow ``config``."""
        return cls(
            FileCache(config.cache.directory),
            serve_gzip=config.serve.gzip,
            key_strategy=resolve_key_strategy(config.cache.key_strategy),
        )

    def serve_css(
        self, files: Sequence[str], request_headers: Mapping[str, str] | None = None
    ) -> AssetResponse:
        return self.serve(files, MediaKind.STYLE, request_headers)

    def serve_js(
        self, files: Sequence[str], request_headers: Mapping[str, str] | None = None
    ) -> AssetResponse:
        return self.serve(files, MediaKind.SCRIPT, request_headers)

    def ensure_cached(self, files: Sequence[str], kind: MediaKind) -> CacheStatus:
        """Regenerate the cache entry for ``files`` when it is missing or stale."""
        request = AssetRequest.of(files, kind)
        key = self.key_strategy(request.files, kind)
        filename = self.cache.get_filename(kind, key)
        cache_mtime = self.cache.mtime(kind, key)
        if not needs_regeneration(cache_mtime, request.files, now=self._clock()):
            _bundle_log(kind, filename).debug("Cache hit")
            return CacheStatus(key=key, filename=filename, regenerated=False)

        _bundle_log(kind, filename).info("Regenerating from %d files", len(request.files))
        output = self.regenerator.regenerate(request.files, kind, key=key)
        return CacheStatus(key=key, filename=filename, regenerated=True, output=output)

    def serve(
        self,
        files: Sequence[str],
        kind: MediaKind,
        request_headers: Mapping[str, str] | None = None,
    ) -> AssetResponse:
        """Run the full pipeline for one request.

        Any failure raises before response headers are produced, so callers
        never see a partial response. A 304 can follow a regeneration in the
        same request since staleness is judged on the server side only.
        """
        status = self.ensure_cached(files, kind)

        generated_ns = self.cache.mtime_ns(kind, status.key)
        if generated_ns is None:
            raise CacheIOError(kind, status.key, "entry vanished after regeneration check")

        headers: Dict[str, str] = {}
        # Last-Modified has whole-second resolution; the ETag must tell apart
        # regenerations within the same second.
        seed = f"{status.key}|{generated_ns}"
        if self.serve_gzip:
            seed += "|gzip"
        generated_at = generated_ns / 1_000_000_000
        if self.conditional.apply(headers, generated_at, request_headers or {}, etag_seed=seed):
            _bundle_log(kind, status.filename).debug("Client copy is current; sending 304")
            return AssetResponse(status=304, headers=headers)

        output = status.output
        if output is None:
            output = self.cache.get(kind, status.key)
        if kind is MediaKind.STYLE:
            output = CSS_CHARSET_PREFIX + output

        if self.serve_gzip:
            output = gzip.compress(output, compresslevel=GZIP_LEVEL, mtime=0)

        headers["Content-Length"] = str(len(output))
        headers["Content-Type"] = kind.mime_type
        if self.serve_gzip:
            headers["Content-Encoding"] = "gzip"
        headers["Vary"] = "Accept-Encoding"
        return AssetResponse(status=200, headers=headers, body=output)


def _bundle_log(kind: MediaKind, filename: Path) -> BundleLogAdapter:
    return bundle_logger("server", f"{kind.extension}/{filename.name}")


__all__ = ["AssetServer", "CacheStatus", "CSS_CHARSET_PREFIX", "GZIP_LEVEL"]
