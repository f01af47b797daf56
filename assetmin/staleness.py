"""Decide whether a cached bundle must be rebuilt from its sources."""

from __future__ import annotations

import os
import time
from typing import Iterable, Optional

from .errors import SourceReadError


def source_mtime(path: str) -> float:
    """Return the modification time of a source file."""
    try:
        return os.stat(path).st_mtime
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc


def needs_regeneration(
    cache_mtime: Optional[float],
    files: Iterable[str],
    *,
    now: Optional[float] = None,
) -> bool:
    """Return ``True`` when the cache entry is absent or older than a source.

    A source modified after the cache entry only counts when its timestamp is
    not in the future relative to ``now``; skewed timestamps are ignored until
    the clock catches up with them.
    """
    if cache_mtime is None:
        return True
    current = time.time() if now is None else now
    for path in files:
        mtime = source_mtime(path)
        if mtime > cache_mtime and mtime <= current:
            return True
    return False


__all__ = ["needs_regeneration", "source_mtime"]
