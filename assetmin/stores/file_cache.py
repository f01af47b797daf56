"""Persistent blob cache for combined bundles."""

from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from ..errors import CacheIOError
from ..models import MediaKind


class FileCache:
    """Stores one file per ``(kind, key)`` below ``root``.

    Writes go to a temporary file in the destination directory and are moved
    into place with :func:`os.replace`, so concurrent readers observe either
    the previous blob or the complete new one. The entry's mtime doubles as
    its generation time.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def get_filename(self, kind: MediaKind, key: str) -> Path:
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()
        return self.root / kind.extension / f"{digest}.{kind.extension}"

    def exists(self, kind: MediaKind, key: str) -> bool:
        return self.get_filename(kind, key).is_file()

    def mtime(self, kind: MediaKind, key: str) -> Optional[float]:
        """Return the entry's generation time, or ``None`` when absent."""
        try:
            return self.get_filename(kind, key).stat().st_mtime
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CacheIOError(kind, key, str(exc)) from exc

    def mtime_ns(self, kind: MediaKind, key: str) -> Optional[int]:
        """Return the generation time in nanoseconds, or ``None`` when absent."""
        try:
            return self.get_filename(kind, key).stat().st_mtime_ns
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CacheIOError(kind, key, str(exc)) from exc

    def get(self, kind: MediaKind, key: str) -> bytes:
        try:
            return self.get_filename(kind, key).read_bytes()
        except OSError as exc:
            raise CacheIOError(kind, key, str(exc)) from exc

    def store(self, kind: MediaKind, key: str, data: bytes) -> None:
        target = self.get_filename(kind, key)
        tmp_name: Optional[str] = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb", dir=target.parent, prefix=".tmp-", delete=False
            ) as handle:
                tmp_name = handle.name
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise CacheIOError(kind, key, str(exc)) from exc

    def clear(self, kinds: Optional[Iterable[MediaKind]] = None) -> int:
        """Delete cached blobs and return how many were removed."""
        removed = 0
        for kind in kinds or tuple(MediaKind):
            directory = self.root / kind.extension
            if not directory.is_dir():
                continue
            for entry in directory.glob(f"*.{kind.extension}"):
                entry.unlink(missing_ok=True)
                removed += 1
        return removed


__all__ = ["FileCache"]
