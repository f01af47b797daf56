"""Helper utilities for writing source assets with controlled timestamps."""

from __future__ import annotations

import os
import textwrap
from pathlib import Path
from typing import Optional

BASE_TIME = 1_700_000_000.0


class AssetBuilder:
    """Writes stylesheets and scripts below a throwaway asset root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "static"
        self.root.mkdir()

    def write(self, relative: str, content: str | bytes, *, mtime: Optional[float] = BASE_TIME) -> str:
        """Write ``content`` and return the absolute path as a string."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        if mtime is not None:
            touch(path, mtime)
        return str(path)


def touch(path: Path | str, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


__all__ = ["AssetBuilder", "BASE_TIME", "touch"]
