from __future__ import annotations

from pathlib import Path

import pytest

from assetmin.stores import FileCache
from tests._fixtures.asset_builder import AssetBuilder


@pytest.fixture
def assets(tmp_path: Path) -> AssetBuilder:
    """Provide an asset builder rooted at the pytest tmp_path."""
    return AssetBuilder(tmp_path)


@pytest.fixture
def file_cache(tmp_path: Path) -> FileCache:
    return FileCache(tmp_path / "cache")
