"""Tests for assetmin.staleness."""

from __future__ import annotations

import pytest

from assetmin.errors import SourceReadError
from assetmin.staleness import needs_regeneration
from tests._fixtures.asset_builder import AssetBuilder, BASE_TIME

NOW = BASE_TIME + 1_000


def test_missing_cache_entry_always_regenerates(assets: AssetBuilder) -> None:
    old = assets.write("old.css", "a{}", mtime=BASE_TIME - 500)
    future = assets.write("future.css", "b{}", mtime=NOW + 500)

    assert needs_regeneration(None, [old], now=NOW) is True
    assert needs_regeneration(None, [future], now=NOW) is True


def test_sources_not_newer_than_cache_are_fresh(assets: AssetBuilder) -> None:
    first = assets.write("a.css", "a{}", mtime=BASE_TIME - 10)
    second = assets.write("b.css", "b{}", mtime=BASE_TIME)

    assert needs_regeneration(BASE_TIME, [first, second], now=NOW) is False


def test_newer_source_triggers_regeneration(assets: AssetBuilder) -> None:
    first = assets.write("a.css", "a{}", mtime=BASE_TIME - 10)
    second = assets.write("b.css", "b{}", mtime=BASE_TIME + 5)

    assert needs_regeneration(BASE_TIME, [first, second], now=NOW) is True


def test_future_timestamp_does_not_trigger_regeneration(assets: AssetBuilder) -> None:
    skewed = assets.write("skewed.js", "x()", mtime=NOW + 60)

    assert needs_regeneration(BASE_TIME, [skewed], now=NOW) is False


def test_source_modified_exactly_now_counts(assets: AssetBuilder) -> None:
    edited = assets.write("edited.js", "x()", mtime=NOW)

    assert needs_regeneration(BASE_TIME, [edited], now=NOW) is True


def test_missing_source_raises(assets: AssetBuilder) -> None:
    missing = str(assets.root / "missing.css")

    with pytest.raises(SourceReadError) as excinfo:
        needs_regeneration(BASE_TIME, [missing], now=NOW)
    assert excinfo.value.path == missing
