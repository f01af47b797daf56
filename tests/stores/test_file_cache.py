"""Tests for the bundle file cache."""

from __future__ import annotations

from pathlib import Path

import pytest

from assetmin.errors import CacheIOError
from assetmin.models import MediaKind
from assetmin.stores import FileCache


def test_store_then_get(file_cache: FileCache) -> None:
    file_cache.store(MediaKind.STYLE, "a.css.css", b"a{}")

    assert file_cache.exists(MediaKind.STYLE, "a.css.css")
    assert file_cache.get(MediaKind.STYLE, "a.css.css") == b"a{}"
    assert file_cache.mtime(MediaKind.STYLE, "a.css.css") is not None
    assert file_cache.mtime_ns(MediaKind.STYLE, "a.css.css") is not None


def test_filename_is_partitioned_by_kind(file_cache: FileCache) -> None:
    style = file_cache.get_filename(MediaKind.STYLE, "key")
    script = file_cache.get_filename(MediaKind.SCRIPT, "key")

    assert style != script
    assert style.parent.name == "css" and style.suffix == ".css"
    assert script.parent.name == "js" and script.suffix == ".js"


def test_missing_entry_has_no_mtime(file_cache: FileCache) -> None:
    assert file_cache.mtime(MediaKind.SCRIPT, "absent") is None
    assert file_cache.mtime_ns(MediaKind.SCRIPT, "absent") is None
    assert file_cache.exists(MediaKind.SCRIPT, "absent") is False


def test_get_missing_entry_raises(file_cache: FileCache) -> None:
    with pytest.raises(CacheIOError) as excinfo:
        file_cache.get(MediaKind.SCRIPT, "absent")
    assert excinfo.value.key == "absent"


def test_store_overwrites_without_leaving_temp_files(file_cache: FileCache) -> None:
    file_cache.store(MediaKind.SCRIPT, "k", b"first")
    file_cache.store(MediaKind.SCRIPT, "k", b"second")

    target = file_cache.get_filename(MediaKind.SCRIPT, "k")
    assert file_cache.get(MediaKind.SCRIPT, "k") == b"second"
    assert [entry.name for entry in target.parent.iterdir()] == [target.name]


def test_store_failure_raises_cache_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    cache = FileCache(blocker)

    with pytest.raises(CacheIOError):
        cache.store(MediaKind.STYLE, "k", b"a{}")


def test_clear_removes_entries_per_kind(file_cache: FileCache) -> None:
    file_cache.store(MediaKind.STYLE, "one", b"a{}")
    file_cache.store(MediaKind.SCRIPT, "two", b"x()")

    assert file_cache.clear([MediaKind.STYLE]) == 1
    assert not file_cache.exists(MediaKind.STYLE, "one")
    assert file_cache.exists(MediaKind.SCRIPT, "two")
    assert file_cache.clear() == 1
