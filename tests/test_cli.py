"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from assetmin.cli import _build_parser, main
from assetmin.keys import generate_cache_key
from assetmin.models import MediaKind
from assetmin.stores import FileCache
from tests._fixtures.asset_builder import AssetBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["build", "site", "--verbose"])
    assert args.verbose is True
    assert args.bundles == ["site"]


def test_cli_parses_key_kind() -> None:
    parser = _build_parser()
    args = parser.parse_args(["key", "--kind", "script", "a.js", "b.js"])
    assert args.kind is MediaKind.SCRIPT
    assert args.files == ["a.js", "b.js"]


def test_cli_rejects_unknown_kind() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["key", "--kind", "less", "a.less"])


def test_key_command_matches_server_key(
    tmp_path: Path, assets: AssetBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    _write_config(tmp_path)
    source = assets.write("a.css", "a{}")

    main(["key", "--config", str(tmp_path), "--kind", "css", "a.css"])
    printed = capsys.readouterr().out.strip()
    main(["build", "--config", str(tmp_path)])
    capsys.readouterr()

    assert printed == generate_cache_key([str(Path(source).resolve())], MediaKind.STYLE)
    assert FileCache(tmp_path / "cache").exists(MediaKind.STYLE, printed)


def _write_config(tmp_path: Path) -> None:
    (tmp_path / ".assetmin.yml").write_text(
        """
assets_root: static
cache:
  dir: cache
bundles:
  site:
    kind: css
    files: [a.css]
""",
        encoding="utf-8",
    )


def test_build_then_clear(
    tmp_path: Path, assets: AssetBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    assets.write("a.css", "a { color: #ffffff; }")
    _write_config(tmp_path)

    main(["build", "--config", str(tmp_path)])
    first = capsys.readouterr().out
    main(["build", "site", "--config", str(tmp_path)])
    second = capsys.readouterr().out
    main(["clear", "--config", str(tmp_path)])
    cleared = capsys.readouterr().out

    assert "site (css): regenerated" in first
    assert "site (css): up to date" in second
    assert "Removed 1 cached bundle(s)" in cleared


def test_build_unknown_bundle_exits(tmp_path: Path, assets: AssetBuilder) -> None:
    _write_config(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["build", "nope", "--config", str(tmp_path)])
    assert excinfo.value.code == 1


def test_build_missing_source_exits(tmp_path: Path, assets: AssetBuilder) -> None:
    _write_config(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["build", "--config", str(tmp_path)])
    assert excinfo.value.code == 1
