"""Configuration loading for assetmin (.assetmin.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .keys import KEY_STRATEGIES
from .models import MediaKind

CONFIG_FILENAME = ".assetmin.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class BundleConfig:
    """A named, ordered list of source files of one media kind."""

    name: str
    kind: MediaKind
    files: List[str] = field(default_factory=list)


@dataclass
class CacheConfig:
    """Where generated bundles live and how their keys are derived."""

    directory: Path
    key_strategy: str = "joined"


@dataclass
class ServeConfig:
    """HTTP delivery settings."""

    gzip: bool = True
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class AssetConfig:
    """Represents the settings defined in .assetmin.yml."""

    root: Path
    assets_root: Path
    cache: CacheConfig
    serve: ServeConfig = field(default_factory=ServeConfig)
    bundles: Dict[str, BundleConfig] = field(default_factory=dict)
    log_file: Optional[Path] = None

    def resolve_paths(self, files: Sequence[str]) -> List[str]:
        """Return ``files`` as absolute paths, relative ones taken from ``assets_root``."""
        return [str((self.assets_root / file).resolve()) for file in files]

    def bundle_paths(self, name: str) -> List[str]:
        return self.resolve_paths(self.bundles[name].files)


def default_config(root: Path) -> AssetConfig:
    return AssetConfig(
        root=root,
        assets_root=root,
        cache=CacheConfig(directory=root / ".assetmin-cache"),
    )


def load_config(config_path: Path) -> AssetConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return default_config(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = default_config(root)

    assets_root = _as_str(data.get("assets_root"))
    if assets_root:
        config.assets_root = (root / assets_root).resolve()

    cache_data = _as_dict(data.get("cache"))
    if cache_data:
        directory = _as_str(cache_data.get("dir"))
        if directory:
            config.cache.directory = (root / directory).resolve()
        strategy = _as_str(cache_data.get("key_strategy"))
        if strategy:
            if strategy not in KEY_STRATEGIES:
                raise ConfigError(
                    f"cache.key_strategy must be one of {sorted(KEY_STRATEGIES)}, got {strategy!r}"
                )
            config.cache.key_strategy = strategy

    serve_data = _as_dict(data.get("serve"))
    if serve_data:
        gzip_flag = _as_bool(serve_data.get("gzip"))
        if gzip_flag is not None:
            config.serve.gzip = gzip_flag
        host = _as_str(serve_data.get("host"))
        if host:
            config.serve.host = host
        port = _as_int(serve_data.get("port"))
        if port is not None:
            config.serve.port = port

    log_file = _as_str(data.get("log_file"))
    if log_file:
        config.log_file = (root / log_file).resolve()

    config.bundles = _parse_bundles(data.get("bundles"))
    return config


def _parse_bundles(value: Any) -> Dict[str, BundleConfig]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("bundles must be a mapping of bundle name to settings")
    bundles: Dict[str, BundleConfig] = {}
    for name, raw in value.items():
        settings = _as_dict(raw)
        kind_value = _as_str(settings.get("kind"))
        if not kind_value:
            raise ConfigError(f"Bundle {name!r} is missing a kind (css or js)")
        try:
            kind = MediaKind.parse(kind_value)
        except ValueError as exc:
            raise ConfigError(f"Bundle {name!r}: {exc}") from exc
        files = _as_str_list(settings.get("files"))
        if not files:
            raise ConfigError(f"Bundle {name!r} must list at least one file")
        bundles[str(name)] = BundleConfig(name=str(name), kind=kind, files=files)
    return bundles


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on", "1"}:
            return True
        if lowered in {"false", "no", "off", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "AssetConfig",
    "BundleConfig",
    "CacheConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "ServeConfig",
    "default_config",
    "load_config",
]
