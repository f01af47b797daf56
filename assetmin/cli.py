"""CLI entrypoints for assetmin commands."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

from .config import AssetConfig, ConfigError, load_config
from .errors import AssetError
from .keys import resolve_key_strategy
from .logging import configure_logging
from .models import MediaKind
from .server import AssetServer


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        default=".",
        help="Path to .assetmin.yml or the directory holding it (defaults to current directory).",
    )


def _kind(value: str) -> MediaKind:
    try:
        return MediaKind.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetmin",
        description="Combine, minify, cache, and serve CSS and JavaScript bundles.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service for configured and ad-hoc bundles.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Interface to bind (overrides config).")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to bind (overrides config).")

    build_parser = subparsers.add_parser(
        "build",
        help="Warm the cache for configured bundles.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_config_option(build_parser)
    build_parser.add_argument(
        "bundles",
        nargs="*",
        help="Bundle names to build (defaults to every configured bundle).",
    )

    key_parser = subparsers.add_parser(
        "key",
        help="Print the cache key for an ordered list of files.",
    )
    _add_verbose_option(key_parser, suppress_default=True)
    _add_config_option(key_parser)
    key_parser.add_argument("--kind", type=_kind, required=True, help="css or js.")
    key_parser.add_argument("files", nargs="+", help="Source files in bundle order.")

    clear_parser = subparsers.add_parser(
        "clear",
        help="Delete cached bundles.",
    )
    _add_verbose_option(clear_parser, suppress_default=True)
    _add_config_option(clear_parser)
    clear_parser.add_argument(
        "--kind",
        type=_kind,
        default=None,
        help="Only clear css or js bundles.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for assetmin commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(verbose=bool(args.verbose), log_file=config.log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(config, host=args.host, port=args.port)
    elif args.command == "build":
        _run_build(parser, config, list(args.bundles))
    elif args.command == "key":
        strategy = resolve_key_strategy(config.cache.key_strategy)
        print(strategy(config.resolve_paths(args.files), args.kind))
    elif args.command == "clear":
        server = AssetServer.from_config(config)
        kinds = [args.kind] if args.kind is not None else None
        removed = server.cache.clear(kinds)
        print(f"Removed {removed} cached bundle(s) from {server.cache.root}")


def _run_build(parser: argparse.ArgumentParser, config: AssetConfig, names: List[str]) -> None:
    selected = names or list(config.bundles)
    if not selected:
        parser.exit(1, "No bundles configured; add a bundles section to .assetmin.yml\n")
    unknown = [name for name in selected if name not in config.bundles]
    if unknown:
        parser.exit(1, f"Unknown bundle(s): {', '.join(unknown)}\n")

    server = AssetServer.from_config(config)
    for name in selected:
        bundle = config.bundles[name]
        try:
            status = server.ensure_cached(config.bundle_paths(name), bundle.kind)
        except AssetError as exc:
            parser.exit(1, f"assetmin build failed for {name}: {exc}\n")
        state = "regenerated" if status.regenerated else "up to date"
        print(f"{name} ({bundle.kind.extension}): {state} -> {_relativize(status.filename)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":  # pragma: no cover
    main()
