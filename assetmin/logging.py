"""Logging for assetmin with a per-bundle context field.

Records carry a ``bundle`` attribute naming the cache entry they concern
(``css/3f2a...css``) so the file sink can be grepped per bundle. Records
logged outside a bundle get ``-``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping, Tuple

_LOGGER_NAME = "assetmin"
_NO_BUNDLE = "-"

CONSOLE_FORMAT = "[assetmin] %(levelname)s %(message)s"
VERBOSE_CONSOLE_FORMAT = "[assetmin] %(levelname)s (%(bundle)s) %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(bundle)s] %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class BundleLogAdapter(logging.LoggerAdapter):
    """Attaches the bundle identifier to every record it emits."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("bundle", self.extra["bundle"])
        kwargs["extra"] = extra
        return msg, kwargs


def bundle_logger(name: str, bundle: str) -> BundleLogAdapter:
    """Return a logger under ``name`` whose records are tagged with ``bundle``."""
    return BundleLogAdapter(get_logger(name), {"bundle": bundle})


class _BundleFieldFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "bundle"):
            record.bundle = _NO_BUNDLE
        return True


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console and optional file handlers on the assetmin logger.

    Verbose mode drops to DEBUG and shows the bundle field on the console; the
    file sink always includes it.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    bundle_field = _BundleFieldFilter()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.addFilter(bundle_field)
    stream_handler.setFormatter(
        logging.Formatter(VERBOSE_CONSOLE_FORMAT if verbose else CONSOLE_FORMAT)
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.addFilter(bundle_field)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["BundleLogAdapter", "bundle_logger", "configure_logging", "get_logger"]
