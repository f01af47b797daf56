"""Storage backends for generated bundles."""

from .file_cache import FileCache

__all__ = ["FileCache"]
