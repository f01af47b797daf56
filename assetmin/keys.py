"""Cache key derivation for ordered asset requests."""

from __future__ import annotations

import hashlib
from typing import Callable, Dict, Sequence

from .models import MediaKind

KEY_DELIMITER = ","

KeyStrategy = Callable[[Sequence[str], MediaKind], str]


def generate_cache_key(files: Sequence[str], kind: MediaKind) -> str:
    """Join the file identifiers and append the kind's extension.

    Reordering the same files yields a different key because the combined
    output depends on input order. Paths that themselves contain the delimiter
    can collide (``["a,b"]`` vs ``["a", "b"]``); use :func:`hashed_cache_key`
    where such paths are possible.
    """
    return KEY_DELIMITER.join(files) + "." + kind.extension


def hashed_cache_key(files: Sequence[str], kind: MediaKind) -> str:
    """Return a SHA-256 key over a length-prefixed encoding of the file list."""
    digest = hashlib.sha256()
    digest.update(kind.extension.encode("ascii"))
    digest.update(len(files).to_bytes(4, "big"))
    for file in files:
        encoded = file.encode("utf-8")
        digest.update(len(encoded).to_bytes(4, "big"))
        digest.update(encoded)
    return f"{digest.hexdigest()}.{kind.extension}"


KEY_STRATEGIES: Dict[str, KeyStrategy] = {
    "joined": generate_cache_key,
    "hashed": hashed_cache_key,
}


def resolve_key_strategy(name: str) -> KeyStrategy:
    try:
        return KEY_STRATEGIES[name]
    except KeyError:
        choices = ", ".join(sorted(KEY_STRATEGIES))
        raise ValueError(f"Unknown cache key strategy {name!r}; choose one of: {choices}") from None


__all__ = [
    "KEY_DELIMITER",
    "KEY_STRATEGIES",
    "KeyStrategy",
    "generate_cache_key",
    "hashed_cache_key",
    "resolve_key_strategy",
]
