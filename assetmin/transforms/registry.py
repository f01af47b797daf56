"""Lookup table of text transforms per media kind."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional

from ..errors import TransformError
from ..models import MediaKind
from .css import minify_css
from .js import minify_js

Transform = Callable[[str], str]


class TransformRegistry:
    """Maps each :class:`MediaKind` to a pure ``str -> str`` transform."""

    def __init__(self, transforms: Optional[Mapping[MediaKind, Transform]] = None) -> None:
        self._transforms: Dict[MediaKind, Transform] = dict(transforms or {})

    @classmethod
    def default(cls) -> "TransformRegistry":
        return cls({MediaKind.STYLE: minify_css, MediaKind.SCRIPT: minify_js})

    def register(self, kind: MediaKind, transform: Transform) -> None:
        self._transforms[kind] = transform

    def get(self, kind: MediaKind) -> Transform:
        try:
            return self._transforms[kind]
        except KeyError:
            raise LookupError(f"No transform registered for {kind.extension}") from None

    def apply(self, kind: MediaKind, text: str, *, source: Optional[str] = None) -> str:
        """Run the transform for ``kind``; failures never fall back to ``text``."""
        transform = self.get(kind)
        try:
            result = transform(text)
        except Exception as exc:
            raise TransformError(kind, source, str(exc) or type(exc).__name__) from exc
        if not isinstance(result, str):
            raise TransformError(
                kind, source, f"transform returned {type(result).__name__}, expected str"
            )
        return result


__all__ = ["Transform", "TransformRegistry"]
