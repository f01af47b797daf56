"""Minification transforms keyed by media kind."""

from .css import minify_css
from .js import minify_js
from .registry import Transform, TransformRegistry

__all__ = ["Transform", "TransformRegistry", "minify_css", "minify_js"]
