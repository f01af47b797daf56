"""Script minification backed by rjsmin."""

from __future__ import annotations

from rjsmin import jsmin


def minify_js(script: str) -> str:
    return jsmin(script)


__all__ = ["minify_js"]
