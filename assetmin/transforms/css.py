"""Lightweight stylesheet minification."""

from __future__ import annotations

import re

# Collapse #aabbcc to #abc unless the colour sits right after "=" (attribute-like
# contexts such as IE filters).
_HEX_COLOR_PATTERN = re.compile(
    r"([^=])#([a-f\d])\2([a-f\d])\3([a-f\d])\4([\s;}])", re.IGNORECASE | re.ASCII
)
_ZERO_PX_PATTERN = re.compile(r"([^0-9])0px", re.ASCII)
_COMMENT_PATTERN = re.compile(r"/\*.*?\*/")


def minify_css(css: str) -> str:
    """Return ``css`` with short hex colours, unitless zeros and no comments."""
    css = _HEX_COLOR_PATTERN.sub(r"\1#\2\3\4\5", css)
    css = _ZERO_PX_PATTERN.sub(r"\g<1>0", css)
    css = _COMMENT_PATTERN.sub("", css)
    return css.strip()


__all__ = ["minify_css"]
