"""Minimal CSS declaration parsing used around sprite directives."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from sprite_css.data import CssProperty
from sprite_css.diagnostics import MessageLog, MessageType

COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)
URL_RE = re.compile(r"""^url\(\s*(['"]?)([^'"()]+?)\1\s*\)$""", re.IGNORECASE)
COLOR_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
PX_RE = re.compile(r"^(-?\d+)(px)?$", re.IGNORECASE)


def extract_properties(text: str) -> List[CssProperty]:
    """Return the `name: value` declarations found in a fragment of CSS.

    Comments, selectors and braces surrounding the declarations are dropped.
    """

    body = COMMENT_RE.sub("", text)
    if "{" in body:
        body = body.rsplit("{", 1)[1]
    if "}" in body:
        body = body.split("}", 1)[0]

    properties: List[CssProperty] = []
    for chunk in body.split(";"):
        name, colon, value = chunk.partition(":")
        name = name.strip().lower()
        if not colon or not name:
            continue
        value = value.strip()
        important = bool(IMPORTANT_RE.search(value))
        if important:
            value = IMPORTANT_RE.sub("", value)
        properties.append(CssProperty(name=name, value=value, important=important))
    return properties


def unpack_url(
    value: str,
    log: MessageLog,
    css_file: Optional[str] = None,
    line: Optional[int] = None,
) -> Optional[str]:
    """Unpack the address from a `url(...)` value, warning if it is malformed."""

    match = URL_RE.match(value.strip())
    if not match:
        log.warning(MessageType.MALFORMED_URL, value, css_file=css_file, line=line)
        return None
    return match.group(2).strip()


def parse_color(value: str) -> Optional[Tuple[int, int, int]]:
    """Parse `#rgb` or `#rrggbb`."""

    match = COLOR_RE.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def parse_px(value: str) -> Optional[int]:
    """Parse an integer pixel value such as `4` or `4px`."""

    match = PX_RE.match(value.strip())
    if not match:
        return None
    return int(match.group(1))
