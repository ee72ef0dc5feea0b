"""Parsing of `sprite:` and `sprite-ref:` directive text."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from sprite_css.css import extract_properties, parse_color, parse_px, unpack_url
from sprite_css.data import (
    ImageDirective,
    ImageFormat,
    LayoutProperties,
    ReferenceDirective,
    SpriteAlignment,
    SpriteLayout,
)
from sprite_css.diagnostics import MessageLog, MessageType

IMAGE_PROPERTIES = {
    "sprite",
    "sprite-image",
    "sprite-layout",
    "sprite-matte-color",
    "sprite-include-dimensions",
}

REFERENCE_PROPERTIES = {
    "sprite-ref",
    "sprite-alignment",
    "sprite-margin",
    "sprite-margin-top",
    "sprite-margin-right",
    "sprite-margin-bottom",
    "sprite-margin-left",
}

# Alignments meaningful on the cross axis of each layout, the first is the default.
ALLOWED_ALIGNMENTS = {
    SpriteLayout.VERTICAL: (
        SpriteAlignment.LEFT,
        SpriteAlignment.RIGHT,
        SpriteAlignment.CENTER,
        SpriteAlignment.REPEAT,
    ),
    SpriteLayout.HORIZONTAL: (
        SpriteAlignment.TOP,
        SpriteAlignment.BOTTOM,
        SpriteAlignment.CENTER,
        SpriteAlignment.REPEAT,
    ),
}

_BOOLEANS = {"true": True, "yes": True, "false": False, "no": False}


def _properties(text: str) -> Dict[str, str]:
    """First value wins for repeated keys."""

    values: Dict[str, str] = {}
    for prop in extract_properties(text):
        values.setdefault(prop.name, prop.value)
    return values


def _warn_unsupported(
    values: Mapping[str, str],
    supported: set[str],
    log: MessageLog,
    css_file: Optional[str],
    line: Optional[int],
) -> None:
    unsupported = [name for name in values if name not in supported]
    if unsupported:
        log.warning(
            MessageType.UNSUPPORTED_PROPERTIES_FOUND,
            ", ".join(unsupported),
            css_file=css_file,
            line=line,
        )


def parse_image_directive(
    text: str,
    log: MessageLog,
    css_file: Optional[str] = None,
    line: Optional[int] = None,
) -> Optional[ImageDirective]:
    """Parse the text of a `sprite:` directive, or return None with a warning."""

    values = _properties(text)
    where = {"css_file": css_file, "line": line}

    sprite_id = values.get("sprite", "")
    if not sprite_id:
        log.warning(MessageType.SPRITE_ID_NOT_FOUND, text, **where)
        return None

    if "sprite-image" not in values:
        log.warning(MessageType.SPRITE_IMAGE_URL_NOT_FOUND, text, **where)
        return None
    image_url = unpack_url(values["sprite-image"], log, **where)
    if image_url is None:
        return None

    image_format = ImageFormat.from_path(image_url)
    if image_format is None:
        log.warning(MessageType.UNSUPPORTED_FORMAT, image_url, **where)
        return None

    layout_name = values.get("sprite-layout", SpriteLayout.VERTICAL.value).lower()
    try:
        layout = SpriteLayout(layout_name)
    except ValueError:
        log.warning(MessageType.UNSUPPORTED_LAYOUT, layout_name, **where)
        return None

    matte_color = None
    if "sprite-matte-color" in values:
        matte_color = parse_color(values["sprite-matte-color"])
        if matte_color is None:
            log.warning(MessageType.MALFORMED_COLOR, values["sprite-matte-color"], **where)
            return None

    include_dimensions = False
    if "sprite-include-dimensions" in values:
        raw = values["sprite-include-dimensions"].lower()
        if raw not in _BOOLEANS:
            log.warning(MessageType.MALFORMED_BOOLEAN, raw, **where)
            return None
        include_dimensions = _BOOLEANS[raw]

    _warn_unsupported(values, IMAGE_PROPERTIES, log, css_file, line)
    return ImageDirective(
        sprite_id=sprite_id,
        image_url=image_url,
        layout=layout,
        format=image_format,
        matte_color=matte_color,
        include_dimensions=include_dimensions,
    )


def _parse_margin(value: str) -> Optional[int]:
    margin = parse_px(value)
    if margin is None or margin < 0:
        return None
    return margin


def _parse_margins(
    values: Mapping[str, str],
    log: MessageLog,
    css_file: Optional[str],
    line: Optional[int],
) -> Optional[Dict[str, int]]:
    """Resolve the shorthand and per-side margin keys into four integers."""

    margins = {"top": 0, "right": 0, "bottom": 0, "left": 0}

    if "sprite-margin" in values:
        parts = values["sprite-margin"].split()
        parsed = [_parse_margin(part) for part in parts]
        if not 1 <= len(parts) <= 4 or any(value is None for value in parsed):
            log.warning(MessageType.MALFORMED_MARGIN, values["sprite-margin"], css_file=css_file, line=line)
            return None
        # CSS shorthand: top, right, bottom, left with the usual fill-in rules
        while len(parsed) < 4:
            parsed.append(parsed[{1: 0, 2: 0, 3: 1}[len(parsed)]])
        margins = dict(zip(("top", "right", "bottom", "left"), parsed))

    for side in ("top", "right", "bottom", "left"):
        key = f"sprite-margin-{side}"
        if key not in values:
            continue
        margin = _parse_margin(values[key])
        if margin is None:
            log.warning(MessageType.MALFORMED_MARGIN, values[key], css_file=css_file, line=line)
            return None
        margins[side] = margin
    return margins


def parse_reference_directive(
    text: str,
    image_directives: Mapping[str, ImageDirective],
    log: MessageLog,
    css_file: Optional[str] = None,
    line: Optional[int] = None,
) -> Optional[ReferenceDirective]:
    """Parse the text of a `sprite-ref:` directive against known sprites."""

    values = _properties(text)
    where = {"css_file": css_file, "line": line}

    sprite_ref = values.get("sprite-ref", "")
    if not sprite_ref:
        log.warning(MessageType.SPRITE_REF_NOT_FOUND, text, **where)
        return None

    image_directive = image_directives.get(sprite_ref)
    if image_directive is None:
        log.warning(MessageType.REFERENCED_SPRITE_NOT_FOUND, sprite_ref, **where)
        return None

    allowed = ALLOWED_ALIGNMENTS[image_directive.layout]
    alignment = allowed[0]
    if "sprite-alignment" in values:
        alignment_name = values["sprite-alignment"].lower()
        try:
            alignment = SpriteAlignment(alignment_name)
        except ValueError:
            log.warning(MessageType.UNSUPPORTED_ALIGNMENT, alignment_name, **where)
            return None
        if alignment not in allowed:
            log.warning(
                MessageType.ALIGNMENT_NOT_ALLOWED_FOR_LAYOUT,
                alignment.value,
                image_directive.layout.value,
                allowed[0].value,
                **where,
            )
            alignment = allowed[0]

    margins = _parse_margins(values, log, css_file, line)
    if margins is None:
        return None

    _warn_unsupported(values, REFERENCE_PROPERTIES, log, css_file, line)
    return ReferenceDirective(
        sprite_ref=sprite_ref,
        layout_properties=LayoutProperties(
            alignment=alignment,
            margin_top=margins["top"],
            margin_right=margins["right"],
            margin_bottom=margins["bottom"],
            margin_left=margins["left"],
        ),
    )
