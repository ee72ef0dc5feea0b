"""Tests for sprite directive parsing."""

import pytest

from sprite_css.data import ImageFormat, SpriteAlignment, SpriteLayout
from sprite_css.diagnostics import MessageType
from sprite_css.directives import parse_image_directive, parse_reference_directive


@pytest.fixture
def known(log):
    vertical = parse_image_directive("sprite: v; sprite-image: url(v.png)", log)
    horizontal = parse_image_directive(
        "sprite: h; sprite-image: url(h.gif); sprite-layout: horizontal", log
    )
    return {"v": vertical, "h": horizontal}


def test_image_directive_defaults(log):
    directive = parse_image_directive("sprite: main; sprite-image: url('../img/main.png')", log)

    assert directive.sprite_id == "main"
    assert directive.image_url == "../img/main.png"
    assert directive.layout is SpriteLayout.VERTICAL
    assert directive.format is ImageFormat.PNG
    assert directive.matte_color is None
    assert directive.include_dimensions is False
    assert log.messages == []


def test_image_directive_all_properties(log):
    directive = parse_image_directive(
        "sprite: s; sprite-image: url(s.jpeg); sprite-layout: Horizontal; "
        "sprite-matte-color: #f00; sprite-include-dimensions: true",
        log,
    )

    assert directive.layout is SpriteLayout.HORIZONTAL
    assert directive.format is ImageFormat.JPG
    assert directive.matte_color == (255, 0, 0)
    assert directive.include_dimensions is True


@pytest.mark.parametrize(
    "text, expected",
    [
        ("sprite-image: url(a.png)", MessageType.SPRITE_ID_NOT_FOUND),
        ("sprite: a", MessageType.SPRITE_IMAGE_URL_NOT_FOUND),
        ("sprite: a; sprite-image: url(a.bmp)", MessageType.UNSUPPORTED_FORMAT),
        ("sprite: a; sprite-image: url(a.png); sprite-layout: diagonal", MessageType.UNSUPPORTED_LAYOUT),
        ("sprite: a; sprite-image: url(a.png); sprite-matte-color: red", MessageType.MALFORMED_COLOR),
        ("sprite: a; sprite-image: a.png", MessageType.MALFORMED_URL),
    ],
)
def test_image_directive_failures_warn_once(log, text, expected):
    assert parse_image_directive(text, log, css_file="a.css", line=7) is None

    (message,) = log.messages
    assert message.type is expected
    assert message.line == 7


def test_image_directive_unknown_property_warns_but_parses(log):
    directive = parse_image_directive("sprite: a; sprite-image: url(a.png); sprite-ie6-mode: auto", log)

    assert directive is not None
    assert log.count(MessageType.UNSUPPORTED_PROPERTIES_FOUND) == 1


def test_reference_directive_defaults(log, known):
    directive = parse_reference_directive("sprite-ref: v", known, log)

    props = directive.layout_properties
    assert directive.sprite_ref == "v"
    assert props.alignment is SpriteAlignment.LEFT
    assert (props.margin_top, props.margin_right, props.margin_bottom, props.margin_left) == (0, 0, 0, 0)


def test_reference_directive_horizontal_default_alignment(log, known):
    directive = parse_reference_directive("sprite-ref: h", known, log)

    assert directive.layout_properties.alignment is SpriteAlignment.TOP


def test_reference_directive_margins(log, known):
    directive = parse_reference_directive(
        "sprite-ref: v; sprite-alignment: right; sprite-margin: 1px 2px; sprite-margin-left: 9",
        known,
        log,
    )

    props = directive.layout_properties
    assert props.alignment is SpriteAlignment.RIGHT
    assert (props.margin_top, props.margin_right, props.margin_bottom, props.margin_left) == (1, 2, 1, 9)


def test_reference_directive_margin_shorthand_three_values(log, known):
    directive = parse_reference_directive("sprite-ref: v; sprite-margin: 1 2 3", known, log)

    props = directive.layout_properties
    assert (props.margin_top, props.margin_right, props.margin_bottom, props.margin_left) == (1, 2, 3, 2)


def test_reference_directive_unknown_sprite(log, known):
    assert parse_reference_directive("sprite-ref: nope", known, log) is None
    assert log.count(MessageType.REFERENCED_SPRITE_NOT_FOUND) == 1


@pytest.mark.parametrize(
    "text, expected",
    [
        ("sprite-alignment: left", MessageType.SPRITE_REF_NOT_FOUND),
        ("sprite-ref: v; sprite-alignment: middle", MessageType.UNSUPPORTED_ALIGNMENT),
        ("sprite-ref: v; sprite-margin-top: -1px", MessageType.MALFORMED_MARGIN),
        ("sprite-ref: v; sprite-margin: 1 2 3 4 5", MessageType.MALFORMED_MARGIN),
        ("sprite-ref: v; sprite-margin-left: wide", MessageType.MALFORMED_MARGIN),
    ],
)
def test_reference_directive_failures_warn_once(log, known, text, expected):
    assert parse_reference_directive(text, known, log) is None

    (message,) = log.messages
    assert message.type is expected


def test_reference_alignment_not_allowed_falls_back(log, known):
    directive = parse_reference_directive("sprite-ref: h; sprite-alignment: left", known, log)

    assert directive.layout_properties.alignment is SpriteAlignment.TOP
    assert log.count(MessageType.ALIGNMENT_NOT_ALLOWED_FOR_LAYOUT) == 1
