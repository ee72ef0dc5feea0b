"""Tests for CSS syntax helpers."""

from sprite_css.css import extract_properties, parse_color, parse_px, unpack_url
from sprite_css.diagnostics import MessageType


def test_extract_properties_splits_declarations():
    props = extract_properties("color: red; Background-Image: url(a.png)")

    assert [(p.name, p.value) for p in props] == [
        ("color", "red"),
        ("background-image", "url(a.png)"),
    ]


def test_extract_properties_detects_important():
    (prop,) = extract_properties("background-image: url(a.png) !important;")

    assert prop.important
    assert prop.value == "url(a.png)"


def test_extract_properties_ignores_selector_braces_and_comments():
    props = extract_properties(".logo { background-image: url(a.png); /* note */ }")

    assert len(props) == 1
    assert props[0].name == "background-image"


def test_extract_properties_empty_for_selector_only_line():
    assert extract_properties(".logo {") == []
    assert extract_properties("}") == []
    assert extract_properties("") == []


def test_extract_properties_keeps_colons_in_value():
    (prop,) = extract_properties("sprite-image: url(http://example.com/a.png)")

    assert prop.value == "url(http://example.com/a.png)"


def test_unpack_url_variants(log):
    assert unpack_url("url(img/a.png)", log) == "img/a.png"
    assert unpack_url("url('img/a.png')", log) == "img/a.png"
    assert unpack_url('url( "img/a.png" )', log) == "img/a.png"
    assert log.messages == []


def test_unpack_url_malformed_warns(log):
    assert unpack_url("img/a.png", log, css_file="a.css", line=3) is None

    (message,) = log.messages
    assert message.type is MessageType.MALFORMED_URL
    assert (message.css_file, message.line) == ("a.css", 3)


def test_parse_color():
    assert parse_color("#fff") == (255, 255, 255)
    assert parse_color("#102030") == (16, 32, 48)
    assert parse_color("red") is None


def test_parse_px():
    assert parse_px("4") == 4
    assert parse_px("4px") == 4
    assert parse_px("-2px") == -2
    assert parse_px("1.5px") is None
