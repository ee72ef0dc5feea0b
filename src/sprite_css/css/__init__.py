"""CSS syntax helpers."""

from sprite_css.css.syntax import extract_properties, parse_color, parse_px, unpack_url

__all__ = ["extract_properties", "parse_color", "parse_px", "unpack_url"]
