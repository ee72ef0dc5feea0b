"""Sprite directive grammar."""

from sprite_css.directives.grammar import parse_image_directive, parse_reference_directive

__all__ = ["parse_image_directive", "parse_reference_directive"]
