"""Sprite compositing."""

from sprite_css.compositor.blend import composite_image, member_origins, render_sprite

__all__ = ["composite_image", "member_origins", "render_sprite"]
