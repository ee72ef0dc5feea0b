"""Sprite layout."""

from sprite_css.layout.engine import compute_layout

__all__ = ["compute_layout"]
