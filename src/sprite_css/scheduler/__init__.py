"""Sprite build pipeline."""

from sprite_css.scheduler.builder import BuiltSprite, build_sprite, build_sprites, resolve_css_files
from sprite_css.scheduler.control import RunControl

__all__ = ["BuiltSprite", "RunControl", "build_sprite", "build_sprites", "resolve_css_files"]
