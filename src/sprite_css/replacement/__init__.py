"""Stylesheet replacement values."""

from sprite_css.replacement.builder import build_replacement, build_replacements

__all__ = ["build_replacement", "build_replacements"]
