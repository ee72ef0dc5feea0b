"""Stylesheet rewriting."""

from sprite_css.rewriter.css import output_css_path, output_path, rewrite_css, sprite_url_for

__all__ = ["output_css_path", "output_path", "rewrite_css", "sprite_url_for"]
