"""Web UI."""

from sprite_css.ui.app import BuildWorker, create_app

__all__ = ["BuildWorker", "create_app"]
