"""Configuration loading."""

from sprite_css.config.schema import Config, config_from_dict, load_config

__all__ = [
    "Config",
    "config_from_dict",
    "load_config",
]
