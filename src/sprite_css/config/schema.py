"""Configuration schema and loading utilities."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from sprite_css.diagnostics import MessageLevel


@dataclass(frozen=True)
class Config:
    """Top-level configuration for a sprite build."""

    root_dir: Optional[Path] = None
    css_files: List[Path] = field(default_factory=list)
    output_dir: Optional[Path] = None
    document_root_dir: Optional[Path] = None
    css_file_suffix: str = "-sprite"
    css_file_encoding: str = "utf-8"
    log_level: MessageLevel = MessageLevel.INFO
    message_output: Optional[Path] = None
    png_optimize: bool = False

    def validate(self) -> None:
        """Raise ValueError for configurations that cannot run."""

        if self.root_dir is None and not self.css_files:
            raise ValueError("A root directory or stylesheet files must be provided.")
        if self.root_dir is not None and not self.root_dir.is_dir():
            raise ValueError(f"Root directory does not exist: {self.root_dir}")
        if self.output_dir is not None and self.root_dir is None:
            raise ValueError("An output directory requires a root directory.")
        if self.output_dir is None and not self.css_file_suffix:
            raise ValueError("Rewritten stylesheets would overwrite sources: set a suffix or output directory.")


_DEFAULTS: Dict[str, Any] = {
    "root_dir": None,
    "css_files": [],
    "output_dir": None,
    "document_root_dir": None,
    "css_file_suffix": "-sprite",
    "css_file_encoding": "utf-8",
    "log_level": "INFO",
    "message_output": None,
    "png_optimize": False,
}


def _merge_dict(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into base without mutating either input."""

    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_dict(merged[key], value)
        else:
            merged[key] = value
    return merged


def _optional_path(value: Any) -> Optional[Path]:
    return Path(value) if value else None


def config_from_dict(raw: Dict[str, Any]) -> Config:
    """Build a Config from plain values, filling in defaults."""

    unknown = sorted(set(raw) - set(_DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    merged = _merge_dict(_DEFAULTS, raw)
    return Config(
        root_dir=_optional_path(merged["root_dir"]),
        css_files=[Path(p) for p in merged["css_files"]],
        output_dir=_optional_path(merged["output_dir"]),
        document_root_dir=_optional_path(merged["document_root_dir"]),
        css_file_suffix=str(merged["css_file_suffix"]),
        css_file_encoding=str(merged["css_file_encoding"]),
        log_level=MessageLevel.parse(str(merged["log_level"])),
        message_output=_optional_path(merged["message_output"]),
        png_optimize=bool(merged["png_optimize"]),
    )


def load_config(path: Optional[Path], overrides: Optional[Dict[str, Any]] = None) -> Config:
    """Load configuration from JSON, then apply overrides (e.g. from the CLI).

    Overrides whose value is None are ignored.
    """

    raw: Dict[str, Any] = {}
    if path:
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError(f"Configuration file must contain a JSON object: {path}")
    if overrides:
        raw = _merge_dict(raw, {key: value for key, value in overrides.items() if value is not None})
    return config_from_dict(raw)
