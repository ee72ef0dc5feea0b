"""Shared fixtures for sprite_css tests."""

from __future__ import annotations

import io
import posixpath
from pathlib import Path
from typing import Dict

import numpy as np
import pytest
from PIL import Image

from sprite_css.diagnostics import MessageLog


class MemoryResources:
    """In-memory resource handler keyed by POSIX-style paths."""

    def __init__(self, files: Dict[str, object] | None = None) -> None:
        self.files: Dict[str, object] = dict(files or {})

    def read_text(self, path: str) -> str:
        if path not in self.files:
            raise FileNotFoundError(path)
        return str(self.files[path])

    def read_bytes(self, path: str) -> bytes:
        if path not in self.files:
            raise FileNotFoundError(path)
        data = self.files[path]
        return data if isinstance(data, bytes) else str(data).encode("utf-8")

    def write_text(self, path: str, text: str) -> None:
        self.files[path] = text

    def write_bytes(self, path: str, data: bytes) -> None:
        self.files[path] = data

    def resolve(self, css_file: str, url: str) -> str:
        return posixpath.normpath(posixpath.join(posixpath.dirname(css_file), url))


def solid_rgba(width: int, height: int, color) -> np.ndarray:
    """Return an RGBA array filled with one color."""

    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[...] = color
    return image


def png_bytes(rgba: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(rgba, mode="RGBA").save(buf, format="PNG")
    return buf.getvalue()


def write_png(path: Path, rgba: np.ndarray) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(png_bytes(rgba))
    return path


@pytest.fixture
def log() -> MessageLog:
    return MessageLog(echo=False)


@pytest.fixture
def resources() -> MemoryResources:
    return MemoryResources()
