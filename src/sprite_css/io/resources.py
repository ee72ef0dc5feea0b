"""Access to stylesheets, member images and generated files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import unquote

_REMOTE_PREFIXES = ("http:", "https:", "//", "data:")


class ResourceHandler(Protocol):
    """Reads and writes resources referenced by stylesheets."""

    def read_text(self, path: str) -> str: ...

    def read_bytes(self, path: str) -> bytes: ...

    def write_text(self, path: str, text: str) -> None: ...

    def write_bytes(self, path: str, data: bytes) -> None: ...

    def resolve(self, css_file: str, url: str) -> str: ...


class FileSystemResourceHandler:
    """Resource handler backed by the local file system."""

    def __init__(self, document_root_dir: Optional[Path] = None, encoding: str = "utf-8") -> None:
        self.document_root_dir = document_root_dir
        self.encoding = encoding

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding=self.encoding)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def write_text(self, path: str, text: str) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding=self.encoding)

    def write_bytes(self, path: str, data: bytes) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def resolve(self, css_file: str, url: str) -> str:
        """Resolve a stylesheet URL to a file path.

        Relative URLs resolve against the stylesheet's directory, root-relative
        ones against the document root (or the stylesheet's directory if unset).
        """

        if url.lower().startswith(_REMOTE_PREFIXES):
            raise ValueError(f"Remote resources are not supported: {url}")

        clean = unquote(url.split("?", 1)[0].split("#", 1)[0])
        base = Path(css_file).parent
        if clean.startswith("/"):
            if self.document_root_dir is not None:
                base = self.document_root_dir
            clean = clean.lstrip("/")
        return os.path.normpath(os.path.join(str(base), *clean.split("/")))
