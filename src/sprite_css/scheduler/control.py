"""Execution control for a sprite build."""

from __future__ import annotations

import threading


class RunControl:
    """Thread-safe stop flag, checked between sprite groups."""

    def __init__(self) -> None:
        self._stop = threading.Event()

    def stop(self) -> None:
        self._stop.set()

    def should_stop(self) -> bool:
        return self._stop.is_set()
