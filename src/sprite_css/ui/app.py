"""Flask-based UI for running sprite builds with live status."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from flask import Flask, abort, jsonify, redirect, render_template, request, send_file, url_for

from sprite_css.config import load_config
from sprite_css.diagnostics import Message, MessageLog
from sprite_css.scheduler import RunControl, build_sprites


@dataclass
class UIState:
    """Shared UI state for progress reporting."""

    running: bool = False
    stopped: bool = False
    message: str = "Idle"
    sprites_done: int = 0
    sprites_total: int = 0
    warnings: int = 0
    sprite_paths: Dict[str, Path] = field(default_factory=dict)
    log: List[str] = field(default_factory=list)


class BuildWorker:
    """Background worker running a sprite build."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.state = UIState()
        self.control = RunControl()
        self.thread: Optional[threading.Thread] = None

    def start(self, root_dir: Path, output_dir: Optional[Path], document_root_dir: Optional[Path]) -> None:
        with self.lock:
            if self.state.running:
                return
            self.state = UIState(running=True, message="Starting...")
            self.control = RunControl()

        def on_message(message: Message) -> None:
            with self.lock:
                self.state.log.append(str(message))
                self.state.log = self.state.log[-200:]

        def status_callback(payload: Dict[str, object]) -> None:
            with self.lock:
                self.state.sprites_done = int(payload.get("done", 0))
                self.state.sprites_total = int(payload.get("total", 0))
                self.state.sprite_paths[str(payload["sprite"])] = Path(str(payload["preview"]))
                self.state.message = str(payload.get("message", ""))

        def _run() -> None:
            try:
                config = load_config(
                    None,
                    {
                        "root_dir": root_dir,
                        "output_dir": output_dir,
                        "document_root_dir": document_root_dir,
                    },
                )
                log = MessageLog(min_level=config.log_level, echo=False, listeners=[on_message])
                result = build_sprites(
                    config,
                    log=log,
                    control=self.control,
                    status_callback=status_callback,
                )
                with self.lock:
                    self.state.running = False
                    self.state.warnings = int(result["warnings"])
                    self.state.message = "Stopped" if self.state.stopped else "Completed"
            except Exception as exc:  # noqa: BLE001
                with self.lock:
                    self.state.running = False
                    self.state.message = f"Error: {exc}"

        self.thread = threading.Thread(target=_run, daemon=True)
        self.thread.start()

    def stop(self) -> None:
        with self.lock:
            self.state.stopped = True
            self.state.message = "Stopping..."
        self.control.stop()


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value).expanduser() if value else None


def create_app(worker: Optional[BuildWorker] = None) -> Flask:
    app = Flask(__name__)
    app.config["worker"] = worker = worker or BuildWorker()

    @app.route("/")
    def index() -> str:
        return render_template("index.html")

    @app.route("/start", methods=["POST"])
    def start():
        root_dir = Path(request.form["root"]).expanduser()
        worker.start(
            root_dir,
            _optional_path(request.form.get("output")),
            _optional_path(request.form.get("document_root")),
        )
        return redirect(url_for("index"))

    @app.route("/stop", methods=["POST"])
    def stop():
        worker.stop()
        return redirect(url_for("index"))

    @app.route("/status")
    def status():
        with worker.lock:
            payload = {
                "running": worker.state.running,
                "message": worker.state.message,
                "done": worker.state.sprites_done,
                "total": worker.state.sprites_total,
                "warnings": worker.state.warnings,
                "sprites": sorted(worker.state.sprite_paths),
                "log": worker.state.log,
            }
        return jsonify(payload)

    @app.route("/preview/<sprite_id>")
    def preview(sprite_id: str):
        with worker.lock:
            sprite_path = worker.state.sprite_paths.get(sprite_id)
        if not sprite_path or not sprite_path.exists():
            abort(404)
        return send_file(sprite_path.resolve())

    return app
