"""Tests for the command line entry point."""

from conftest import solid_rgba, write_png
from sprite_css.main import main

CSS = (
    "/** sprite: s; sprite-image: url(s.png) */\n"
    ".a { background-image: url(a.png); /** sprite-ref: s; */ }\n"
)


def test_missing_inputs_exit_code(capsys):
    assert main([]) == 2
    assert "root directory or stylesheet" in capsys.readouterr().err


def test_successful_run(tmp_path, capsys):
    write_png(tmp_path / "a.png", solid_rgba(2, 2, (9, 9, 9, 255)))
    (tmp_path / "a.css").write_text(CSS)

    assert main(["--root-dir", str(tmp_path), "--log-level", "ERROR"]) == 0

    out = capsys.readouterr().out
    assert "Sprites built: 1" in out
    assert (tmp_path / "s.png").exists()
    assert (tmp_path / "a-sprite.css").exists()


def test_fail_on_warning(tmp_path):
    (tmp_path / "a.css").write_text(CSS)

    assert main(["--root-dir", str(tmp_path), "--log-level", "ERROR"]) == 0
    assert main(["--root-dir", str(tmp_path), "--log-level", "ERROR", "--fail-on-warning"]) == 1
