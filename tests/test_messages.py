"""Tests for the message log."""

import csv
import json

from sprite_css.diagnostics import MessageLevel, MessageLog, MessageType


def test_echo_respects_min_level(capsys):
    log = MessageLog(min_level=MessageLevel.WARNING)

    log.info(MessageType.READING_SPRITE_IMAGE_DIRECTIVES, "a.css")
    log.warning(MessageType.REFERENCED_SPRITE_NOT_FOUND, "x", css_file="a.css", line=4)

    out = capsys.readouterr().out
    assert out == "WARNING: a.css:4: Referenced sprite 'x' is not defined\n"
    assert len(log.messages) == 2
    assert len(log.warnings()) == 1


def test_listeners_receive_every_message():
    seen = []
    log = MessageLog(echo=False, listeners=[seen.append])

    log.error(MessageType.MALFORMED_URL, "nope")

    assert [m.type for m in seen] == [MessageType.MALFORMED_URL]


def test_export_writes_json_and_csv(tmp_path):
    log = MessageLog(echo=False)
    log.warning(MessageType.MALFORMED_MARGIN, "-1", css_file="a.css", line=2)

    log.export(tmp_path / "out" / "messages.json")

    rows = json.loads((tmp_path / "out" / "messages.json").read_text())
    assert rows == [
        {
            "level": "WARNING",
            "type": "MALFORMED_MARGIN",
            "text": "Malformed margin value '-1', expected a non-negative integer",
            "css_file": "a.css",
            "line": 2,
        }
    ]
    with (tmp_path / "out" / "messages.csv").open(newline="") as handle:
        assert [row["type"] for row in csv.DictReader(handle)] == ["MALFORMED_MARGIN"]


def test_export_without_messages_writes_nothing(tmp_path):
    MessageLog(echo=False).export(tmp_path / "messages.json")

    assert not (tmp_path / "messages.json").exists()
