"""Message log collecting build diagnostics."""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Callable, List, Optional


class MessageLevel(IntEnum):
    """Severity of a message; higher is more severe."""

    INFO = 1
    WARNING = 2
    ERROR = 3

    @classmethod
    def parse(cls, name: str) -> "MessageLevel":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. Available: {', '.join(level.name for level in cls)}"
            ) from None


class MessageType(Enum):
    """Message kinds and their text templates."""

    READING_SPRITE_IMAGE_DIRECTIVES = "Reading sprite image directives from {0}"
    READING_SPRITE_REFERENCE_DIRECTIVES = "Reading sprite reference directives from {0}"
    SPRITE_ID_NOT_FOUND = "'sprite' property is required in: {0}"
    SPRITE_IMAGE_URL_NOT_FOUND = "'sprite-image' property is required in: {0}"
    SPRITE_REF_NOT_FOUND = "'sprite-ref' property is required in: {0}"
    REFERENCED_SPRITE_NOT_FOUND = "Referenced sprite '{0}' is not defined"
    UNSUPPORTED_LAYOUT = "Unsupported sprite layout '{0}'"
    UNSUPPORTED_FORMAT = "Unsupported sprite image format in '{0}'"
    UNSUPPORTED_ALIGNMENT = "Unsupported sprite alignment '{0}'"
    ALIGNMENT_NOT_ALLOWED_FOR_LAYOUT = "Alignment '{0}' is not allowed in {1} sprites, using '{2}'"
    MALFORMED_MARGIN = "Malformed margin value '{0}', expected a non-negative integer"
    MALFORMED_COLOR = "Malformed color '{0}'"
    MALFORMED_BOOLEAN = "Malformed boolean value '{0}'"
    MALFORMED_URL = "Malformed url: {0}"
    UNSUPPORTED_PROPERTIES_FOUND = "Ignoring unsupported properties: {0}"
    NO_BACKGROUND_IMAGE_RULE_NEXT_TO_SPRITE_REFERENCE_DIRECTIVE = (
        "No background-image rule next to sprite-ref directive: {0}"
    )
    MORE_THAN_ONE_RULE_NEXT_TO_SPRITE_REFERENCE_DIRECTIVE = (
        "More than one CSS rule next to sprite-ref directive: {0}"
    )
    IGNORING_SPRITE_IMAGE_REDEFINITION = "Ignoring redefinition of sprite '{0}'"
    CANNOT_LOAD_IMAGE = "Cannot load image '{0}': {1}"
    CANNOT_WRITE_SPRITE_IMAGE = "Cannot write sprite image '{0}': {1}"
    NO_REFERENCES_FOR_SPRITE ="No references to sprite '{0}', skipping"
    WRITING_SPRITE_IMAGE = "Writing sprite image of size {1}x{2} for '{0}' to {3}"
    WRITING_CSS = "Writing rewritten stylesheet {0}"
    BUILD_STOPPED = "Build stopped before sprite '{0}'"


@dataclass(frozen=True)
class Message:
    """A single diagnostic tied to an optional stylesheet location."""

    level: MessageLevel
    type: MessageType
    text: str
    css_file: Optional[str] = None
    line: Optional[int] = None

    def __str__(self) -> str:
        location = ""
        if self.css_file:
            location = self.css_file
            if self.line is not None:
                location += f":{self.line}"
            location += ": "
        return f"{self.level.name}: {location}{self.text}"


@dataclass
class MessageLog:
    """Collects messages and echoes those at or above `min_level`."""

    min_level: MessageLevel = MessageLevel.INFO
    echo: bool = True
    messages: List[Message] = field(default_factory=list)
    listeners: List[Callable[[Message], None]] = field(default_factory=list)

    def log(
        self,
        level: MessageLevel,
        message_type: MessageType,
        *args: object,
        css_file: Optional[str] = None,
        line: Optional[int] = None,
    ) -> Message:
        message = Message(
            level=level,
            type=message_type,
            text=message_type.value.format(*args),
            css_file=css_file,
            line=line,
        )
        self.messages.append(message)
        if self.echo and level >= self.min_level:
            print(message)
        for listener in self.listeners:
            listener(message)
        return message

    def info(
        self,
        message_type: MessageType,
        *args: object,
        css_file: Optional[str] = None,
        line: Optional[int] = None,
    ) -> Message:
        return self.log(MessageLevel.INFO, message_type, *args, css_file=css_file, line=line)

    def warning(
        self,
        message_type: MessageType,
        *args: object,
        css_file: Optional[str] = None,
        line: Optional[int] = None,
    ) -> Message:
        return self.log(MessageLevel.WARNING, message_type, *args, css_file=css_file, line=line)

    def error(
        self,
        message_type: MessageType,
        *args: object,
        css_file: Optional[str] = None,
        line: Optional[int] = None,
    ) -> Message:
        return self.log(MessageLevel.ERROR, message_type, *args, css_file=css_file, line=line)

    def warnings(self) -> List[Message]:
        return [message for message in self.messages if message.level >= MessageLevel.WARNING]

    def count(self, message_type: MessageType) -> int:
        return sum(1 for message in self.messages if message.type is message_type)

    def export(self, path: Optional[Path]) -> None:
        """Export messages to JSON and a sibling CSV file."""

        if not path or not self.messages:
            return

        rows = [
            {
                **asdict(message),
                "level": message.level.name,
                "type": message.type.name,
            }
            for message in self.messages
        ]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(rows, indent=2))

        csv_path = path.with_suffix(".csv")
        with csv_path.open("w", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
