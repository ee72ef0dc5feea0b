"""Build diagnostics."""

from sprite_css.diagnostics.messages import Message, MessageLevel, MessageLog, MessageType

__all__ = ["Message", "MessageLevel", "MessageLog", "MessageType"]
