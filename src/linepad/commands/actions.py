"""Buffer commands bound to keys and paste events."""

from __future__ import annotations

from linepad.buffer import LINE_BREAK, Direction, TextBuffer

from .models import CommandResult


def _state(buffer: TextBuffer) -> tuple:
    return (buffer.version, buffer.position())


def _outcome(buffer: TextBuffer, before: tuple, message: str) -> CommandResult:
    # Guards leave both the document version and the cursor untouched.
    status = "ok" if _state(buffer) != before else "noop"
    return CommandResult(consumed=True, status=status, message=message)


def insert_character(buffer: TextBuffer, ch: str) -> CommandResult:
    before = _state(buffer)
    buffer.insert_char(ch)
    return _outcome(buffer, before, "insert_char")


def insert_newline(buffer: TextBuffer) -> CommandResult:
    before = _state(buffer)
    buffer.insert_char(LINE_BREAK)
    return _outcome(buffer, before, "insert_newline")


def delete_backward(buffer: TextBuffer) -> CommandResult:
    before = _state(buffer)
    buffer.remove_char()
    return _outcome(buffer, before, "remove_char")


def move(buffer: TextBuffer, direction: Direction) -> CommandResult:
    before = _state(buffer)
    buffer.move_cursor(direction)
    return _outcome(buffer, before, f"move_{direction.value}")


def normalize_paste(text: str) -> str:
    """Turn CRLF and lone CR line endings into ``LINE_BREAK``."""

    return text.replace("\r\n", LINE_BREAK).replace("\r", LINE_BREAK)


def paste(buffer: TextBuffer, text: str) -> CommandResult:
    before = _state(buffer)
    buffer.insert_text(normalize_paste(text))
    return _outcome(buffer, before, "paste")


def save_and_exit(buffer: TextBuffer) -> CommandResult:
    del buffer  # the host owns persistence
    return CommandResult(
        consumed=True, status="save_and_exit", message="save_and_exit", quit=True
    )


__all__ = [
    "insert_character",
    "insert_newline",
    "delete_backward",
    "move",
    "normalize_paste",
    "paste",
    "save_and_exit",
]
