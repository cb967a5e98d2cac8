"""Single-cursor line buffer: the editing core of linepad."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional, Sequence

from linepad.runtime import telemetry

from .document import LINE_BREAK, BufferDocument
from .state import BufferState, Cursor, Direction
from .sync import BufferMirror, BufferValidationError
from .validation import ensure_cursor


class TextBuffer:
    """Ordered lines plus one cursor, mutated only through its operations.

    The cursor always satisfies ``0 <= row < line_count`` and
    ``0 <= column <= len(lines[row])``. There is no setter for it; every
    public operation leaves it valid before returning.
    """

    def __init__(self, *, name: str = "default") -> None:
        self.name = name
        self._document = BufferDocument()
        self._state = BufferState()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "TextBuffer":
        buffer = cls(name=name)
        buffer._document = BufferDocument.from_text(text)
        return buffer

    def position(self) -> Cursor:
        return self._state.cursor

    def serialize(self) -> str:
        return self._document.text()

    def __str__(self) -> str:
        return self.serialize()

    @property
    def lines(self) -> Sequence[str]:
        return self._document.snapshot()

    @property
    def line_count(self) -> int:
        return self._document.line_count

    @property
    def version(self) -> int:
        return self._document.version

    def current_line(self) -> str:
        row, _ = ensure_cursor(self._document, self._state.cursor)
        return self._document.get_line(row)

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.serialize(),
            cursor=self.position(),
            version=self.version,
            attributes=dict(attributes or {}),
        )

    def insert_char(self, ch: str) -> None:
        if len(ch) != 1:
            raise ValueError(f"insert_char expects a single character, got {ch!r}")

        with Transaction(self, "insert_char"):
            row, column = self._state.cursor
            if ch == LINE_BREAK:
                self._document.split_line(row, column)
                self._state.set_cursor(row + 1, 0)
            else:
                self._document.insert(row, column, ch)
                self._state.set_cursor(row, column + 1)

    def insert_text(self, text: str) -> None:
        """Insert ``text`` at the cursor, splitting lines at every break.

        Same end state as calling ``insert_char`` for each character.
        """

        if not text:
            return

        with Transaction(self, "insert_text") as tx:
            row, column = self._state.cursor
            segments = text.split(LINE_BREAK)
            self._document.splice_lines(row, column, segments)
            if len(segments) == 1:
                self._state.set_cursor(row, column + len(text))
            else:
                self._state.set_cursor(row + len(segments) - 1, len(segments[-1]))
            tx.note("new_lines", len(segments) - 1)

    def remove_char(self) -> None:
        """Delete the character before the cursor (backspace)."""

        with Transaction(self, "remove_char") as tx:
            row, column = self._state.cursor
            if (row, column) == (0, 0):
                tx.guard("start_of_document")
                return

            if column == 0:
                join_point = self._document.join_with_previous(row)
                self._state.set_cursor(row - 1, join_point)
            else:
                self._document.delete(row, column - 1)
                self._state.set_cursor(row, column - 1)

    def move_cursor(self, direction: Direction) -> None:
        direction = Direction(direction)
        with Transaction(self, f"move_{direction.value}") as tx:
            row, column = self._state.cursor
            last_row = self._document.line_count - 1
            line_length = len(self.current_line())

            if direction is Direction.UP:
                if row > 0:
                    row -= 1
                    column = min(column, self._document.line_length(row))
                else:
                    column = 0
            elif direction is Direction.DOWN:
                if row < last_row:
                    row += 1
                    column = min(column, self._document.line_length(row))
                else:
                    column = line_length
            elif direction is Direction.LEFT:
                if column > 0:
                    column -= 1
                elif row > 0:
                    row -= 1
                    column = self._document.line_length(row)
                else:
                    tx.guard("start_of_document")
            elif direction is Direction.RIGHT:
                if column < line_length:
                    column += 1
                elif row < last_row:
                    row += 1
                    column = 0
                else:
                    tx.guard("end_of_document")

            self._state.set_cursor(row, column)


class Transaction(AbstractContextManager["Transaction"]):
    """Runs one buffer operation inside a telemetry span.

    On a clean exit the cursor is re-checked against the document, so a
    broken invariant fails loudly at the operation that caused it.
    """

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.guarded: Optional[str] = None
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def note(self, key: str, value: object) -> None:
        if self._handle is not None:
            self._handle.add_metadata(key, value)

    def guard(self, reason: str) -> None:
        """Mark the operation as a no-op at a document boundary."""

        self.guarded = reason
        if self._handle is not None:
            self._handle.event(
                "buffer.guard",
                level="debug",
                data={"operation": self.label, "reason": reason},
            )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            try:
                ensure_cursor(self.buffer._document, self.buffer._state.cursor)
            except BufferValidationError as error:
                self._close_span(type(error), error, error.__traceback__)
                raise
        self._close_span(exc_type, exc, tb)
        return False

    def _close_span(self, exc_type, exc, tb) -> None:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
            self._span_cm = None


__all__ = ["TextBuffer", "Transaction"]
