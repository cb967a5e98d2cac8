"""Line buffer, cursor types, and the render-side snapshot."""

from .buffer import TextBuffer, Transaction
from .document import LINE_BREAK, BufferDocument
from .state import BufferState, Cursor, Direction
from .sync import BufferMirror, BufferSync, BufferValidationError
from .validation import ensure_cursor

__all__ = [
    "LINE_BREAK",
    "BufferDocument",
    "BufferState",
    "Cursor",
    "Direction",
    "TextBuffer",
    "Transaction",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "ensure_cursor",
]
