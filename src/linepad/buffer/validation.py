"""Cursor invariant checks shared by the buffer and its adapters."""

from __future__ import annotations

from typing import Sequence

from .document import BufferDocument
from .state import Cursor
from .sync import BufferValidationError


def ensure_cursor(document: BufferDocument | Sequence[str], cursor: Cursor) -> Cursor:
    """Return ``cursor`` unchanged if it points inside ``document``.

    ``document`` may also be a plain sequence of lines, which is what a
    ``BufferMirror`` exposes to renderers.
    """

    row, col = cursor
    if isinstance(document, BufferDocument):
        line_count = document.line_count
    else:
        line_count = len(document)
    if row < 0 or row >= line_count:
        raise BufferValidationError("Row out of range", cursor=cursor)
    if isinstance(document, BufferDocument):
        line_length = document.line_length(row)
    else:
        line_length = len(document[row])
    if col < 0 or col > line_length:
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor
