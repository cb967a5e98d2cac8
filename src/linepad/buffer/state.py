"""Cursor and direction types for the line buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


class Direction(str, Enum):
    """Arrow-key directions understood by ``TextBuffer.move_cursor``."""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"


@dataclass(slots=True)
class BufferState:
    """Mutable cursor owned by a single ``TextBuffer``."""

    row: int = 0
    column: int = 0

    @property
    def cursor(self) -> Cursor:
        return (self.row, self.column)

    def set_cursor(self, row: int, column: int) -> None:
        self.row = row
        self.column = column
