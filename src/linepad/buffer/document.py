"""List-of-lines storage backing ``TextBuffer``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

LINE_BREAK = "\n"


@dataclass(slots=True)
class BufferDocument:
    """Ordered, never-empty sequence of lines.

    Lines never contain ``LINE_BREAK``; a break only exists as the boundary
    between two entries. Every mutation bumps ``version``. Callers address
    lines by index and are expected to have validated that index already.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        # split() rather than splitlines(): a trailing break yields a final
        # empty line, and "\r" stays part of the line it appears in.
        return cls(_lines=text.split(LINE_BREAK), version=0)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def text(self) -> str:
        return LINE_BREAK.join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_length(self, index: int) -> int:
        return len(self._lines[index])

    def insert(self, row: int, column: int, text: str) -> None:
        """Insert break-free ``text`` into line ``row`` at ``column``."""

        line = self._lines[row]
        self._lines[row] = line[:column] + text + line[column:]
        self.version += 1

    def delete(self, row: int, column: int) -> None:
        """Remove the single character at ``column`` of line ``row``."""

        line = self._lines[row]
        self._lines[row] = line[:column] + line[column + 1 :]
        self.version += 1

    def split_line(self, row: int, column: int) -> None:
        """Break line ``row`` at ``column``; the tail becomes line ``row + 1``."""

        line = self._lines[row]
        self._lines[row : row + 1] = [line[:column], line[column:]]
        self.version += 1

    def splice_lines(self, row: int, column: int, segments: Sequence[str]) -> None:
        """Replace the cursor point with ``segments`` joined by line breaks.

        ``segments`` is the result of splitting inserted text on breaks, so it
        holds at least one entry. The first entry extends the head of line
        ``row``, the last one is followed by the original tail.
        """

        line = self._lines[row]
        head, tail = line[:column], line[column:]
        replacement = list(segments)
        replacement[0] = head + replacement[0]
        replacement[-1] = replacement[-1] + tail
        self._lines[row : row + 1] = replacement
        self.version += 1

    def join_with_previous(self, row: int) -> int:
        """Append line ``row`` onto line ``row - 1`` and drop it.

        Returns the length the previous line had before the join, which is
        where the joined content now starts.
        """

        join_point = len(self._lines[row - 1])
        self._lines[row - 1] += self._lines.pop(row)
        self.version += 1
        return join_point
