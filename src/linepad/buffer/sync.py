"""Read-only boundary between the buffer and whatever renders it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .state import Cursor


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Snapshot a renderer borrows once per draw cycle."""

    text: str
    cursor: Cursor
    version: int = 0
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")


@runtime_checkable
class BufferSync(Protocol):
    """Anything that can hand the latest buffer snapshot to a host."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a cursor does not address a live position in the document."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
