"""Inbound key events and the outcome of dispatching them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key event handed over by a host UI.

    ``key`` is either a named key (``"ENTER"``, ``"UP"``, ...) or the
    character itself; ``text`` carries the printable character, if any.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(
            self, "modifiers", tuple(str(mod).upper() for mod in self.modifiers)
        )

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key


@dataclass(slots=True)
class CommandResult:
    """Result of one inbound command."""

    consumed: bool
    status: str = "ok"  # ok, noop, ignored, save_and_exit
    message: Optional[str] = None
    quit: bool = False
