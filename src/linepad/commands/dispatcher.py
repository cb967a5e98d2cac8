"""Maps normalized key events onto buffer commands."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional

from linepad.buffer import Direction, TextBuffer
from linepad.runtime import telemetry

from . import actions
from .models import CommandResult, KeyInput

KeyAction = Callable[[TextBuffer], CommandResult]

# Modifier combinations that must never reach the buffer as text.
NON_TEXT_MODIFIERS = frozenset({"CTRL", "ALT"})


def default_key_actions() -> Dict[str, KeyAction]:
    return {
        "ENTER": actions.insert_newline,
        "BACKSPACE": actions.delete_backward,
        "UP": lambda buffer: actions.move(buffer, Direction.UP),
        "RIGHT": lambda buffer: actions.move(buffer, Direction.RIGHT),
        "DOWN": lambda buffer: actions.move(buffer, Direction.DOWN),
        "LEFT": lambda buffer: actions.move(buffer, Direction.LEFT),
        "ESC": actions.save_and_exit,
    }


class CommandDispatcher:
    """Translates ``KeyInput`` and paste events into ``TextBuffer`` calls.

    Named keys are looked up in the action table first; anything else with
    a single printable character in ``text`` is inserted as-is.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        *,
        key_actions: Optional[Mapping[str, KeyAction]] = None,
    ) -> None:
        self.buffer = buffer
        self.logger = telemetry.get_logger("linepad.commands")
        self._actions: Dict[str, KeyAction] = dict(
            key_actions if key_actions is not None else default_key_actions()
        )

    def bind(self, key: str, action: KeyAction) -> None:
        self._actions[key.upper()] = action

    def handle_key(self, key: KeyInput) -> CommandResult:
        action = self._actions.get(key.key.upper()) if not key.modifiers else None
        if action is not None:
            return self._run(key.token, action)

        if self._is_text(key):
            ch = key.text or ""
            return self._run(
                key.token, lambda buffer: actions.insert_character(buffer, ch)
            )

        self.logger.debug(f"ignored key {key.token!r}")
        return CommandResult(consumed=False, status="ignored")

    def handle_paste(self, text: str) -> CommandResult:
        return self._run("paste", lambda buffer: actions.paste(buffer, text))

    @staticmethod
    def _is_text(key: KeyInput) -> bool:
        if key.text is None or len(key.text) != 1 or not key.text.isprintable():
            return False
        return not NON_TEXT_MODIFIERS.intersection(key.modifiers)

    def _run(self, token: str, action: KeyAction) -> CommandResult:
        with telemetry.span(
            "commands::execute",
            component="commands",
            metadata={"key": token, "buffer": self.buffer.name},
        ):
            return action(self.buffer)


__all__ = ["CommandDispatcher", "KeyAction", "default_key_actions"]
