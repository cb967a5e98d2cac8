"""Framework-free controller wiring a TextBuffer to Textual UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from linepad.buffer import BufferMirror, TextBuffer
from linepad.commands import CommandDispatcher, CommandResult, KeyInput


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update the host UI."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    # Receives the serialized document when the user asks to save and leave.
    save: Callable[[str], None] = _noop
    exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds host key/paste events to the buffer and pushes snapshots back."""

    def __init__(
        self,
        buffer: TextBuffer,
        hooks: TextualUIHooks,
        *,
        dispatcher: Optional[CommandDispatcher] = None,
    ) -> None:
        self.buffer = buffer
        self.hooks = hooks
        self.dispatcher = dispatcher or CommandDispatcher(buffer)
        self._refresh_buffer()

    def pull_buffer(self) -> BufferMirror:
        return self.buffer.mirror(attributes={"buffer": self.buffer.name})

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Translate a host key event into a KeyInput and dispatch it."""

        key_input = KeyInput(key=key, text=text, modifiers=tuple(modifiers))
        self._log_state("key ->", key=key_input.token, text=text)
        result = self.dispatcher.handle_key(key_input)
        self._after_command(result)
        return result

    def handle_paste(self, text: str) -> CommandResult:
        self._log_state("paste ->", length=len(text))
        result = self.dispatcher.handle_paste(text)
        self._after_command(result)
        return result

    def _after_command(self, result: CommandResult) -> None:
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        if result.quit:
            self.hooks.save(self.buffer.serialize())
            self.hooks.exit()
            return
        if not result.consumed:
            return
        self.hooks.update_status(self._status_line(result))
        self._refresh_buffer()

    def _status_line(self, result: CommandResult) -> str:
        row, column = self.buffer.position()
        label = result.message or result.status
        return f"{row + 1}:{column + 1}  {label}"

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "cursor": self.buffer.position(),
            "lines": self.buffer.line_count,
            "buffer": self.buffer.name,
            "buffer_version": self.buffer.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
