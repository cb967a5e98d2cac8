"""Executable Textual app hosting a single linepad buffer."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widget import Widget
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use linepad.adapters.textual.app"
    ) from exc

from linepad.buffer import BufferMirror, TextBuffer, ensure_cursor
from linepad.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks

DEFAULT_OUTPUT = "out.txt"

_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
}


def render_mirror(mirror: BufferMirror) -> Text:
    """Render buffer text with the cursor cell shown in reverse video."""

    lines = mirror.lines
    row, column = ensure_cursor(lines, mirror.cursor)
    result = Text()
    for index, line in enumerate(lines):
        if index:
            result.append("\n")
        if index != row:
            result.append(line)
            continue
        result.append(line[:column])
        if column < len(line):
            result.append(line[column], style="reverse")
            result.append(line[column + 1 :])
        else:
            result.append(" ", style="reverse")
    return result


class EditorView(Widget):
    """Draws the latest ``BufferMirror``."""

    DEFAULT_CSS = """
    EditorView {
        height: 1fr;
        border: round $accent;
        padding: 0 1;
        overflow: auto;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._mirror = BufferMirror(text="", cursor=(0, 0))

    def show(self, mirror: BufferMirror) -> None:
        self._mirror = mirror
        self.refresh()

    def render(self) -> Text:
        return render_mirror(self._mirror)


@dataclass
class UIState:
    status_text: str = ""
    saved_to: Optional[Path] = None


class LinepadApp(App[None]):
    """Minimal Textual UI around one ``TextBuffer``; Escape saves and quits."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit without saving"),
    ]

    def __init__(
        self,
        *,
        output: Path | str = DEFAULT_OUTPUT,
        buffer: Optional[TextBuffer] = None,
    ) -> None:
        super().__init__()
        self.output_path = Path(output)
        self.text_buffer = buffer or TextBuffer(name=self.output_path.name)
        self.adapter: TextualEditorAdapter | None = None
        self._ui_state = UIState()
        self._editor_view: EditorView | None = None
        self._status_widget: Static | None = None
        self._telemetry_logger = telemetry.get_logger("linepad.app")

    def compose(self) -> ComposeResult:
        yield Header()
        self._editor_view = EditorView(id="editor")
        yield self._editor_view
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = str(self.output_path)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            save=self._save,
            exit=self.exit,
            log=self._telemetry_logger.debug,
        )
        self.adapter = TextualEditorAdapter(self.text_buffer, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        result = self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if result.consumed:
            event.stop()

    def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.handle_paste(event.text)
            event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._editor_view:
            self._editor_view.show(mirror)

    def _update_status(self, status: str) -> None:
        self._ui_state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _save(self, text: str) -> None:
        self.output_path.write_text(text, encoding="utf-8")
        self._ui_state.saved_to = self.output_path
        telemetry.record_event(
            "app.saved", data={"path": str(self.output_path), "chars": len(text)}
        )

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        if event.key in {"ctrl+c", "ctrl+q"}:
            return None
        # Textual names keys like "ctrl+left"; the literal "+" key is "plus".
        *prefixes, base = event.key.split("+")
        modifiers = tuple(prefix.upper() for prefix in prefixes)
        if base in _NAMED_KEYS:
            return (_NAMED_KEYS[base], None, modifiers)
        character = event.character
        if character and character.isprintable() and modifiers in {(), ("SHIFT",)}:
            # Shift only changes which character arrives, e.g. "shift+space".
            return (character, character, ())
        return (base.upper(), None, modifiers)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Edit text in the terminal; Escape writes it to a file and exits."
    )
    parser.add_argument(
        "--output",
        default=os.environ.get("LINEPAD_OUTPUT", DEFAULT_OUTPUT),
        help="File the buffer is written to on Escape (default: out.txt)",
    )
    parser.add_argument(
        "--log-preset",
        default="production",
        choices=("development", "production", "performance"),
        help="telelog preset; 'production' keeps logs off the terminal",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = LinepadApp(output=args.output)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
