from __future__ import annotations

import pytest

from linepad.buffer import TextBuffer
from linepad.commands import (
    CommandDispatcher,
    CommandResult,
    KeyInput,
    normalize_paste,
)


def make_dispatcher(text: str = "") -> CommandDispatcher:
    buffer = TextBuffer()
    buffer.insert_text(text)
    return CommandDispatcher(buffer)


def press(dispatcher: CommandDispatcher, *keys: str) -> CommandResult:
    result = CommandResult(consumed=False)
    for key in keys:
        text = key if len(key) == 1 else None
        result = dispatcher.handle_key(KeyInput(key=key, text=text))
    return result


def test_printable_keys_insert_text() -> None:
    dispatcher = make_dispatcher()

    result = press(dispatcher, "h", "i")

    assert result.consumed is True
    assert result.status == "ok"
    assert dispatcher.buffer.serialize() == "hi"


def test_enter_splits_line() -> None:
    dispatcher = make_dispatcher("ab")
    press(dispatcher, "LEFT")

    result = press(dispatcher, "ENTER")

    assert result.message == "insert_newline"
    assert dispatcher.buffer.lines == ("a", "b")
    assert dispatcher.buffer.position() == (1, 0)


def test_backspace_and_arrows() -> None:
    dispatcher = make_dispatcher("Hello\nWorld!")

    press(dispatcher, "BACKSPACE", "UP", "RIGHT", "BACKSPACE")

    assert dispatcher.buffer.serialize() == "HelloWorld"


def test_guard_reports_noop() -> None:
    dispatcher = make_dispatcher()

    assert press(dispatcher, "BACKSPACE").status == "noop"
    assert press(dispatcher, "LEFT").status == "noop"
    assert press(dispatcher, "RIGHT").status == "noop"


def test_named_keys_are_case_insensitive() -> None:
    dispatcher = make_dispatcher("ab")

    dispatcher.handle_key(KeyInput(key="left"))

    assert dispatcher.buffer.position() == (0, 1)


def test_escape_requests_save_and_exit() -> None:
    dispatcher = make_dispatcher("keep me")

    result = press(dispatcher, "ESC")

    assert result.quit is True
    assert result.status == "save_and_exit"
    assert dispatcher.buffer.serialize() == "keep me"


@pytest.mark.parametrize(
    "key",
    [
        KeyInput(key="s", text="s", modifiers=("ctrl",)),
        KeyInput(key="x", text="x", modifiers=("ALT",)),
        KeyInput(key="TAB", text="\t"),
        KeyInput(key="F5"),
        KeyInput(key="UP", modifiers=("SHIFT",)),
    ],
)
def test_unbound_keys_are_ignored(key: KeyInput) -> None:
    dispatcher = make_dispatcher("abc")

    result = dispatcher.handle_key(key)

    assert result.consumed is False
    assert result.status == "ignored"
    assert dispatcher.buffer.serialize() == "abc"
    assert dispatcher.buffer.position() == (0, 3)


def test_shifted_character_is_inserted() -> None:
    dispatcher = make_dispatcher()

    dispatcher.handle_key(KeyInput(key="A", text="A", modifiers=("shift",)))

    assert dispatcher.buffer.serialize() == "A"


def test_custom_binding_overrides_default() -> None:
    dispatcher = make_dispatcher("abc")
    dispatcher.bind("esc", lambda buffer: CommandResult(consumed=True, status="kept"))

    result = press(dispatcher, "ESC")

    assert result.status == "kept"
    assert result.quit is False


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a\r\nb", "a\nb"),
        ("a\rb", "a\nb"),
        ("a\r\n\r\nb\r", "a\n\nb\n"),
        ("plain", "plain"),
    ],
)
def test_normalize_paste(raw: str, expected: str) -> None:
    assert normalize_paste(raw) == expected


def test_paste_inserts_normalized_text() -> None:
    dispatcher = make_dispatcher("[]")
    press(dispatcher, "LEFT")

    result = dispatcher.handle_paste("one\r\ntwo")

    assert result.status == "ok"
    assert dispatcher.buffer.lines == ("[one", "two]")
    assert dispatcher.buffer.position() == (1, 3)


def test_key_input_token_and_validation() -> None:
    assert KeyInput(key="s", modifiers=("ctrl",)).token == "CTRL+s"
    assert KeyInput(key="UP").token == "UP"
    with pytest.raises(ValueError):
        KeyInput(key="")
