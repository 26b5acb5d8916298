"""Text mutations driven by the cursor: insert, newline, delete."""

from __future__ import annotations

from kilo_engine.editor.state import EditorState
from kilo_engine.input.keys import Key, KeyEvent
from kilo_engine.modes.base_mode import ModeContext, ModeResult

from .motion import move_cursor


def insert_byte(state: EditorState, byte: int) -> None:
    cursor = state.cursor
    store = state.store
    if cursor.cy == store.row_count:
        store.insert_row(store.row_count, b"")
    store.insert_char(cursor.cy, cursor.cx, byte)
    cursor.cx += 1


def insert_newline(state: EditorState) -> None:
    cursor = state.cursor
    if cursor.cx == 0:
        state.store.insert_row(cursor.cy, b"")
    else:
        state.store.split(cursor.cy, cursor.cx)
    cursor.cy += 1
    cursor.cx = 0


def backspace(state: EditorState) -> bool:
    """Delete the byte left of the cursor, joining rows at column 0."""

    cursor = state.cursor
    store = state.store
    if cursor.cy == store.row_count:
        return False
    if cursor.cx == 0 and cursor.cy == 0:
        return False
    if cursor.cx > 0:
        store.delete_char(cursor.cy, cursor.cx - 1)
        cursor.cx -= 1
        return True
    landing = store.merge_into_previous(cursor.cy)
    if landing is None:
        return False
    cursor.cy -= 1
    cursor.cx = landing
    return True


def insert_char(context: ModeContext, event: KeyEvent) -> ModeResult:
    if event.byte is None:
        return ModeResult(consumed=False, status="miss", message=event.token)
    insert_byte(context.state, event.byte)
    return ModeResult(consumed=True, status="insert")


def newline(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    insert_newline(context.state)
    return ModeResult(consumed=True, status="newline")


def delete_backward(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    changed = backspace(context.state)
    return ModeResult(consumed=True, status="delete" if changed else "noop")


def delete_forward(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    move_cursor(context.state, Key.RIGHT)
    changed = backspace(context.state)
    return ModeResult(consumed=True, status="delete" if changed else "noop")


__all__ = [
    "backspace",
    "delete_backward",
    "delete_forward",
    "insert_byte",
    "insert_char",
    "insert_newline",
    "newline",
]
