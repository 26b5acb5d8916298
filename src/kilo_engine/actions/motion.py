"""Cursor motion: arrows, Home/End and paging."""

from __future__ import annotations

from typing import cast

from kilo_engine.editor.state import EditorState
from kilo_engine.input.keys import Key, KeyEvent
from kilo_engine.modes.base_mode import ModeContext, ModeResult


def move_cursor(state: EditorState, key: Key) -> None:
    """Apply one arrow step, then clamp ``cx`` to the landing row."""

    cursor = state.cursor
    store = state.store
    row = store.row(cursor.cy)

    if key is Key.LEFT:
        if cursor.cx > 0:
            cursor.cx -= 1
        elif cursor.cy > 0:
            cursor.cy -= 1
            cursor.cx = store[cursor.cy].size
    elif key is Key.RIGHT:
        if row is not None and cursor.cx < row.size:
            cursor.cx += 1
        elif row is not None and cursor.cx == row.size:
            cursor.cy += 1
            cursor.cx = 0
    elif key is Key.UP:
        if cursor.cy > 0:
            cursor.cy -= 1
    elif key is Key.DOWN:
        if cursor.cy < store.row_count:
            cursor.cy += 1
    else:
        raise ValueError(f"not an arrow key: {key!r}")

    landing = store.row(cursor.cy)
    limit = landing.size if landing is not None else 0
    if cursor.cx > limit:
        cursor.cx = limit


def page(state: EditorState, key: Key) -> None:
    """Jump to the top/bottom of the viewport, then move a screenful."""

    viewport = state.viewport
    cursor = state.cursor
    if key is Key.PAGE_UP:
        cursor.cy = viewport.row_offset
        step = Key.UP
    elif key is Key.PAGE_DOWN:
        cursor.cy = min(viewport.row_offset + viewport.rows - 1, state.store.row_count)
        step = Key.DOWN
    else:
        raise ValueError(f"not a paging key: {key!r}")
    for _ in range(viewport.rows):
        move_cursor(state, step)


def _moved(status: str) -> ModeResult:
    return ModeResult(consumed=True, status=status)


def move_arrow(context: ModeContext, event: KeyEvent) -> ModeResult:
    key = cast(Key, event.key)
    move_cursor(context.state, key)
    return _moved(f"move_{key.value}")


def move_page(context: ModeContext, event: KeyEvent) -> ModeResult:
    key = cast(Key, event.key)
    page(context.state, key)
    return _moved(key.value)


def move_home(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    context.state.cursor.cx = 0
    return _moved("home")


def move_end(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    row = context.state.current_row()
    if row is not None:
        context.state.cursor.cx = row.size
    return _moved("end")


__all__ = [
    "move_arrow",
    "move_cursor",
    "move_end",
    "move_home",
    "move_page",
    "page",
]
