"""Editing verbs bound to keys by the default keymap."""

from .commands import (
    confirm_quit,
    find,
    noop,
    quit_editor,
    request_quit,
    save,
    write_document,
)
from .editing import (
    backspace,
    delete_backward,
    delete_forward,
    insert_byte,
    insert_char,
    insert_newline,
    newline,
)
from .motion import move_arrow, move_cursor, move_end, move_home, move_page, page

__all__ = [
    "backspace",
    "confirm_quit",
    "delete_backward",
    "delete_forward",
    "find",
    "insert_byte",
    "insert_char",
    "insert_newline",
    "move_arrow",
    "move_cursor",
    "move_end",
    "move_home",
    "move_page",
    "newline",
    "noop",
    "page",
    "quit_editor",
    "request_quit",
    "save",
    "write_document",
]
