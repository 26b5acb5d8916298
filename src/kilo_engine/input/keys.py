"""Key event model shared by the decoder, keymaps and modes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, cast

ESC = 0x1B
ENTER_BYTE = 0x0D
TAB_BYTE = 0x09
BACKSPACE_BYTE = 0x7F


def ctrl_key(letter: str) -> int:
    """Byte produced by Ctrl+``letter`` in raw mode."""

    if len(letter) != 1:
        raise ValueError("ctrl_key expects a single character")
    return ord(letter) & 0x1F


class Key(str, Enum):
    """Named keys that do not map to a single literal byte."""

    ESCAPE = "escape"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


ARROWS = frozenset({Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT})


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """One decoded keypress: either a named ``key`` or a literal ``byte``."""

    key: Optional[Key] = None
    byte: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.key is None) == (self.byte is None):
            raise ValueError("KeyEvent needs exactly one of key or byte")
        if self.byte is not None and not 0 <= self.byte <= 0xFF:
            raise ValueError(f"byte out of range: {self.byte}")

    @classmethod
    def literal(cls, byte: int) -> "KeyEvent":
        return cls(byte=byte)

    @classmethod
    def named(cls, key: Key) -> "KeyEvent":
        return cls(key=key)

    @classmethod
    def ctrl(cls, letter: str) -> "KeyEvent":
        return cls(byte=ctrl_key(letter))

    def is_key(self, key: Key) -> bool:
        if self.key is key:
            return True
        if key is Key.ENTER:
            return self.byte == ENTER_BYTE
        if key is Key.BACKSPACE:
            return self.byte == BACKSPACE_BYTE
        return False

    @property
    def is_control(self) -> bool:
        return self.byte is not None and (self.byte < 0x20 or self.byte == 0x7F)

    @property
    def is_printable(self) -> bool:
        return self.byte is not None and 0x20 <= self.byte < 0x7F

    @property
    def ctrl_letter(self) -> Optional[str]:
        if self.byte is not None and 1 <= self.byte <= 26:
            return chr(self.byte + 0x60)
        return None

    @property
    def token(self) -> str:
        """Name used to look the event up in a keymap."""

        if self.key is not None:
            return self.key.value
        byte = cast(int, self.byte)
        if byte == ENTER_BYTE:
            return Key.ENTER.value
        if byte == BACKSPACE_BYTE:
            return Key.BACKSPACE.value
        if byte == TAB_BYTE:
            return "tab"
        letter = self.ctrl_letter
        if letter is not None:
            return f"ctrl+{letter}"
        if self.is_printable:
            return chr(byte)
        return f"byte+{byte}"

    def __str__(self) -> str:
        return self.token


__all__ = [
    "ARROWS",
    "BACKSPACE_BYTE",
    "ENTER_BYTE",
    "ESC",
    "Key",
    "KeyEvent",
    "TAB_BYTE",
    "ctrl_key",
]
