"""Raw byte to key event decoding."""

from .decoder import ByteSource, InputDecoder, IterByteSource
from .keys import ESC, Key, KeyEvent, ctrl_key

__all__ = [
    "ByteSource",
    "ESC",
    "InputDecoder",
    "IterByteSource",
    "Key",
    "KeyEvent",
    "ctrl_key",
]
