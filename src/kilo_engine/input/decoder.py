"""Escape-sequence aware decoder turning raw bytes into key events."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator, Optional, Protocol

from kilo_engine.runtime import telemetry

from .keys import BACKSPACE_BYTE, ENTER_BYTE, ESC, Key, KeyEvent

CSI_LETTERS = {
    ord("A"): Key.UP,
    ord("B"): Key.DOWN,
    ord("C"): Key.RIGHT,
    ord("D"): Key.LEFT,
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}

CSI_TILDE_DIGITS = {
    ord("1"): Key.HOME,
    ord("3"): Key.DELETE,
    ord("4"): Key.END,
    ord("5"): Key.PAGE_UP,
    ord("6"): Key.PAGE_DOWN,
    ord("7"): Key.HOME,
    ord("8"): Key.END,
}

SS3_LETTERS = {
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}


class ByteSource(Protocol):
    """Anything that yields one byte per call, or ``None`` on read timeout."""

    def read_byte(self) -> Optional[int]:
        ...


class IterByteSource:
    """In-memory source; reports a timeout once its bytes run out."""

    def __init__(self, data: Iterable[int] = b"") -> None:
        self._pending: Deque[int] = deque(data)

    def feed(self, data: Iterable[int]) -> None:
        self._pending.extend(data)

    def read_byte(self) -> Optional[int]:
        if not self._pending:
            return None
        return self._pending.popleft()

    def __len__(self) -> int:
        return len(self._pending)


class InputDecoder:
    """Reads one key event at a time from a ``ByteSource``.

    Only the first byte of a key is retried on timeout. Continuation bytes of an
    escape sequence get a single chance each; anything missing or unknown
    degrades to a bare Escape.
    """

    def __init__(self, source: ByteSource, *, max_idle_reads: Optional[int] = None):
        self.source = source
        self.max_idle_reads = max_idle_reads

    def next_key(self) -> Optional[KeyEvent]:
        """Block (retrying timeouts) until a key arrives.

        Returns ``None`` only when ``max_idle_reads`` is set and exhausted.
        """

        idle = 0
        while True:
            first = self.source.read_byte()
            if first is not None:
                return self._decode_from(first)
            idle += 1
            if self.max_idle_reads is not None and idle >= self.max_idle_reads:
                return None

    def __iter__(self) -> Iterator[KeyEvent]:
        while True:
            event = self.next_key()
            if event is None:
                return
            yield event

    def _decode_from(self, first: int) -> KeyEvent:
        if first == ESC:
            return self._decode_escape()
        if first == BACKSPACE_BYTE:
            return KeyEvent.named(Key.BACKSPACE)
        if first == ENTER_BYTE:
            return KeyEvent.named(Key.ENTER)
        return KeyEvent.literal(first)

    def _decode_escape(self) -> KeyEvent:
        lead = self.source.read_byte()
        if lead is None:
            return KeyEvent.named(Key.ESCAPE)
        final = self.source.read_byte()
        if final is None:
            return self._fallback(lead)

        if lead == ord("["):
            if ord("0") <= final <= ord("9"):
                tilde = self.source.read_byte()
                if tilde == ord("~") and final in CSI_TILDE_DIGITS:
                    return KeyEvent.named(CSI_TILDE_DIGITS[final])
                return self._fallback(lead, final, tilde)
            if final in CSI_LETTERS:
                return KeyEvent.named(CSI_LETTERS[final])
        elif lead == ord("O") and final in SS3_LETTERS:
            return KeyEvent.named(SS3_LETTERS[final])
        return self._fallback(lead, final)

    def _fallback(self, *seen: Optional[int]) -> KeyEvent:
        telemetry.record_event(
            "input.escape_fallback",
            level="debug",
            data={"sequence": bytes(b for b in seen if b is not None)},
        )
        return KeyEvent.named(Key.ESCAPE)


def decode(data: bytes) -> list[KeyEvent]:
    """Decode a complete chunk of input into key events."""

    return list(InputDecoder(IterByteSource(data), max_idle_reads=1))


__all__ = ["ByteSource", "InputDecoder", "IterByteSource", "decode"]
