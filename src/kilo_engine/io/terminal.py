"""Raw-mode terminal control, size queries and byte-level I/O."""

from __future__ import annotations

import errno
import fcntl
import os
import re
import struct
import termios
from typing import List, Optional, Tuple

from kilo_engine.errors import TerminalError
from kilo_engine.runtime import telemetry

CURSOR_FAR_CORNER = b"\x1b[999C\x1b[999B"
CURSOR_REPORT_QUERY = b"\x1b[6n"
CURSOR_REPORT = re.compile(rb"\x1b\[(\d+);(\d+)R")

# termios attribute list indexes
IFLAG, OFLAG, CFLAG, LFLAG, CC = 0, 1, 2, 3, 6


def raw_attributes(original: List, read_timeout: float = 0.1) -> List:
    """Return a copy of ``original`` with raw input/output flags applied.

    ``read_timeout`` seconds becomes VTIME, clamped to 1..255 deciseconds.
    """

    raw = [list(item) if isinstance(item, list) else item for item in original]
    raw[IFLAG] &= ~(
        termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
    )
    raw[OFLAG] &= ~termios.OPOST
    raw[CFLAG] |= termios.CS8
    raw[LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    raw[CC][termios.VMIN] = 0
    raw[CC][termios.VTIME] = max(1, min(255, round(read_timeout * 10)))
    return raw


class RawMode:
    """Context manager putting ``fd`` in raw mode and restoring it on exit."""

    def __init__(self, fd: int, *, read_timeout: float = 0.1) -> None:
        self.fd = fd
        self.read_timeout = read_timeout
        self._original: Optional[List] = None

    def __enter__(self) -> "RawMode":
        try:
            self._original = termios.tcgetattr(self.fd)
            raw = raw_attributes(self._original, self.read_timeout)
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        except termios.error as exc:
            raise TerminalError("tcsetattr", cause=exc) from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore()
        return False

    def restore(self) -> None:
        if self._original is None:
            return
        original, self._original = self._original, None
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, original)
        except termios.error as exc:
            raise TerminalError("tcsetattr", cause=exc) from exc


class FdByteSource:
    """Reads single bytes; an empty read (VTIME expiry) is a timeout."""

    def __init__(self, fd: int) -> None:
        self.fd = fd

    def read_byte(self) -> Optional[int]:
        try:
            data = os.read(self.fd, 1)
        except (BlockingIOError, InterruptedError):
            return None
        except OSError as exc:
            if exc.errno == errno.EAGAIN:
                return None
            raise TerminalError("read", cause=exc) from exc
        if not data:
            return None
        return data[0]


def _write_all(fd: int, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        view = view[written:]


def _query_ioctl(fd: int) -> Optional[Tuple[int, int]]:
    try:
        packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
    except OSError:
        return None
    rows, cols, _, _ = struct.unpack("HHHH", packed)
    if cols == 0:
        return None
    return rows, cols


def cursor_position(source: FdByteSource, fd_out: int) -> Tuple[int, int]:
    """Ask the terminal where the cursor is (1-based rows, cols)."""

    _write_all(fd_out, CURSOR_REPORT_QUERY)
    reply = bytearray()
    while len(reply) < 32:
        byte = source.read_byte()
        if byte is None:
            break
        reply.append(byte)
        if byte == ord("R"):
            break
    match = CURSOR_REPORT.match(bytes(reply))
    if match is None:
        raise TerminalError("getCursorPosition")
    return int(match.group(1)), int(match.group(2))


def get_window_size(fd_in: int, fd_out: int) -> Tuple[int, int]:
    """Return ``(rows, cols)``, probing with the cursor if ioctl is unusable."""

    size = _query_ioctl(fd_out)
    if size is not None:
        return size
    telemetry.record_event("terminal.size_probe", level="debug")
    _write_all(fd_out, CURSOR_FAR_CORNER)
    return cursor_position(FdByteSource(fd_in), fd_out)


class Terminal:
    """Bundle of the terminal operations the editor consumes."""

    def __init__(self, fd_in: int, fd_out: int, *, read_timeout: float = 0.1) -> None:
        self.fd_in = fd_in
        self.fd_out = fd_out
        self.raw_mode = RawMode(fd_in, read_timeout=read_timeout)
        self.source = FdByteSource(fd_in)

    def size(self) -> Tuple[int, int]:
        return get_window_size(self.fd_in, self.fd_out)

    def write(self, frame: bytes) -> None:
        try:
            _write_all(self.fd_out, frame)
        except OSError as exc:
            raise TerminalError("write", cause=exc) from exc

    def clear(self) -> None:
        self.write(b"\x1b[2J\x1b[H")


__all__ = [
    "FdByteSource",
    "RawMode",
    "Terminal",
    "cursor_position",
    "get_window_size",
    "raw_attributes",
]
