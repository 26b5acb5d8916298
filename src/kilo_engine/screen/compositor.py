"""Frame composition: text rows, status bar, message bar, cursor."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from kilo_engine.buffer import Cursor, RowStore
from kilo_engine.runtime.config import EditorConfig

from .messages import StatusMessage
from .viewport import Viewport

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
CLEAR_SCREEN = b"\x1b[2J"
REVERSE_VIDEO = b"\x1b[7m"
RESET_ATTRS = b"\x1b[m"
LINE_BREAK = b"\r\n"


class FrameSource(Protocol):
    """State the compositor reads; ``EditorState`` satisfies it."""

    store: RowStore
    viewport: Viewport
    cursor: Cursor
    rx: int
    filename: Optional[str]
    message: StatusMessage


@dataclass(slots=True)
class Frame:
    """A composed screen, independent of how it is written out."""

    rows: List[bytes]
    status: bytes
    message: bytes
    cursor: Tuple[int, int]

    def text_lines(self) -> List[str]:
        return [
            line.decode("utf-8", errors="replace")
            for line in (*self.rows, self.status, self.message)
        ]


def cursor_to(row: int, col: int) -> bytes:
    """Cursor positioning directive for 0-based screen coordinates."""

    return b"\x1b[%d;%dH" % (row + 1, col + 1)


class ScreenCompositor:
    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        self.config = config or EditorConfig()

    def build(self, source: FrameSource, now: Optional[float] = None) -> Frame:
        now = time.monotonic() if now is None else now
        viewport = source.viewport
        return Frame(
            rows=self._content_rows(source),
            status=self._status_bar(source),
            message=self._message_bar(source, now),
            cursor=(
                source.cursor.cy - viewport.row_offset,
                source.rx - viewport.col_offset,
            ),
        )

    def encode(self, frame: Frame) -> bytes:
        """Serialize ``frame`` into the single buffer written to the terminal."""

        out = bytearray()
        out += HIDE_CURSOR
        out += CURSOR_HOME
        for line in frame.rows:
            out += line
            out += CLEAR_LINE
            out += LINE_BREAK
        out += REVERSE_VIDEO
        out += frame.status
        out += RESET_ATTRS
        out += LINE_BREAK
        out += CLEAR_LINE
        out += frame.message
        out += cursor_to(*frame.cursor)
        out += SHOW_CURSOR
        return bytes(out)

    def compose(self, source: FrameSource, now: Optional[float] = None) -> bytes:
        return self.encode(self.build(source, now))

    def _content_rows(self, source: FrameSource) -> List[bytes]:
        store = source.store
        viewport = source.viewport
        filler = self.config.filler.encode()
        lines: List[bytes] = []
        for y in range(viewport.rows):
            filerow = y + viewport.row_offset
            row = store.row(filerow)
            if row is not None:
                start = viewport.col_offset
                lines.append(row.rendered[start : start + viewport.cols])
            elif store.row_count == 0 and y == viewport.rows // 3:
                lines.append(self._welcome(viewport.cols))
            else:
                lines.append(filler)
        return lines

    def _welcome(self, cols: int) -> bytes:
        banner = f"Kilo editor -- version {self.config.version}".encode()[:cols]
        padding = (cols - len(banner)) // 2
        line = bytearray()
        if padding:
            line += self.config.filler.encode()
            padding -= 1
        line += b" " * padding
        line += banner
        return bytes(line)

    def _status_bar(self, source: FrameSource) -> bytes:
        cols = source.viewport.cols
        store = source.store
        name = (source.filename or "[No Name]")[: self.config.status_name_width]
        modified = " (modified)" if store.dirty else ""
        left = f"{name} - {store.row_count} lines{modified}".encode()[:cols]
        right = f"{source.cursor.cy + 1}/{store.row_count}".encode()
        gap = cols - len(left)
        if gap >= len(right):
            return left + b" " * (gap - len(right)) + right
        return left + b" " * gap

    def _message_bar(self, source: FrameSource, now: float) -> bytes:
        text = source.message.visible(now, self.config.message_timeout)
        return text.encode()[: source.viewport.cols]


__all__ = [
    "CLEAR_SCREEN",
    "CURSOR_HOME",
    "Frame",
    "FrameSource",
    "ScreenCompositor",
    "cursor_to",
]
