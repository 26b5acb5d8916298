"""Minimal-motion scrolling of the visible window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from kilo_engine.buffer import RowStore, cx_to_rx


@dataclass(slots=True)
class Viewport:
    """Window into the document: offsets plus the text area's size."""

    rows: int
    cols: int
    row_offset: int = 0
    col_offset: int = 0

    def follow(self, cy: int, rx: int) -> None:
        """Shift the offsets just enough for ``(cy, rx)`` to be visible."""

        if cy < self.row_offset:
            self.row_offset = cy
        if cy >= self.row_offset + self.rows:
            self.row_offset = cy - self.rows + 1
        if rx < self.col_offset:
            self.col_offset = rx
        if rx >= self.col_offset + self.cols:
            self.col_offset = rx - self.cols + 1

    def resize(self, rows: int, cols: int) -> None:
        self.rows = max(1, rows)
        self.cols = max(1, cols)

    def snapshot(self) -> Tuple[int, int]:
        return (self.row_offset, self.col_offset)

    def restore(self, offsets: Tuple[int, int]) -> None:
        self.row_offset, self.col_offset = offsets

    def contains(self, cy: int, rx: int) -> bool:
        return (
            self.row_offset <= cy < self.row_offset + self.rows
            and self.col_offset <= rx < self.col_offset + self.cols
        )


def scroll(viewport: Viewport, store: RowStore, cx: int, cy: int) -> int:
    """Recompute ``rx`` for the cursor, follow it and return ``rx``."""

    row = store.row(cy)
    rx = cx_to_rx(row, cx) if row is not None else 0
    viewport.follow(cy, rx)
    return rx


__all__ = ["Viewport", "scroll"]
