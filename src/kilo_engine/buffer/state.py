"""Cursor state tied to a RowStore."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class Cursor:
    """Logical cursor: ``cy`` may equal the row count (append position)."""

    cx: int = 0
    cy: int = 0

    def set(self, cx: int, cy: int) -> None:
        self.cx = cx
        self.cy = cy

    def as_tuple(self) -> Tuple[int, int]:
        return (self.cx, self.cy)
