"""Incremental search over rendered rows with wrap-around."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from kilo_engine.buffer import Cursor, RowStore, rx_to_cx
from kilo_engine.input.keys import Key, KeyEvent
from kilo_engine.runtime import telemetry
from kilo_engine.screen.viewport import Viewport

FORWARD = 1
BACKWARD = -1


@dataclass(frozen=True, slots=True)
class SearchSnapshot:
    cx: int
    cy: int
    row_offset: int
    col_offset: int


@dataclass(frozen=True, slots=True)
class SearchHit:
    row: int
    cx: int
    rx: int


class SearchSession:
    """State for one interactive find, from prompt open to commit or abort.

    ``on_key`` is fed every keystroke together with the current query; arrow
    keys step to the next or previous hit, anything else restarts the scan
    from the top.
    """

    def __init__(self, store: RowStore, cursor: Cursor, viewport: Viewport) -> None:
        self.store = store
        self.cursor = cursor
        self.viewport = viewport
        self.snapshot = SearchSnapshot(
            cx=cursor.cx,
            cy=cursor.cy,
            row_offset=viewport.row_offset,
            col_offset=viewport.col_offset,
        )
        self.last_match: Optional[int] = None
        self.direction = FORWARD

    def reset(self) -> None:
        self.last_match = None
        self.direction = FORWARD

    def on_key(self, query: bytes, event: KeyEvent) -> Optional[SearchHit]:
        if event.is_key(Key.ENTER) or event.is_key(Key.ESCAPE):
            self.reset()
            return None

        if event.key in (Key.RIGHT, Key.DOWN):
            self.direction = FORWARD
        elif event.key in (Key.LEFT, Key.UP):
            self.direction = BACKWARD
        else:
            self.reset()

        if self.last_match is None:
            self.direction = FORWARD
        return self.step(query)

    def step(self, query: bytes) -> Optional[SearchHit]:
        """Move the cursor to the next hit in ``direction``, if any."""

        if not query:
            return None
        count = self.store.row_count
        with telemetry.span(
            "search::step",
            component="search",
            metadata={"direction": self.direction, "rows": count},
        ) as handle:
            current = -1 if self.last_match is None else self.last_match
            for _ in range(count):
                current = (current + self.direction) % count
                row = self.store[current]
                rx = row.rendered.find(query)
                if rx == -1:
                    continue
                self.last_match = current
                cx = rx_to_cx(row, rx)
                self.cursor.set(cx, current)
                # Offset past the end so the next scroll puts the hit on top.
                self.viewport.row_offset = count
                handle.add_metadata("match", current)
                return SearchHit(row=current, cx=cx, rx=rx)
            handle.add_metadata("match", "none")
            return None

    def finish(self, query: Optional[bytes]) -> None:
        """Commit (keep the cursor) or, when ``query`` is ``None``, abort."""

        if query is None:
            self.restore()
        self.reset()

    def restore(self) -> None:
        snap = self.snapshot
        self.cursor.set(snap.cx, snap.cy)
        self.viewport.row_offset = snap.row_offset
        self.viewport.col_offset = snap.col_offset


__all__ = ["BACKWARD", "FORWARD", "SearchHit", "SearchSession", "SearchSnapshot"]
