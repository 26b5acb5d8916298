"""Ordered row storage with dirty tracking."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from kilo_engine.runtime import telemetry

from .row import Row


class RowStore:
    """Owns the document rows and counts mutations since the last save.

    Every public mutator is atomic: it either changes exactly one logical thing
    and bumps ``dirty`` once, or it is a no-op and returns ``False``.
    """

    def __init__(self, *, tab_stop: int = 8, name: str = "document") -> None:
        self.tab_stop = tab_stop
        self.name = name
        self.dirty = 0
        self._rows: List[Row] = []

    @classmethod
    def from_lines(
        cls, lines: Iterable[bytes], *, tab_stop: int = 8, name: str = "document"
    ) -> "RowStore":
        store = cls(tab_stop=tab_stop, name=name)
        store.load_lines(lines)
        return store

    def load_lines(self, lines: Iterable[bytes]) -> None:
        """Replace the document with ``lines``; a fresh load is clean."""

        self._rows = [Row(line, tab_stop=self.tab_stop) for line in lines]
        self.dirty = 0

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> Row:
        return self._rows[index]

    def row(self, at: int) -> Optional[Row]:
        if 0 <= at < len(self._rows):
            return self._rows[at]
        return None

    def lines(self) -> tuple[bytes, ...]:
        return tuple(row.content for row in self._rows)

    def mark_clean(self) -> None:
        self.dirty = 0

    @contextmanager
    def _mutation(self, label: str, **metadata: object) -> Iterator[None]:
        with telemetry.span(
            f"rows::{label}",
            component="rows",
            metadata={"store": self.name, **metadata},
        ):
            yield
        self.dirty += 1

    def insert_row(self, at: int, text: bytes = b"") -> int:
        """Insert ``text`` as a new row at ``at`` (clamped); return its index."""

        at = max(0, min(at, len(self._rows)))
        with self._mutation("insert_row", at=at):
            self._rows.insert(at, Row(text, tab_stop=self.tab_stop))
        return at

    def delete_row(self, at: int) -> bool:
        if at < 0 or at >= len(self._rows):
            return False
        with self._mutation("delete_row", at=at):
            del self._rows[at]
        return True

    def insert_char(self, row: int, at: int, byte: int) -> bool:
        target = self.row(row)
        if target is None:
            return False
        with self._mutation("insert_char", row=row, at=at):
            target.insert(at, byte)
        return True

    def delete_char(self, row: int, at: int) -> bool:
        target = self.row(row)
        if target is None or at < 0 or at >= target.size:
            return False
        with self._mutation("delete_char", row=row, at=at):
            target.delete(at)
        return True

    def append_string(self, row: int, data: bytes) -> bool:
        target = self.row(row)
        if target is None:
            return False
        with self._mutation("append_string", row=row, length=len(data)):
            target.append(data)
        return True

    def split(self, row: int, at: int) -> bool:
        """Break row ``row`` at ``at``; the tail becomes row ``row + 1``."""

        target = self.row(row)
        if target is None:
            return False
        with self._mutation("split", row=row, at=at):
            tail = target.truncate(at)
            self._rows.insert(row + 1, Row(tail, tab_stop=self.tab_stop))
        return True

    def merge_into_previous(self, at: int) -> Optional[int]:
        """Append row ``at`` onto row ``at - 1`` and remove it.

        Returns the previous row's length before the merge, which is where the
        cursor lands, or ``None`` when there is no previous row.
        """

        if at <= 0 or at >= len(self._rows):
            return None
        previous = self._rows[at - 1]
        landing = previous.size
        with self._mutation("merge", at=at):
            previous.append(self._rows[at].content)
            del self._rows[at]
        return landing

    def to_buffer(self) -> bytes:
        return b"".join(row.content + b"\n" for row in self._rows)


__all__ = ["RowStore"]
