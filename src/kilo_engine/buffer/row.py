"""Single document line with its tab-expanded display form."""

from __future__ import annotations

from typing import Optional

TAB = 0x09
SPACE = b" "


def render_bytes(content: bytes, tab_stop: int = 8) -> bytes:
    """Expand every tab in ``content`` to spaces up to the next tab stop."""

    if TAB not in content:
        return bytes(content)
    out = bytearray()
    for byte in content:
        if byte == TAB:
            out += SPACE
            while len(out) % tab_stop:
                out += SPACE
        else:
            out.append(byte)
    return bytes(out)


class Row:
    """Mutable line content plus a cached rendering.

    ``rendered`` is derived on first access after a change and dropped by every
    mutator, so no caller can observe a rendering older than ``content``.
    """

    __slots__ = ("_content", "_rendered", "tab_stop")

    def __init__(self, content: bytes = b"", *, tab_stop: int = 8) -> None:
        self._content = bytearray(content)
        self._rendered: Optional[bytes] = None
        self.tab_stop = tab_stop

    def __repr__(self) -> str:
        return f"Row({bytes(self._content)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self._content == other._content
        return NotImplemented

    @property
    def content(self) -> bytes:
        return bytes(self._content)

    @property
    def rendered(self) -> bytes:
        if self._rendered is None:
            self._rendered = render_bytes(self._content, self.tab_stop)
        return self._rendered

    @property
    def size(self) -> int:
        return len(self._content)

    @property
    def rsize(self) -> int:
        return len(self.rendered)

    def insert(self, at: int, byte: int) -> None:
        at = max(0, min(at, len(self._content)))
        self._content.insert(at, byte)
        self._rendered = None

    def delete(self, at: int) -> bool:
        if at < 0 or at >= len(self._content):
            return False
        del self._content[at]
        self._rendered = None
        return True

    def append(self, data: bytes) -> None:
        self._content += data
        self._rendered = None

    def truncate(self, at: int) -> bytes:
        """Cut the row at ``at`` and return the removed tail."""

        at = max(0, min(at, len(self._content)))
        tail = bytes(self._content[at:])
        del self._content[at:]
        self._rendered = None
        return tail


__all__ = ["Row", "render_bytes"]
