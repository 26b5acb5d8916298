"""Conversions between logical (``cx``) and rendered (``rx``) columns."""

from __future__ import annotations

from .row import TAB, Row


def cx_to_rx(row: Row, cx: int) -> int:
    tab_stop = row.tab_stop
    rx = 0
    for byte in row.content[: max(0, cx)]:
        if byte == TAB:
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


def rx_to_cx(row: Row, rx: int) -> int:
    """Return the logical column whose rendering covers ``rx``.

    A target past the end of the rendering clamps to the row length.
    """

    tab_stop = row.tab_stop
    current = 0
    content = row.content
    for cx, byte in enumerate(content):
        if byte == TAB:
            current += (tab_stop - 1) - (current % tab_stop)
        current += 1
        if current > rx:
            return cx
    return len(content)


__all__ = ["cx_to_rx", "rx_to_cx"]
