"""Row storage, coordinate mapping and cursor state."""

from .coords import cx_to_rx, rx_to_cx
from .row import Row, render_bytes
from .state import Cursor
from .store import RowStore

__all__ = [
    "Cursor",
    "Row",
    "RowStore",
    "cx_to_rx",
    "render_bytes",
    "rx_to_cx",
]
