"""The single owned state object every mode and action works on."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from kilo_engine.buffer import Cursor, Row, RowStore
from kilo_engine.runtime.config import EditorConfig
from kilo_engine.screen.messages import StatusMessage
from kilo_engine.screen.viewport import Viewport, scroll

RESERVED_LINES = 2  # status bar + message bar


@dataclass
class EditorState:
    store: RowStore
    viewport: Viewport
    config: EditorConfig = field(default_factory=EditorConfig)
    cursor: Cursor = field(default_factory=Cursor)
    rx: int = 0
    filename: Optional[str] = None
    message: StatusMessage = field(default_factory=StatusMessage)
    quit_remaining: int = -1
    running: bool = True

    def __post_init__(self) -> None:
        if self.quit_remaining < 0:
            self.quit_remaining = self.config.quit_times

    @classmethod
    def create(
        cls,
        *,
        screen_rows: int,
        screen_cols: int,
        lines: Iterable[bytes] = (),
        filename: Optional[str] = None,
        config: Optional[EditorConfig] = None,
    ) -> "EditorState":
        """Build state for a terminal of ``screen_rows`` x ``screen_cols``."""

        config = config or EditorConfig()
        store = RowStore.from_lines(
            lines, tab_stop=config.tab_stop, name=filename or "[No Name]"
        )
        viewport = Viewport(
            rows=max(1, screen_rows - RESERVED_LINES), cols=max(1, screen_cols)
        )
        return cls(store=store, viewport=viewport, config=config, filename=filename)

    @property
    def dirty(self) -> bool:
        return self.store.dirty > 0

    def current_row(self) -> Optional[Row]:
        return self.store.row(self.cursor.cy)

    def set_message(self, text: str, now: Optional[float] = None) -> None:
        self.message.set(text, now)

    def reset_quit_counter(self) -> None:
        self.quit_remaining = self.config.quit_times

    def resize(self, screen_rows: int, screen_cols: int) -> None:
        self.viewport.resize(screen_rows - RESERVED_LINES, screen_cols)

    def scroll(self) -> int:
        """Refresh ``rx`` from the cursor and bring it into view."""

        self.rx = scroll(self.viewport, self.store, self.cursor.cx, self.cursor.cy)
        return self.rx


__all__ = ["EditorState", "RESERVED_LINES"]
