"""Top-level editor: render, read one key, dispatch, repeat."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from kilo_engine.errors import PersistenceError
from kilo_engine.input.decoder import InputDecoder
from kilo_engine.input.keys import KeyEvent
from kilo_engine.io.persistence import load_lines
from kilo_engine.keymaps import KeymapRegistry, KeymapResolver
from kilo_engine.modes import (
    EditMode,
    ModeBus,
    ModeContext,
    ModeResult,
    PromptMode,
    QuitConfirmMode,
)
from kilo_engine.modes.mode_manager import ModeManager
from kilo_engine.runtime import telemetry
from kilo_engine.runtime.config import EditorConfig
from kilo_engine.screen.compositor import Frame, ScreenCompositor

from .state import EditorState

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"


class EditorController:
    """Owns the editor state and the mode machine that mutates it."""

    def __init__(
        self,
        state: EditorState,
        *,
        compositor: Optional[ScreenCompositor] = None,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        bus: Optional[ModeBus] = None,
    ) -> None:
        self.state = state
        self.compositor = compositor or ScreenCompositor(state.config)
        self.context = ModeContext(state=state, bus=bus or ModeBus())
        self.manager = ModeManager(
            self.context,
            keymap_registry=keymap_registry,
            keymap_resolver=keymap_resolver,
        )
        self.manager.register_mode(EditMode)
        self.manager.register_mode(PromptMode)
        self.manager.register_mode(QuitConfirmMode)

    @classmethod
    def create(
        cls,
        *,
        screen_rows: int,
        screen_cols: int,
        lines: Iterable[bytes] = (),
        filename: Optional[str] = None,
        config: Optional[EditorConfig] = None,
    ) -> "EditorController":
        state = EditorState.create(
            screen_rows=screen_rows,
            screen_cols=screen_cols,
            lines=lines,
            filename=filename,
            config=config,
        )
        return cls(state)

    @classmethod
    def open(
        cls,
        path: str,
        *,
        screen_rows: int,
        screen_cols: int,
        config: Optional[EditorConfig] = None,
    ) -> "EditorController":
        """Load ``path``; a path that does not exist yet opens empty.

        Any other load failure propagates as ``PersistenceError``.
        """

        try:
            lines = load_lines(path)
        except PersistenceError as exc:
            if not exc.missing:
                raise
            lines = []
        return cls.create(
            screen_rows=screen_rows,
            screen_cols=screen_cols,
            lines=lines,
            filename=path,
            config=config,
        )

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def mode(self) -> Optional[str]:
        return self.manager.active_name

    def greet(self) -> None:
        self.state.set_message(HELP_MESSAGE)

    def process_key(self, event: KeyEvent) -> ModeResult:
        return self.manager.handle_key(event)

    def process_keys(self, events: Iterable[KeyEvent]) -> list[ModeResult]:
        results = []
        for event in events:
            if not self.state.running:
                break
            results.append(self.process_key(event))
        return results

    def frame(self, now: Optional[float] = None) -> Frame:
        self.state.scroll()
        return self.compositor.build(self.state, now)

    def refresh(self, now: Optional[float] = None) -> bytes:
        """Scroll to the cursor and compose the next terminal frame."""

        return self.compositor.encode(self.frame(now))

    def run(self, decoder: InputDecoder, write: Callable[[bytes], None]) -> None:
        """Render/read/dispatch until quit or the decoder runs dry."""

        while self.state.running:
            write(self.refresh())
            event = decoder.next_key()
            if event is None:
                break
            self.process_key(event)
        telemetry.record_event(
            "editor.exit",
            data={"dirty": self.state.store.dirty, "rows": self.state.store.row_count},
        )


__all__ = ["EditorController", "HELP_MESSAGE"]
