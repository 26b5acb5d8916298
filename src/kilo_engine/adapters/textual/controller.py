"""Adapter translating Textual key names into engine key events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from kilo_engine.editor.controller import EditorController
from kilo_engine.runtime.config import EditorConfig
from kilo_engine.input.keys import TAB_BYTE, Key, KeyEvent
from kilo_engine.modes import ModeResult
from kilo_engine.screen.compositor import Frame

TEXTUAL_KEYS: Dict[str, Key] = {
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "home": Key.HOME,
    "end": Key.END,
    "pageup": Key.PAGE_UP,
    "pagedown": Key.PAGE_DOWN,
    "delete": Key.DELETE,
    "escape": Key.ESCAPE,
    "enter": Key.ENTER,
    "backspace": Key.BACKSPACE,
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def translate_key(key: str, character: Optional[str] = None) -> List[KeyEvent]:
    """Map one Textual key to zero or more engine events.

    Non-ASCII characters become one literal event per UTF-8 byte, matching
    what a raw terminal would deliver.
    """

    name = key.lower()
    if name in TEXTUAL_KEYS:
        return [KeyEvent.named(TEXTUAL_KEYS[name])]
    if name == "tab":
        return [KeyEvent.literal(TAB_BYTE)]
    if name.startswith("ctrl+"):
        letter = name[len("ctrl+") :]
        if len(letter) == 1 and letter.isalpha():
            return [KeyEvent.ctrl(letter)]
        return []
    if character:
        return [KeyEvent.literal(byte) for byte in character.encode("utf-8")]
    return []


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    request_quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds Textual key events to an ``EditorController`` and repaints."""

    def __init__(self, editor: EditorController, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        editor.context.bus.subscribe("editor.quit", lambda _payload: hooks.request_quit())
        self.refresh()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> List[ModeResult]:
        events = translate_key(key, character)
        self.hooks.log(f"key -> {key!r} events={[e.token for e in events]}")
        results = self.editor.process_keys(events)
        for result in results:
            self.hooks.update_status(result.message or result.status)
            self.hooks.log(
                f"result <- status={result.status!r} mode={self.editor.mode!r}"
            )
        self.refresh()
        return results

    def resize(self, rows: int, cols: int) -> None:
        self.editor.state.resize(rows, cols)
        self.refresh()

    def refresh(self) -> Frame:
        frame = self.editor.frame()
        self.hooks.update_frame(frame)
        return frame


def open_editor(
    path: Optional[str],
    *,
    screen_rows: int,
    screen_cols: int,
    config: Optional[EditorConfig] = None,
) -> EditorController:
    """Editor for ``path``, or an empty unnamed one; load errors propagate."""

    if path:
        return EditorController.open(
            path, screen_rows=screen_rows, screen_cols=screen_cols, config=config
        )
    return EditorController.create(
        screen_rows=screen_rows, screen_cols=screen_cols, config=config
    )


__all__ = [
    "TEXTUAL_KEYS",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "open_editor",
    "translate_key",
]
