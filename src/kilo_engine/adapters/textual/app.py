"""Executable Textual app that hosts the editor engine."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.style import Style
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use kilo_engine.adapters.textual.app"
    ) from exc

from kilo_engine.editor.controller import EditorController
from kilo_engine.errors import PersistenceError
from kilo_engine.screen.compositor import Frame

from .controller import TextualEditorAdapter, TextualUIHooks, open_editor

CURSOR_STYLE = Style(reverse=True)
STATUS_STYLE = Style(reverse=True)


def frame_to_text(frame: Frame) -> Text:
    """Render a frame as rich text, highlighting the cursor cell."""

    lines = frame.text_lines()
    status_index = len(frame.rows)
    cursor_row, cursor_col = frame.cursor
    text = Text(no_wrap=True, overflow="crop")
    for index, line in enumerate(lines):
        if index == status_index:
            text.append(line, style=STATUS_STYLE)
        elif index == cursor_row:
            padded = line.ljust(cursor_col + 1)
            text.append(padded[:cursor_col])
            text.append(padded[cursor_col], style=CURSOR_STYLE)
            text.append(padded[cursor_col + 1 :])
        else:
            text.append(line)
        if index < len(lines) - 1:
            text.append("\n")
    return text


class KiloEngineApp(App[None]):
    """Full-screen Textual host for a single document."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #frame-view {
        height: 1fr;
        padding: 0;
    }
    """

    def __init__(self, path: Optional[str] = None) -> None:
        super().__init__()
        self._path = path
        self.adapter: TextualEditorAdapter | None = None
        self._view: Static | None = None

    def compose(self) -> ComposeResult:
        self._view = Static("", id="frame-view")
        yield self._view

    def on_mount(self) -> None:
        editor = self._start_editor(self.size.height, self.size.width)
        if editor is None:
            return
        editor.greet()
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            request_quit=self.exit,
            log=self.log.debug,
        )
        self.adapter = TextualEditorAdapter(editor, hooks)
        # Expire transient messages even while no key is pressed.
        self.set_interval(1.0, self._tick)

    def _start_editor(self, rows: int, cols: int) -> Optional[EditorController]:
        try:
            return open_editor(self._path, screen_rows=rows, screen_cols=cols)
        except PersistenceError as exc:
            self.exit(return_code=1, message=f"kilo-engine: {exc}")
            return None

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.height, event.size.width)

    def on_key(self, event: events.Key) -> None:
        if self.adapter is None:
            return
        event.stop()
        event.prevent_default()
        self.adapter.handle_textual_key(event.key, character=event.character)

    async def action_quit(self) -> None:
        # Ctrl+Q belongs to the editor, which asks to exit once it is safe.
        if self.adapter is not None:
            self.adapter.handle_textual_key("ctrl+q")

    def _tick(self) -> None:
        if self.adapter:
            self.adapter.refresh()

    def _update_frame(self, frame: Frame) -> None:
        if self._view is not None:
            self._view.update(frame_to_text(frame))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the editor inside Textual.")
    parser.add_argument("path", nargs="?", help="file to open")
    args = parser.parse_args(argv)
    app = KiloEngineApp(args.path)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
