"""Save, find and quit commands."""

from __future__ import annotations

import os
from typing import Optional

from kilo_engine.editor.state import EditorState
from kilo_engine.errors import PersistenceError
from kilo_engine.input.keys import KeyEvent
from kilo_engine.io.persistence import save_buffer
from kilo_engine.modes.base_mode import ModeContext, ModeResult
from kilo_engine.modes.prompt_mode import PromptRequest, open_prompt
from kilo_engine.runtime import telemetry
from kilo_engine.search import SearchSession

SAVE_AS_PROMPT = "Save as: {} (ESC to cancel)"
SEARCH_PROMPT = "Search: {} (Use ESC/Arrows/Enter)"
QUIT_WARNING = (
    "WARNING!!! File has unsaved changes. Press Ctrl-Q {} more times to quit."
)


def write_document(state: EditorState) -> bool:
    """Persist the store to ``state.filename``; report the outcome in the bar."""

    if state.filename is None:
        raise ValueError("document has no filename")
    try:
        written = save_buffer(state.filename, state.store.to_buffer())
    except PersistenceError as exc:
        state.set_message(f"Can't save! I/O error: {exc.reason}")
        return False
    state.store.mark_clean()
    state.set_message(f"{written} bytes written to disk")
    return True


def save(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    state = context.state
    if state.filename is not None:
        saved = write_document(state)
        return ModeResult(consumed=True, status="saved" if saved else "save_failed")

    def finish(value: Optional[bytes]) -> None:
        if value is None:
            state.set_message("Save aborted")
            return
        state.filename = os.fsdecode(value)
        state.store.name = state.filename
        write_document(state)

    return open_prompt(context, PromptRequest(template=SAVE_AS_PROMPT, on_done=finish))


def find(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    state = context.state
    session = SearchSession(state.store, state.cursor, state.viewport)
    context.extras["search_session"] = session

    def finish(value: Optional[bytes]) -> None:
        session.finish(value)
        context.extras.pop("search_session", None)

    return open_prompt(
        context,
        PromptRequest(template=SEARCH_PROMPT, on_key=session.on_key, on_done=finish),
    )


def quit_editor(context: ModeContext, event: KeyEvent) -> ModeResult:
    del event
    context.state.running = False
    context.bus.emit("editor.quit", None)
    return ModeResult(consumed=True, status="quit")


def request_quit(context: ModeContext, event: KeyEvent) -> ModeResult:
    """Quit press on a dirty document: warn and start the countdown."""

    state = context.state
    state.reset_quit_counter()
    if state.quit_remaining <= 0:
        return quit_editor(context, event)
    _warn(state)
    return ModeResult(consumed=True, switch_to="quit_confirm", status="quit_pending")


def confirm_quit(context: ModeContext, event: KeyEvent) -> ModeResult:
    state = context.state
    if state.quit_remaining <= 0:
        return quit_editor(context, event)
    _warn(state)
    return ModeResult(consumed=True, status="quit_pending")


def _warn(state: EditorState) -> None:
    state.set_message(QUIT_WARNING.format(state.quit_remaining))
    telemetry.record_event(
        "editor.quit_pending",
        data={"remaining": state.quit_remaining, "dirty": state.store.dirty},
    )
    state.quit_remaining -= 1


def noop(context: ModeContext, event: KeyEvent) -> ModeResult:
    del context, event
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "QUIT_WARNING",
    "SAVE_AS_PROMPT",
    "SEARCH_PROMPT",
    "confirm_quit",
    "find",
    "noop",
    "quit_editor",
    "request_quit",
    "save",
    "write_document",
]
