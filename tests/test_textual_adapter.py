from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from kilo_engine.adapters.textual import (
    TextualEditorAdapter,
    TextualUIHooks,
    open_editor,
    translate_key,
)
from kilo_engine.editor.controller import EditorController
from kilo_engine.errors import PersistenceError
from kilo_engine.input import Key, KeyEvent
from kilo_engine.screen import Frame


def make_editor(*lines: bytes) -> EditorController:
    return EditorController.create(screen_rows=8, screen_cols=30, lines=lines)


def test_translate_named_and_control_keys() -> None:
    assert translate_key("pageup") == [KeyEvent.named(Key.PAGE_UP)]
    assert translate_key("escape") == [KeyEvent.named(Key.ESCAPE)]
    assert translate_key("tab") == [KeyEvent.literal(9)]
    assert translate_key("ctrl+q") == [KeyEvent.literal(0x11)]
    assert translate_key("ctrl+shift+up") == []


def test_translate_characters_to_bytes() -> None:
    assert translate_key("a", "a") == [KeyEvent.literal(ord("a"))]
    assert translate_key("eacute", "é") == [KeyEvent.literal(0xC3), KeyEvent.literal(0xA9)]
    assert translate_key("f5") == []


def test_adapter_updates_frame_and_status() -> None:
    editor = make_editor(b"abc")
    frames: List[Frame] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_frame=frames.append,
        update_status=statuses.append,
    )
    adapter = TextualEditorAdapter(editor, hooks)

    adapter.handle_textual_key("x", character="x")

    assert len(frames) == 2
    assert frames[-1].rows[0] == b"xabc"
    assert frames[-1].cursor == (0, 1)
    assert statuses == ["insert"]


def test_adapter_requests_quit_from_engine() -> None:
    editor = make_editor()
    quits: List[bool] = []
    hooks = TextualUIHooks(update_frame=lambda frame: None, request_quit=lambda: quits.append(True))
    adapter = TextualEditorAdapter(editor, hooks)

    adapter.handle_textual_key("ctrl+q")

    assert quits == [True]
    assert not editor.running


def test_adapter_resize_changes_viewport() -> None:
    editor = make_editor(b"abc")
    frames: List[Frame] = []
    adapter = TextualEditorAdapter(editor, TextualUIHooks(update_frame=frames.append))

    adapter.resize(12, 50)

    assert (editor.state.viewport.rows, editor.state.viewport.cols) == (10, 50)
    assert len(frames[-1].rows) == 10
    assert len(frames[-1].status) == 50


def test_adapter_emits_log_lines() -> None:
    editor = make_editor()
    logs: List[str] = []
    hooks = TextualUIHooks(update_frame=lambda frame: None, log=logs.append)
    adapter = TextualEditorAdapter(editor, hooks)

    adapter.handle_textual_key("down")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)


def test_open_editor_without_path_is_empty() -> None:
    editor = open_editor(None, screen_rows=8, screen_cols=30)

    assert editor.state.filename is None
    assert editor.state.store.row_count == 0


def test_open_editor_missing_file_opens_named_buffer(tmp_path: Path) -> None:
    path = str(tmp_path / "new.txt")

    editor = open_editor(path, screen_rows=8, screen_cols=30)

    assert editor.state.filename == path
    assert editor.state.store.row_count == 0


def test_open_editor_propagates_unreadable_path(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError) as info:
        open_editor(str(tmp_path), screen_rows=8, screen_cols=30)
    assert not info.value.missing


def test_app_exits_with_message_when_file_cannot_be_read(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    pytest.importorskip("textual")
    from kilo_engine.adapters.textual.app import KiloEngineApp

    calls: List[dict] = []
    app = KiloEngineApp(str(tmp_path))
    monkeypatch.setattr(app, "exit", lambda **kwargs: calls.append(kwargs))

    assert app._start_editor(10, 40) is None
    assert calls[0]["return_code"] == 1
    assert calls[0]["message"].startswith("kilo-engine: ")
    assert str(tmp_path) in calls[0]["message"]
