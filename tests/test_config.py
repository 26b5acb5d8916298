from __future__ import annotations

import pytest

from kilo_engine import __version__
from kilo_engine.editor import EditorState
from kilo_engine.runtime.config import EditorConfig


def test_defaults() -> None:
    config = EditorConfig()

    assert config.tab_stop == 8
    assert config.quit_times == 3
    assert config.message_timeout == 5.0
    assert config.version == __version__


def test_from_env_overrides_numeric_fields() -> None:
    config = EditorConfig.from_env(
        {
            "KILO_ENGINE_TAB_STOP": "4",
            "KILO_ENGINE_MESSAGE_TIMEOUT": "2.5",
            "KILO_ENGINE_FILLER": "#",
            "UNRELATED": "1",
        }
    )

    assert config.tab_stop == 4
    assert config.message_timeout == 2.5
    assert config.filler == "~"


def test_from_env_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KILO_ENGINE_QUIT_TIMES", "1")

    assert EditorConfig.from_env().quit_times == 1


def test_from_env_rejects_bad_values() -> None:
    with pytest.raises(ValueError, match="KILO_ENGINE_TAB_STOP"):
        EditorConfig.from_env({"KILO_ENGINE_TAB_STOP": "wide"})
    with pytest.raises(ValueError):
        EditorConfig.from_env({"KILO_ENGINE_TAB_STOP": "0"})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tab_stop": 0},
        {"quit_times": -1},
        {"message_timeout": -1.0},
        {"read_timeout": 0},
        {"filler": "~~"},
    ],
)
def test_invalid_values_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        EditorConfig(**kwargs)


def test_tab_stop_reaches_rendering() -> None:
    state = EditorState.create(
        screen_rows=5, screen_cols=20, lines=[b"\tx"], config=EditorConfig(tab_stop=4)
    )

    assert state.store[0].rendered == b"    x"
