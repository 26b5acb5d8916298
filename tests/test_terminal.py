from __future__ import annotations

import os
import termios

import pytest

from kilo_engine.errors import TerminalError
from kilo_engine.input import IterByteSource
from kilo_engine.io.terminal import (
    CURSOR_REPORT_QUERY,
    FdByteSource,
    RawMode,
    Terminal,
    cursor_position,
    raw_attributes,
)


def make_attributes() -> list:
    every_flag = 0xFFFFFFFF
    cc = [0] * termios.NCCS
    return [every_flag, every_flag, 0, every_flag, 38400, 38400, cc]


def test_raw_attributes_clear_cooked_flags() -> None:
    original = make_attributes()

    raw = raw_attributes(original)

    assert not raw[0] & (termios.ICRNL | termios.IXON | termios.BRKINT)
    assert not raw[1] & termios.OPOST
    assert raw[2] & termios.CS8
    assert not raw[3] & (termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN)
    assert raw[6][termios.VMIN] == 0
    assert raw[6][termios.VTIME] == 1
    # the caller's copy is left alone
    assert original[6][termios.VTIME] == 0
    assert original[0] == 0xFFFFFFFF


@pytest.mark.parametrize(
    "read_timeout, expected",
    [(0.5, 5), (0.01, 1), (0.25, 2), (100.0, 255)],
)
def test_raw_attributes_read_timeout_sets_vtime(
    read_timeout: float, expected: int
) -> None:
    raw = raw_attributes(make_attributes(), read_timeout=read_timeout)

    assert raw[6][termios.VTIME] == expected


def test_raw_mode_applies_read_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    applied = []
    monkeypatch.setattr(termios, "tcgetattr", lambda fd: make_attributes())
    monkeypatch.setattr(
        termios, "tcsetattr", lambda fd, when, attrs: applied.append(attrs)
    )
    terminal = Terminal(0, 1, read_timeout=0.8)

    with terminal.raw_mode:
        pass

    assert applied[0][6][termios.VTIME] == 8
    assert applied[-1][6][termios.VTIME] == 0


def test_fd_source_reads_bytes_then_times_out() -> None:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, b"q")
        os.close(write_fd)
        source = FdByteSource(read_fd)

        assert source.read_byte() == ord("q")
        assert source.read_byte() is None
    finally:
        os.close(read_fd)


def test_cursor_position_parses_report() -> None:
    read_fd, write_fd = os.pipe()
    try:
        row, col = cursor_position(IterByteSource(b"\x1b[24;80R"), write_fd)

        assert (row, col) == (24, 80)
        assert os.read(read_fd, 16) == CURSOR_REPORT_QUERY
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_cursor_position_rejects_garbage() -> None:
    read_fd, write_fd = os.pipe()
    try:
        with pytest.raises(TerminalError):
            cursor_position(IterByteSource(b"junk"), write_fd)
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_raw_mode_on_non_tty_raises() -> None:
    read_fd, write_fd = os.pipe()
    try:
        with pytest.raises(TerminalError):
            with RawMode(read_fd):
                pass
    finally:
        os.close(read_fd)
        os.close(write_fd)
