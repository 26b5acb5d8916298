from __future__ import annotations

from pathlib import Path

import pytest

from kilo_engine.buffer import RowStore
from kilo_engine.errors import PersistenceError
from kilo_engine.io.persistence import load_lines, save_buffer, split_lines


def test_split_lines_strips_terminators() -> None:
    assert split_lines(b"a\nb\r\nc") == [b"a", b"b", b"c"]
    assert split_lines(b"a\n\n") == [b"a", b""]
    assert split_lines(b"") == []


def test_load_lines(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_bytes(b"first\r\n\tsecond\n")

    assert load_lines(str(path)) == [b"first", b"\tsecond"]


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError) as info:
        load_lines(str(tmp_path / "nope.txt"))

    assert info.value.missing
    assert info.value.reason == "No such file or directory"


def test_save_truncates_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_bytes(b"a much longer previous body\n")

    written = save_buffer(str(path), b"short\n")

    assert written == 6
    assert path.read_bytes() == b"short\n"


def test_save_into_missing_directory_fails(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError) as info:
        save_buffer(str(tmp_path / "missing" / "doc.txt"), b"x")

    assert info.value.path.endswith("doc.txt")
    assert isinstance(info.value.cause, FileNotFoundError)


def test_load_then_save_reproduces_file(tmp_path: Path) -> None:
    source = tmp_path / "source.txt"
    source.write_bytes(b"alpha\n\tbeta\n\ngamma \n")
    copy = tmp_path / "copy.txt"

    store = RowStore.from_lines(load_lines(str(source)))
    save_buffer(str(copy), store.to_buffer())

    assert copy.read_bytes() == source.read_bytes()
    assert store.dirty == 0
