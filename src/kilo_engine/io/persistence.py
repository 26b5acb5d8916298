"""Loading a file into lines and writing the document back."""

from __future__ import annotations

import os
from typing import List

from kilo_engine.errors import PersistenceError
from kilo_engine.runtime import telemetry

FILE_MODE = 0o644


def split_lines(data: bytes) -> List[bytes]:
    """One entry per line with ``\\n`` / ``\\r\\n`` terminators stripped."""

    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return [line[:-1] if line.endswith(b"\r") else line for line in lines]


def load_lines(path: str) -> List[bytes]:
    with telemetry.span(
        "persistence::load", component="persistence", metadata={"path": path}
    ) as handle:
        try:
            with open(path, "rb") as handle_file:
                data = handle_file.read()
        except OSError as exc:
            raise PersistenceError(path, exc) from exc
        lines = split_lines(data)
        handle.add_metadata("lines", len(lines))
        return lines


def save_buffer(path: str, data: bytes) -> int:
    """Write ``data`` to ``path`` (created or truncated); return bytes written."""

    with telemetry.span(
        "persistence::save",
        component="persistence",
        metadata={"path": path, "bytes": len(data)},
    ):
        try:
            fd = os.open(path, os.O_RDWR | os.O_CREAT, FILE_MODE)
            try:
                os.ftruncate(fd, len(data))
                written = 0
                view = memoryview(data)
                while written < len(data):
                    written += os.write(fd, view[written:])
            finally:
                os.close(fd)
        except OSError as exc:
            raise PersistenceError(path, exc) from exc
        return written


__all__ = ["FILE_MODE", "load_lines", "save_buffer", "split_lines"]
