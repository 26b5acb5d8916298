"""Exception types raised at the engine's outer boundaries."""

from __future__ import annotations

from typing import Optional


class EditorError(RuntimeError):
    """Base class for failures the editor reports to its host."""


class TerminalError(EditorError):
    """Raised when raw mode or a terminal size query cannot be completed."""

    def __init__(self, operation: str, *, cause: Optional[BaseException] = None):
        message = operation if cause is None else f"{operation}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.cause = cause


class PersistenceError(EditorError):
    """Raised when a document cannot be read from or written to ``path``."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"{path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause

    @property
    def reason(self) -> str:
        return self.cause.strerror or str(self.cause)

    @property
    def missing(self) -> bool:
        return isinstance(self.cause, FileNotFoundError)


__all__ = ["EditorError", "TerminalError", "PersistenceError"]
