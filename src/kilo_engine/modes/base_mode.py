"""Base classes and shared plumbing for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from kilo_engine.editor.state import EditorState
from kilo_engine.input.keys import KeyEvent


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``.

    ``forward`` asks the manager to hand the same key to the mode named by
    ``switch_to`` once the switch is done.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    forward: bool = False


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can reach."""

    state: EditorState
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def state(self) -> EditorState:
        return self.context.state

    def on_enter(self, previous: Optional[str]) -> None:  # pragma: no cover
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover
        del next_mode

    def handle_key(self, event: KeyEvent) -> ModeResult:  # pragma: no cover
        raise NotImplementedError
