"""Owns the active mode and routes decoded keys to it."""

from __future__ import annotations

from typing import Dict, Optional, Type

from kilo_engine.input.keys import KeyEvent
from kilo_engine.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from kilo_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class ModeManager:
    """Mode table plus the transition rules carried by ``ModeResult``.

    A result with ``switch_to`` changes the active mode; with ``forward`` the
    same key is then handed to the new mode once.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name="kilo_engine.keymaps")
            load_default_keymaps(keymap_registry)
        self.keymap_registry = keymap_registry
        self.keymap_resolver = keymap_resolver or KeymapResolver(keymap_registry)
        context.extras.setdefault("keymap_registry", self.keymap_registry)
        context.extras.setdefault("keymap_resolver", self.keymap_resolver)

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self._active) if self._active else None

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        """Instantiate ``mode_cls``; the first registered mode becomes active."""

        mode = mode_cls(self.context)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        target = self._modes.get(name)
        if target is None:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous is target:
            return
        if previous is not None:
            previous.on_exit(name)
        self._active = name
        target.on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", level="debug", data={"mode": name})

    def handle_key(self, event: KeyEvent) -> ModeResult:
        result = self._dispatch(event)
        if not result.switch_to:
            return result
        self.switch_mode(result.switch_to)
        if not result.forward:
            return result
        forwarded = self._dispatch(event)
        if forwarded.switch_to:
            self.switch_mode(forwarded.switch_to)
        return forwarded

    def _dispatch(self, event: KeyEvent) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": event.token, "mode": mode.name},
        ):
            return mode.handle_key(event)
