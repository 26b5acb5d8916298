"""Helpers shared by keymap-driven modes."""

from __future__ import annotations

from typing import Dict

from kilo_engine.input.keys import KeyEvent
from kilo_engine.keymaps import ActionRef, KeymapRegistry, KeymapResolver
from kilo_engine.runtime import telemetry

from .base_mode import ModeContext, ModeResult


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def require_keymap_registry(context: ModeContext) -> KeymapRegistry:
    registry = context.extras.get("keymap_registry")
    if not isinstance(registry, KeymapRegistry):
        raise RuntimeError("ModeContext.extras missing 'keymap_registry'")
    return registry


def flag_context(context: ModeContext) -> Dict[str, bool]:
    """Flags ``when`` clauses are evaluated against."""

    state = context.state
    return {
        "dirty": state.dirty,
        "named": state.filename is not None,
        "past_end": state.cursor.cy >= state.store.row_count,
    }


def execute_action(
    context: ModeContext, action: ActionRef, event: KeyEvent
) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"action": action.id, "key": event.token},
    ):
        outcome = action(context, event)
    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True, status=action.id)


__all__ = [
    "execute_action",
    "flag_context",
    "require_keymap_registry",
    "require_keymap_resolver",
]
