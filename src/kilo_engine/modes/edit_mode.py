"""Normal editing mode: bound keys run actions, other bytes are inserted."""

from __future__ import annotations

from kilo_engine.input.keys import KeyEvent

from .base_mode import Mode, ModeContext, ModeResult
from .keymap_helpers import (
    execute_action,
    flag_context,
    require_keymap_registry,
    require_keymap_resolver,
)

INSERT_ACTION = "edit.insert_char"


class EditMode(Mode):
    name = "edit"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)
        self._registry = require_keymap_registry(context)

    def handle_key(self, event: KeyEvent) -> ModeResult:
        result = self._resolver.resolve(
            self.name, event.token, context=flag_context(self.context)
        )
        if result.status == "match" and result.match:
            outcome = execute_action(self.context, result.match.action, event)
        elif event.byte is not None:
            action = self._registry.get_action(INSERT_ACTION)
            outcome = execute_action(self.context, action, event)
        else:
            outcome = ModeResult(consumed=False, status="miss", message=event.token)

        # Any key other than the one that armed the countdown starts it over.
        if outcome.switch_to != "quit_confirm":
            self.state.reset_quit_counter()
        return outcome
