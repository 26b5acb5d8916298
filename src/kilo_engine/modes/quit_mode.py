"""Quit confirmation: repeated quit presses count down while unsaved."""

from __future__ import annotations

from kilo_engine.input.keys import KeyEvent

from .base_mode import Mode, ModeContext, ModeResult
from .keymap_helpers import execute_action, flag_context, require_keymap_resolver


class QuitConfirmMode(Mode):
    """Entered after the first quit press on a dirty document.

    Only a bound key (the quit key) is handled here. Anything else resets the
    countdown and is replayed in edit mode as if no quit had been requested.
    """

    name = "quit_confirm"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, event: KeyEvent) -> ModeResult:
        result = self._resolver.resolve(
            self.name, event.token, context=flag_context(self.context)
        )
        if result.status == "match" and result.match:
            return execute_action(self.context, result.match.action, event)

        self.state.reset_quit_counter()
        self.state.message.clear()
        return ModeResult(
            consumed=False, switch_to="edit", status="quit_reset", forward=True
        )
