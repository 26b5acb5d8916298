"""Single-line prompt captured in the message bar (search, save-as)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from kilo_engine.input.keys import Key, KeyEvent, ctrl_key

from .base_mode import Mode, ModeContext, ModeResult

KeyCallback = Callable[[bytes, KeyEvent], object]
DoneCallback = Callable[[Optional[bytes]], object]

CTRL_H = ctrl_key("h")


@dataclass(slots=True)
class PromptRequest:
    """What to show and whom to notify.

    ``template`` contains one ``{}`` where the typed input is substituted.
    ``on_key`` runs after every keystroke; ``on_done`` receives the input on
    Enter, or ``None`` when the prompt is cancelled with Escape.
    """

    template: str
    on_done: DoneCallback
    on_key: Optional[KeyCallback] = None
    return_to: str = "edit"


def open_prompt(context: ModeContext, request: PromptRequest) -> ModeResult:
    context.extras["prompt_request"] = request
    return ModeResult(consumed=True, switch_to="prompt", status="prompt_open")


class PromptMode(Mode):
    name = "prompt"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._request: Optional[PromptRequest] = None
        self._typed = bytearray()

    @property
    def text(self) -> bytes:
        return bytes(self._typed)

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        request = self.context.extras.pop("prompt_request", None)
        if not isinstance(request, PromptRequest):
            raise RuntimeError("prompt mode entered without a PromptRequest")
        self._request = request
        self._typed.clear()
        self._show()

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self._request = None
        self._typed.clear()

    def handle_key(self, event: KeyEvent) -> ModeResult:
        request = self._request
        if request is None:
            return ModeResult(consumed=False, switch_to="edit", status="prompt_idle")

        if event.is_key(Key.BACKSPACE) or event.is_key(Key.DELETE) or event.byte == CTRL_H:
            if self._typed:
                self._typed.pop()
        elif event.is_key(Key.ESCAPE):
            return self._finish(request, event, None)
        elif event.is_key(Key.ENTER):
            if self._typed:
                return self._finish(request, event, self.text)
        elif event.byte is not None and event.byte < 128 and not event.is_control:
            self._typed.append(event.byte)

        if request.on_key is not None:
            request.on_key(self.text, event)
        self._show()
        return ModeResult(consumed=True, status="prompt_edit")

    def _finish(
        self, request: PromptRequest, event: KeyEvent, value: Optional[bytes]
    ) -> ModeResult:
        self.state.message.clear()
        if request.on_key is not None:
            request.on_key(self.text, event)
        request.on_done(value)
        status = "prompt_cancel" if value is None else "prompt_submit"
        return ModeResult(consumed=True, switch_to=request.return_to, status=status)

    def _show(self) -> None:
        if self._request is not None:
            shown = self.text.decode("utf-8", errors="replace")
            self.state.set_message(self._request.template.format(shown))
