"""Built-in key bindings for the edit and quit-confirmation modes."""

from __future__ import annotations

from .models import ActionRef, Binding, WhenClause
from .registry import KeymapRegistry


def default_actions() -> tuple[ActionRef, ...]:
    from kilo_engine.actions import commands, editing, motion

    return (
        ActionRef("edit.insert_char", editing.insert_char, "Insert the typed byte"),
        ActionRef("edit.newline", editing.newline, "Split the row at the cursor"),
        ActionRef("edit.backspace", editing.delete_backward, "Delete left"),
        ActionRef("edit.delete", editing.delete_forward, "Delete under the cursor"),
        ActionRef("move.arrow", motion.move_arrow, "Move one row or column"),
        ActionRef("move.page", motion.move_page, "Move one screenful"),
        ActionRef("move.home", motion.move_home, "Go to column 0"),
        ActionRef("move.end", motion.move_end, "Go to the end of the row"),
        ActionRef("file.save", commands.save, "Save, prompting for a name"),
        ActionRef("search.find", commands.find, "Incremental search"),
        ActionRef("editor.quit", commands.quit_editor, "Quit"),
        ActionRef(
            "editor.request_quit",
            commands.request_quit,
            "Warn about unsaved changes before quitting",
        ),
        ActionRef(
            "editor.confirm_quit",
            commands.confirm_quit,
            "Count down repeated quit presses",
        ),
        ActionRef("editor.noop", commands.noop, "Ignore the key"),
    )


def _edit(key: str, action_id: str, *when: str) -> Binding:
    suffix = "".join("." + w.replace("!", "not_") for w in when)
    return Binding(
        id=f"edit.{key}{suffix}",
        mode="edit",
        key=key,
        action_id=action_id,
        when=tuple(WhenClause.parse(w) for w in when),
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _edit("enter", "edit.newline"),
    _edit("backspace", "edit.backspace"),
    _edit("ctrl+h", "edit.backspace"),
    _edit("delete", "edit.delete"),
    _edit("up", "move.arrow"),
    _edit("down", "move.arrow"),
    _edit("left", "move.arrow"),
    _edit("right", "move.arrow"),
    _edit("page_up", "move.page"),
    _edit("page_down", "move.page"),
    _edit("home", "move.home"),
    _edit("end", "move.end"),
    _edit("ctrl+s", "file.save"),
    _edit("ctrl+f", "search.find"),
    _edit("ctrl+q", "editor.quit", "!dirty"),
    _edit("ctrl+q", "editor.request_quit", "dirty"),
    _edit("ctrl+l", "editor.noop"),
    _edit("escape", "editor.noop"),
    Binding(
        id="quit_confirm.ctrl+q",
        mode="quit_confirm",
        key="ctrl+q",
        action_id="editor.confirm_quit",
        description="Repeat quit to discard unsaved changes",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
) -> None:
    """Register the built-in actions and bindings."""

    for action in default_actions():
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=replace)


__all__ = ["DEFAULT_BINDINGS", "default_actions", "load_default_keymaps"]
