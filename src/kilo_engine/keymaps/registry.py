"""Action and binding tables consulted by the keymap-driven modes."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from kilo_engine.runtime.telemetry import span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """A binding would fire on the same key and flags as an existing one."""

    def __init__(self, binding: Binding, conflicts: List[Binding]):
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts]}"
        )
        self.binding = binding
        self.conflicts = tuple(conflicts)


class KeymapRegistry:
    """Actions by id and bindings grouped per ``(mode, key)``.

    Every change to the bindings bumps ``revision()`` so resolvers can drop
    their cached indexes.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._slots: Dict[tuple[str, str], Dict[str, Binding]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it collides with."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            if not replace:
                if any(binding.id in slot for slot in self._slots.values()):
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                conflicts = self.detect_conflicts(binding)
                if conflicts:
                    handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                    raise KeymapConflictError(binding, conflicts)
            else:
                self._evict(binding)

            slot = self._slots.setdefault((binding.mode, binding.key), {})
            slot[binding.id] = binding
            self._revision += 1
            return binding

    def iter_bindings(
        self, mode: Optional[str] = None, key: Optional[str] = None
    ) -> Iterator[Binding]:
        """Bindings filtered by mode and key, ordered by id within each slot."""

        for (slot_mode, slot_key), slot in sorted(self._slots.items()):
            if mode is not None and slot_mode != mode:
                continue
            if key is not None and slot_key != key:
                continue
            for binding_id in sorted(slot):
                yield slot[binding_id]

    def detect_conflicts(self, binding: Binding) -> List[Binding]:
        slot = self._slots.get((binding.mode, binding.key), {})
        return [
            existing
            for existing in slot.values()
            if existing.id != binding.id and not binding.excludes(existing)
        ]

    def _evict(self, binding: Binding) -> None:
        stale = {b.id for b in self.detect_conflicts(binding)} | {binding.id}
        for slot_id, slot in list(self._slots.items()):
            for binding_id in slot.keys() & stale:
                del slot[binding_id]
            if not slot:
                del self._slots[slot_id]


__all__ = ["KeymapConflictError", "KeymapRegistry"]
