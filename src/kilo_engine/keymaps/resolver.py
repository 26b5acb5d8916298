"""Single-key lookup against the registry, indexed per mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Mapping, Optional

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


MISS = ResolutionResult(status="miss")


class KeymapResolver:
    """Finds the first binding (by id) for a token whose ``when`` clauses hold.

    The per-mode index is rebuilt whenever the registry revision moves.
    """

    def __init__(self, registry: KeymapRegistry) -> None:
        self._registry = registry
        self._indexes: Dict[str, Dict[str, List[Binding]]] = {}
        self._revision = -1

    def resolve(
        self,
        mode: str,
        token: str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        flags = context or {}
        for binding in self._index(mode).get(token, ()):
            if binding.allows(flags):
                action = self._registry.get_action(binding.action_id)
                return ResolutionResult(
                    status="match", match=ResolutionMatch(binding=binding, action=action)
                )
        return MISS

    def _index(self, mode: str) -> Dict[str, List[Binding]]:
        if self._revision != self._registry.revision():
            self._indexes.clear()
            self._revision = self._registry.revision()
        index = self._indexes.get(mode)
        if index is None:
            index = {}
            for binding in self._registry.iter_bindings(mode):
                index.setdefault(binding.key, []).append(binding)
            self._indexes[mode] = index
        return index


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
