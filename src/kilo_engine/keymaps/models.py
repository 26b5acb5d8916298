"""Key bindings and the editor actions they name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from kilo_engine.input.keys import KeyEvent

Handler = Callable[..., object]


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Editor flag a binding depends on: ``dirty`` or ``!dirty``."""

    flag: str
    expected: bool = True

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        text = expression.strip()
        negated = text.startswith("!")
        flag = text[1:] if negated else text
        if not flag:
            raise ValueError(f"empty when clause: {expression!r}")
        return cls(flag, not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) is self.expected

    def contradicts(self, other: "WhenClause") -> bool:
        return self.flag == other.flag and self.expected is not other.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named handler taking ``(context, event)``."""

    id: str
    handler: Handler
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for {self.id!r} is not callable")

    def __call__(self, context: object, event: KeyEvent) -> object:
        return self.handler(context, event)


@dataclass(frozen=True, slots=True)
class Binding:
    """One key token in one mode mapped to an action id."""

    id: str
    mode: str
    key: str
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()

    def __post_init__(self) -> None:
        for name in ("id", "mode", "key", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        object.__setattr__(self, "key", self.key.strip().lower())
        object.__setattr__(
            self,
            "when",
            tuple(
                clause if isinstance(clause, WhenClause) else WhenClause.parse(clause)
                for clause in self.when
            ),
        )

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)

    def excludes(self, other: "Binding") -> bool:
        """True when no flag state can satisfy both bindings at once."""

        return any(
            mine.contradicts(theirs) for mine in self.when for theirs in other.when
        )


__all__ = ["ActionRef", "Binding", "WhenClause"]
