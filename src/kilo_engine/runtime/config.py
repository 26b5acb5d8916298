"""Editor tunables and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from kilo_engine import __version__

ENV_PREFIX = "KILO_ENGINE_"


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Fixed settings shared by the store, compositor, decoder and controller."""

    tab_stop: int = 8
    quit_times: int = 3
    message_timeout: float = 5.0
    read_timeout: float = 0.1
    filler: str = "~"
    status_name_width: int = 20
    version: str = __version__

    def __post_init__(self) -> None:
        if self.tab_stop < 1:
            raise ValueError("tab_stop must be at least 1")
        if self.quit_times < 0:
            raise ValueError("quit_times cannot be negative")
        if self.message_timeout < 0:
            raise ValueError("message_timeout cannot be negative")
        if self.read_timeout <= 0:
            raise ValueError("read_timeout must be positive")
        if len(self.filler) != 1:
            raise ValueError("filler must be a single character")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        """Build a config, overriding numeric fields from ``KILO_ENGINE_*``."""

        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        for item in fields(cls):
            raw = env.get(f"{ENV_PREFIX}{item.name.upper()}")
            if raw is None or item.name in {"version", "filler"}:
                continue
            caster = float if item.type in ("float", float) else int
            try:
                overrides[item.name] = caster(raw)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}{item.name.upper()} must be a number, got {raw!r}"
                ) from exc
        return replace(cls(), **overrides)


__all__ = ["EditorConfig"]
