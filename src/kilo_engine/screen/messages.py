"""Transient message-bar text."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class StatusMessage:
    text: str = ""
    posted_at: float = 0.0

    def set(self, text: str, now: Optional[float] = None) -> None:
        self.text = text
        self.posted_at = time.monotonic() if now is None else now

    def clear(self) -> None:
        self.text = ""
        self.posted_at = 0.0

    def visible(self, now: float, timeout: float) -> str:
        if self.text and now - self.posted_at < timeout:
            return self.text
        return ""


__all__ = ["StatusMessage"]
