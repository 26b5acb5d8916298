"""Viewport scrolling and frame composition."""

from .compositor import Frame, FrameSource, ScreenCompositor, cursor_to
from .messages import StatusMessage
from .viewport import Viewport, scroll

__all__ = [
    "Frame",
    "FrameSource",
    "ScreenCompositor",
    "StatusMessage",
    "Viewport",
    "cursor_to",
    "scroll",
]
