"""Editor modes and their shared dispatch plumbing."""

from .base_mode import Mode, ModeBus, ModeContext, ModeResult
from .edit_mode import EditMode
from .prompt_mode import PromptMode, PromptRequest, open_prompt
from .quit_mode import QuitConfirmMode

__all__ = [
    "EditMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "PromptMode",
    "PromptRequest",
    "QuitConfirmMode",
    "open_prompt",
]
