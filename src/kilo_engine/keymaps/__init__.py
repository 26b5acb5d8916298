"""Key binding registry and the built-in dispatch table."""

from .models import ActionRef, Binding, WhenClause
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import DEFAULT_BINDINGS, default_actions, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "DEFAULT_BINDINGS",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
    "WhenClause",
    "default_actions",
    "load_default_keymaps",
]
