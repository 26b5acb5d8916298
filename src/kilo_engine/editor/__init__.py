"""Editor state and the top-level controller.

The controller lives in ``kilo_engine.editor.controller``; it is not imported
here because modes depend on ``EditorState``.
"""

from .state import RESERVED_LINES, EditorState

__all__ = ["EditorState", "RESERVED_LINES"]
