"""Textual host adapter; the app itself lives in ``.app``."""

from .controller import TextualEditorAdapter, TextualUIHooks, open_editor, translate_key

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "open_editor", "translate_key"]
