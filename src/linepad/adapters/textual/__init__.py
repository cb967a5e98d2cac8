"""Textual host for linepad.

Only the framework-free controller is imported here; the Textual ``App``
lives in ``linepad.adapters.textual.app``.
"""

from .controller import TextualEditorAdapter, TextualUIHooks

__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
