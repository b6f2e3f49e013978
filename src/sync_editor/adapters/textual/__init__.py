"""Textual host for the synchronized editor."""

from .controller import TextualEditorAdapter, TextualEditorHooks
from .render import render_markup

__all__ = ["TextualEditorAdapter", "TextualEditorHooks", "render_markup"]
