"""Headless undo/redo core for a two-panel HTML and rich text editor."""

__all__ = [
    "adapters",
    "document",
    "export",
    "history",
    "runtime",
    "session",
]

__version__ = "0.1.0"
