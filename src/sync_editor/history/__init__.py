"""Snapshot history, navigation guard, and debounced commit scheduling."""

from .coalescer import Clock, HistoryCoalescer, PendingCommit
from .guard import NavigationGuard
from .stack import HistoryStack

__all__ = [
    "Clock",
    "HistoryCoalescer",
    "HistoryStack",
    "NavigationGuard",
    "PendingCommit",
]
