"""One-shot flag marking the next store change as an undo/redo restore."""

from __future__ import annotations


class NavigationGuard:
    def __init__(self) -> None:
        self._armed = False

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        self._armed = True

    def consume(self) -> bool:
        """Return whether the guard was armed, clearing it either way."""

        armed = self._armed
        self._armed = False
        return armed


__all__ = ["NavigationGuard"]
