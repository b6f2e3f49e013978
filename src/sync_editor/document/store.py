"""Snapshot store shared by both editor panels."""

from __future__ import annotations

from contextlib import suppress
from typing import Callable, List

from sync_editor.runtime.telemetry import record_event

Snapshot = str
SnapshotListener = Callable[[Snapshot], None]


class SnapshotStore:
    """Holds the current document snapshot and fans out changes.

    Listeners run synchronously in subscription order. Every ``set_content``
    call notifies, including one that repeats the current value.
    """

    def __init__(self, initial: Snapshot = "", *, name: str = "default") -> None:
        self.name = name
        self._current: Snapshot = initial
        self._listeners: List[SnapshotListener] = []
        self._version = 0

    @property
    def current(self) -> Snapshot:
        return self._current

    @property
    def version(self) -> int:
        return self._version

    def subscribe(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        with suppress(ValueError):
            self._listeners.remove(listener)

    def set_content(self, snapshot: Snapshot) -> None:
        self._current = snapshot
        self._version += 1
        record_event(
            "store.set_content",
            data={"store": self.name, "version": self._version, "size": len(snapshot)},
        )
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = ["Snapshot", "SnapshotListener", "SnapshotStore"]
