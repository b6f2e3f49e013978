"""Linear snapshot history with a navigable cursor."""

from __future__ import annotations

from typing import List, Optional, Tuple

from sync_editor.document.store import Snapshot
from sync_editor.runtime.telemetry import record_event


class HistoryStack:
    """Snapshots in commit order plus the index of the displayed one.

    Seeded with one entry, so ``entries[cursor]`` is always defined. Boundary
    conditions (nothing to step to, duplicate commit) are no-ops.
    """

    def __init__(self, seed: Snapshot, *, name: str = "default") -> None:
        self.name = name
        self._entries: List[Snapshot] = [seed]
        self._cursor: int = 0

    @property
    def entries(self) -> Tuple[Snapshot, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Snapshot:
        return self._entries[self._cursor]

    def __len__(self) -> int:
        return len(self._entries)

    def commit(self, snapshot: Snapshot) -> bool:
        """Append ``snapshot`` after the cursor, dropping any redo entries.

        Returns ``False`` without touching the stack when ``snapshot`` equals
        the entry under the cursor.
        """

        if snapshot == self._entries[self._cursor]:
            record_event(
                "history.commit_skipped",
                data={"history": self.name, "cursor": self._cursor},
            )
            return False
        dropped = len(self._entries) - 1 - self._cursor
        if dropped:
            del self._entries[self._cursor + 1 :]
        self._entries.append(snapshot)
        self._cursor = len(self._entries) - 1
        record_event(
            "history.commit",
            data={
                "history": self.name,
                "cursor": self._cursor,
                "length": len(self._entries),
                "dropped_redo": dropped,
            },
        )
        return True

    def can_step_back(self) -> bool:
        return self._cursor > 0

    def can_step_forward(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def step_back(self) -> Optional[Snapshot]:
        if not self.can_step_back():
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def step_forward(self) -> Optional[Snapshot]:
        if not self.can_step_forward():
            return None
        self._cursor += 1
        return self._entries[self._cursor]


__all__ = ["HistoryStack"]
