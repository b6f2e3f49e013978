"""Editor session wiring the store, history, guard, and coalescer together."""

from __future__ import annotations

import time
from typing import Callable, Optional

from sync_editor.document import DEFAULT_DOCUMENT, Snapshot, SnapshotStore
from sync_editor.history import Clock, HistoryCoalescer, HistoryStack, NavigationGuard
from sync_editor.runtime import telemetry
from sync_editor.runtime.settings import EditorSettings


class EditorSession:
    """Control surface shared by the rich text and HTML panels.

    Panels report edits through ``on_content_change`` and render
    ``current_snapshot()``. ``undo``/``redo`` return the restored snapshot,
    or ``None`` when there is nothing to step to.
    """

    def __init__(
        self,
        initial: Snapshot = DEFAULT_DOCUMENT,
        *,
        name: str = "default",
        debounce_ms: int = 500,
        clock: Clock = time.monotonic,
    ) -> None:
        self.name = name
        self.store = SnapshotStore(initial, name=name)
        self._history = HistoryStack(initial, name=name)
        self.guard = NavigationGuard()
        self.coalescer = HistoryCoalescer(
            self.store,
            self._history,
            self.guard,
            debounce_ms=debounce_ms,
            clock=clock,
        )

    @classmethod
    def from_settings(
        cls, settings: EditorSettings, *, clock: Clock = time.monotonic
    ) -> "EditorSession":
        return cls(
            settings.initial_document,
            name=settings.name,
            debounce_ms=settings.debounce_ms,
            clock=clock,
        )

    @property
    def history(self) -> HistoryStack:
        return self._history

    def on_content_change(self, snapshot: Snapshot) -> None:
        self.store.set_content(snapshot)

    def current_snapshot(self) -> Snapshot:
        return self.store.current

    def can_undo(self) -> bool:
        return self._history.can_step_back()

    def can_redo(self) -> bool:
        return self._history.can_step_forward()

    def undo(self) -> Optional[Snapshot]:
        if not self.can_undo():
            return None
        with telemetry.span(
            "session::undo", component="history", metadata={"session": self.name}
        ):
            restored = self._navigate(self._history.step_back)
        telemetry.record_event(
            "history.undo", data={"session": self.name, "cursor": self._history.cursor}
        )
        return restored

    def redo(self) -> Optional[Snapshot]:
        if not self.can_redo():
            return None
        with telemetry.span(
            "session::redo", component="history", metadata={"session": self.name}
        ):
            restored = self._navigate(self._history.step_forward)
        telemetry.record_event(
            "history.redo", data={"session": self.name, "cursor": self._history.cursor}
        )
        return restored

    def _navigate(self, step: Callable[[], Optional[Snapshot]]) -> Snapshot:
        # A commit still pending would otherwise fire against the restored value.
        self.coalescer.cancel()
        self.guard.arm()
        restored = step()
        assert restored is not None
        self.store.set_content(restored)
        return restored

    def process_timeouts(self) -> bool:
        return self.coalescer.process_timeouts()

    def flush(self) -> bool:
        return self.coalescer.flush()

    def close(self) -> None:
        self.coalescer.close()


__all__ = ["EditorSession"]
