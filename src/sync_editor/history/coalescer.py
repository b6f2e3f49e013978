"""Debounced commit scheduling between the snapshot store and history."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from sync_editor.document.store import Snapshot, SnapshotStore
from sync_editor.runtime import telemetry

from .guard import NavigationGuard
from .stack import HistoryStack

Clock = Callable[[], float]


@dataclass
class PendingCommit:
    deadline: float
    generation: int


class HistoryCoalescer:
    """Turns bursts of store changes into single history commits.

    Each change (re)arms one pending commit ``debounce_ms`` in the future.
    The host calls ``process_timeouts`` from its event loop; an expired
    commit records whatever the store holds at that moment.
    """

    def __init__(
        self,
        store: SnapshotStore,
        history: HistoryStack,
        guard: NavigationGuard,
        *,
        debounce_ms: int = 500,
        clock: Clock = time.monotonic,
    ) -> None:
        if debounce_ms < 0:
            raise ValueError(f"debounce_ms must be >= 0, got {debounce_ms}")
        self.store = store
        self.history = history
        self.guard = guard
        self.debounce_ms = debounce_ms
        self._clock = clock
        self._pending: Optional[PendingCommit] = None
        self._timer_counter = 0
        self._closed = False
        store.subscribe(self._on_store_change)

    @property
    def pending(self) -> Optional[PendingCommit]:
        return self._pending

    @property
    def closed(self) -> bool:
        return self._closed

    def _on_store_change(self, snapshot: Snapshot) -> None:
        if self._closed:
            return
        if self.guard.consume():
            telemetry.record_event(
                "coalescer.guard_consumed", data={"store": self.store.name}
            )
            return
        self.schedule()

    def schedule(self) -> PendingCommit:
        """Replace any pending commit with one due a full window from now."""

        self._timer_counter += 1
        deadline = self._clock() + (self.debounce_ms / 1000.0)
        self._pending = PendingCommit(deadline=deadline, generation=self._timer_counter)
        telemetry.record_event(
            "coalescer.scheduled",
            data={"store": self.store.name, "generation": self._timer_counter},
        )
        return self._pending

    def cancel(self) -> None:
        if self._pending is None:
            return
        telemetry.record_event(
            "coalescer.cancelled",
            data={"store": self.store.name, "generation": self._pending.generation},
        )
        self._pending = None

    def process_timeouts(self) -> bool:
        """Fire the pending commit if its deadline has passed.

        Returns ``True`` when a new history entry was appended.
        """

        timer = self._pending
        if timer is None or timer.deadline > self._clock():
            return False
        return self._fire(timer)

    def flush(self) -> bool:
        """Fire the pending commit now, regardless of its deadline."""

        timer = self._pending
        if timer is None:
            return False
        return self._fire(timer)

    def close(self) -> None:
        """Drop any pending commit and stop listening to the store."""

        self.cancel()
        self.store.unsubscribe(self._on_store_change)
        self._closed = True

    def _fire(self, timer: PendingCommit) -> bool:
        self._pending = None
        with telemetry.span(
            "coalescer::commit",
            component="history",
            metadata={"store": self.store.name, "generation": timer.generation},
        ) as handle:
            committed = self.history.commit(self.store.current)
            handle.add_metadata("committed", committed)
        return committed


__all__ = ["Clock", "HistoryCoalescer", "PendingCommit"]
