"""Minimal Textual adapter that wires an EditorSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from sync_editor.document import Snapshot
from sync_editor.export import Clipboard, copy_html, copy_rich_text
from sync_editor.session import EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualEditorHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[Snapshot], None]
    update_history: Callable[[bool, bool], None] = _noop
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges EditorSession changes to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualEditorHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.session.store.subscribe(self._on_store_change)
        self._on_store_change(self.session.current_snapshot())
        self._refresh_history()

    def handle_host_edit(self, text: str) -> bool:
        """Feed panel text into the session.

        Echoes of the current snapshot (a panel re-rendering what it was just
        given) are dropped and reported as ``False``.
        """

        if text == self.session.current_snapshot():
            return False
        self._log_state("edit ->", size=len(text))
        self.session.on_content_change(text)
        return True

    def undo(self) -> Optional[Snapshot]:
        restored = self.session.undo()
        self._after_navigation("undo", restored)
        return restored

    def redo(self) -> Optional[Snapshot]:
        restored = self.session.redo()
        self._after_navigation("redo", restored)
        return restored

    def process_timeouts(self) -> bool:
        """Forward expired debounce timers and refresh the undo affordance."""

        committed = self.session.process_timeouts()
        if committed:
            self._refresh_history()
            self._log_state("commit <-")
        return committed

    def copy_html(self, clipboard: Clipboard) -> bool:
        copied = copy_html(clipboard, self.session.current_snapshot())
        self.hooks.update_status("Copied!" if copied else "Copy failed")
        return copied

    def copy_rich_text(self, clipboard: Clipboard) -> bool:
        copied = copy_rich_text(clipboard, self.session.current_snapshot())
        self.hooks.update_status("Copied!" if copied else "Copy failed")
        return copied

    def close(self) -> None:
        self.session.store.unsubscribe(self._on_store_change)
        self.session.close()
        self._log_state("closed <-")

    def _after_navigation(self, action: str, restored: Optional[Snapshot]) -> None:
        if restored is None:
            self.hooks.update_status(f"nothing to {action}")
        self._refresh_history()
        self._log_state(f"{action} <-", restored=restored is not None)

    def _on_store_change(self, snapshot: Snapshot) -> None:
        self.hooks.update_document(snapshot)

    def _refresh_history(self) -> None:
        self.hooks.update_history(self.session.can_undo(), self.session.can_redo())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        history = self.session.history
        return {
            "session": self.session.name,
            "cursor": history.cursor,
            "entries": len(history),
            "pending_commit": self.session.coalescer.pending is not None,
            "store_version": self.session.store.version,
        }


__all__ = ["TextualEditorAdapter", "TextualEditorHooks"]
